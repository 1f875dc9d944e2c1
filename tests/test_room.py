from helpers import FakeChannel

from room import PeerConnection, Role, Room


def make_peer(role=Role.UNCLASSIFIED, client_id=None):
    return PeerConnection(channel=FakeChannel(), role=role, client_id=client_id)


def test_new_room_is_empty() -> None:
    room = Room()
    assert room.get_host() is None
    assert not room.has_host
    assert room.list_client_ids() == []
    assert room.status() == {"ok": True, "hostConnected": False, "clients": []}


def test_set_host_replaces_and_kicks_previous_host() -> None:
    room = Room()
    old, new = make_peer(Role.HOST), make_peer(Role.HOST)

    room.set_host(old)
    room.set_host(new)

    assert room.get_host() is new
    assert old.channel.sent == [{"type": "error", "error": "host-replaced"}]
    assert old.channel.close_code == 1011
    assert old.channel.close_reason == "host replaced"
    assert not new.channel.closed


def test_set_host_with_same_peer_is_noop() -> None:
    room = Room()
    peer = make_peer(Role.HOST)
    room.set_host(peer)
    room.set_host(peer)
    assert room.get_host() is peer
    assert peer.channel.sent == []
    assert not peer.channel.closed


def test_kick_still_closes_when_notification_fails() -> None:
    room = Room()
    old, new = make_peer(Role.HOST), make_peer(Role.HOST)
    room.set_host(old)
    old.channel.broken = True

    room.set_host(new)

    assert old.channel.closed
    assert old.channel.close_reason == "host replaced"
    assert room.get_host() is new


def test_remove_host_ignores_stale_peer() -> None:
    room = Room()
    old, new = make_peer(Role.HOST), make_peer(Role.HOST)
    room.set_host(old)
    room.set_host(new)

    assert room.remove_host(old) is False
    assert room.get_host() is new
    assert room.remove_host(new) is True
    assert room.get_host() is None


def test_set_client_collision_kicks_prior_holder() -> None:
    room = Room()
    first = make_peer(Role.CLIENT, "abc")
    second = make_peer(Role.CLIENT, "abc")

    room.set_client("abc", first)
    room.set_client("abc", second)

    assert room.get_client("abc") is second
    assert first.channel.sent == [{"type": "error", "error": "client-replaced"}]
    assert first.channel.close_code == 1011
    assert first.channel.close_reason == "client id replaced"
    assert room.list_client_ids() == ["abc"]


def test_remove_client_only_for_current_holder() -> None:
    room = Room()
    first = make_peer(Role.CLIENT, "abc")
    second = make_peer(Role.CLIENT, "abc")
    room.set_client("abc", first)
    room.set_client("abc", second)

    assert room.remove_client("abc", first) is False
    assert room.get_client("abc") is second
    assert room.remove_client("abc", second) is True
    assert room.get_client("abc") is None
    assert room.remove_client("missing", second) is False


def test_list_client_ids_is_a_snapshot() -> None:
    room = Room()
    room.set_client("a", make_peer(Role.CLIENT, "a"))
    ids = room.list_client_ids()
    room.set_client("b", make_peer(Role.CLIENT, "b"))
    assert ids == ["a"]
    assert room.list_client_ids() == ["a", "b"]


def test_close_all_closes_every_channel_and_empties_room() -> None:
    room = Room()
    host = make_peer(Role.HOST)
    client = make_peer(Role.CLIENT, "a")
    room.set_host(host)
    room.set_client("a", client)

    room.close_all(1001, "server shutting down")

    assert host.channel.close_code == 1001
    assert client.channel.close_reason == "server shutting down"
    assert room.status() == {"ok": True, "hostConnected": False, "clients": []}
