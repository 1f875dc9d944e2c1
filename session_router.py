import random
from typing import Callable, Optional

import messages
from channel import Channel, safe_send
from constants import CLIENT_ID_ALPHABET, CLIENT_ID_LENGTH
from disconnect import handle_disconnect
from logging_config import get_logger
from room import PeerConnection, Role, Room

logger = get_logger(__name__)


def generate_client_id(length: int = CLIENT_ID_LENGTH) -> str:
    return ''.join(random.choices(CLIENT_ID_ALPHABET, k=length))


def _target_client_id(value) -> str:
    # Coerce the way browsers stringify JSON values.
    if not value:
        return ""
    if value is True:
        return "true"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


class SessionRouter:
    """Classifies channels as host or client and relays signaling between them.

    The transport calls ``connect`` once per accepted channel, ``handle_frame``
    for every inbound text frame in arrival order, and ``disconnect`` once the
    channel is closed or errored. None of these await or raise.
    """

    def __init__(self, room: Room, id_factory: Optional[Callable[[], str]] = None):
        self.room = room
        self._id_factory = id_factory or generate_client_id

    def connect(self, channel: Channel) -> PeerConnection:
        return PeerConnection(channel=channel)

    def disconnect(self, peer: PeerConnection) -> None:
        handle_disconnect(self.room, peer)

    def status(self) -> dict:
        return self.room.status()

    def handle_frame(self, peer: PeerConnection, data) -> None:
        if peer.channel.closed:
            # Replaced peers can still have frames in flight.
            logger.debug(f"Dropping frame from closed {peer.label} channel")
            return

        msg = messages.decode_frame(data)
        if msg is None:
            logger.debug(f"Dropping malformed frame from {peer.label}")
            return

        msg_type = msg["type"]
        if msg_type == messages.REGISTER_HOST:
            self._register_host(peer)
        elif msg_type == messages.CLIENT_HELLO:
            self._client_hello(peer)
        elif msg_type in messages.SIGNAL_TYPES:
            self._signal(peer, msg)
        else:
            logger.debug(f"Ignoring unknown message type {msg_type!r} from {peer.label}")

    def _reply(self, peer: PeerConnection, msg: dict) -> None:
        safe_send(peer.channel, messages.encode(msg))

    def _register_host(self, peer: PeerConnection) -> None:
        if peer.role is Role.CLIENT:
            logger.debug(f"Ignoring register-host from {peer.label}")
            return

        if peer.role is Role.UNCLASSIFIED:
            peer.role = Role.HOST
            self.room.set_host(peer)
            logger.info(f"Host registered with {len(self.room.clients)} client(s) waiting")

        self._reply(peer, messages.host_registered(self.room.list_client_ids()))

    def _client_hello(self, peer: PeerConnection) -> None:
        if peer.role is Role.HOST:
            logger.debug("Ignoring client-hello from host")
            return

        if peer.role is Role.CLIENT:
            self._reply(peer, messages.client_welcome(peer.client_id, self.room.has_host))
            return

        client_id = self._id_factory()
        peer.role = Role.CLIENT
        peer.client_id = client_id
        self.room.set_client(client_id, peer)
        logger.info(f"Client {client_id} joined (host present: {self.room.has_host})")

        self._reply(peer, messages.client_welcome(client_id, self.room.has_host))
        host = self.room.get_host()
        if host is not None:
            safe_send(host.channel, messages.encode(messages.client_connected(client_id)))

    def _signal(self, peer: PeerConnection, msg: dict) -> None:
        if peer.role is Role.UNCLASSIFIED:
            self._reply(peer, messages.error(messages.ERR_NOT_REGISTERED))
            return

        if peer.role is Role.CLIENT:
            host = self.room.get_host()
            if host is None:
                self._reply(peer, messages.error(messages.ERR_NO_HOST))
                return
            out = messages.forwarded(msg, peer.client_id, messages.FROM_CLIENT)
            safe_send(host.channel, messages.encode(out))
            logger.debug(f"Relayed {msg['type']} from client {peer.client_id} to host")
            return

        client_id = _target_client_id(msg.get("clientId"))
        if not client_id:
            self._reply(peer, messages.error(messages.ERR_MISSING_CLIENT_ID))
            return
        target = self.room.get_client(client_id)
        if target is None:
            logger.debug(f"Host addressed unknown client {client_id}")
            self._reply(peer, messages.error(messages.ERR_UNKNOWN_CLIENT))
            return
        out = messages.forwarded(msg, client_id, messages.FROM_HOST)
        safe_send(target.channel, messages.encode(out))
        logger.debug(f"Relayed {msg['type']} from host to client {client_id}")
