import messages
from channel import safe_send
from logging_config import get_logger
from room import PeerConnection, Role, Room

logger = get_logger(__name__)


def handle_disconnect(room: Room, peer: PeerConnection) -> None:
    """Drop a closed (or failed) channel from the room and tell the other side.

    Peers that were already superseded by a replacement are ignored so that a
    late close can never evict the newer binding.
    """
    if peer.role is Role.HOST:
        if not room.remove_host(peer):
            logger.debug("Ignoring close of a superseded host channel")
            return
        notice = messages.encode(messages.host_disconnected())
        notified = 0
        for client in list(room.clients.values()):
            if safe_send(client.channel, notice):
                notified += 1
        logger.info(f"Host disconnected, notified {notified}/{len(room.clients)} client(s)")

    elif peer.role is Role.CLIENT and peer.client_id:
        if not room.remove_client(peer.client_id, peer):
            logger.debug(f"Ignoring close of superseded channel for client {peer.client_id}")
            return
        logger.info(f"Client {peer.client_id} disconnected ({len(room.clients)} remaining)")
        host = room.get_host()
        if host is not None:
            safe_send(host.channel, messages.encode(messages.client_disconnected(peer.client_id)))

    else:
        logger.debug("Unclassified channel closed")
