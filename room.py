from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

import messages
from channel import Channel, safe_close, safe_send
from constants import CLOSE_REPLACED
from logging_config import get_logger

logger = get_logger(__name__)


class Role(str, Enum):
    UNCLASSIFIED = "unclassified"
    HOST = "host"
    CLIENT = "client"


@dataclass(eq=False)
class PeerConnection:
    """One accepted channel and the role the router has given it."""

    channel: Channel
    role: Role = Role.UNCLASSIFIED
    client_id: Optional[str] = None

    @property
    def label(self) -> str:
        if self.role is Role.CLIENT:
            return f"client {self.client_id}"
        return self.role.value


@dataclass
class Room:
    """Membership of the signaling room: one host slot and the live clients.

    Every method is synchronous and O(1); removals with a peer that is no
    longer the current holder do nothing.
    """

    host: Optional[PeerConnection] = None
    clients: Dict[str, PeerConnection] = field(default_factory=dict)

    @property
    def has_host(self) -> bool:
        return self.host is not None

    def get_host(self) -> Optional[PeerConnection]:
        return self.host

    def set_host(self, peer: PeerConnection) -> None:
        current = self.host
        if current is not None and current is not peer:
            logger.warning("Replacing connected host with a newly registered one")
            self._kick(current, messages.ERR_HOST_REPLACED, "host replaced")
            self.host = None
        self.host = peer

    def remove_host(self, peer: PeerConnection) -> bool:
        if self.host is not peer:
            return False
        self.host = None
        return True

    def get_client(self, client_id: str) -> Optional[PeerConnection]:
        return self.clients.get(client_id)

    def set_client(self, client_id: str, peer: PeerConnection) -> None:
        current = self.clients.get(client_id)
        if current is not None and current is not peer:
            logger.warning(f"Client id {client_id} collided with a live channel, replacing it")
            self._kick(current, messages.ERR_CLIENT_REPLACED, "client id replaced")
            del self.clients[client_id]
        self.clients[client_id] = peer

    def remove_client(self, client_id: str, peer: PeerConnection) -> bool:
        if self.clients.get(client_id) is not peer:
            return False
        del self.clients[client_id]
        return True

    def list_client_ids(self) -> list[str]:
        return list(self.clients.keys())

    def status(self) -> dict:
        return {"ok": True, "hostConnected": self.has_host, "clients": self.list_client_ids()}

    def close_all(self, code: int, reason: str) -> None:
        peers = list(self.clients.values())
        if self.host is not None:
            peers.append(self.host)
        self.host = None
        self.clients.clear()
        for peer in peers:
            safe_close(peer.channel, code, reason)
        if peers:
            logger.info(f"Closed {len(peers)} signaling channel(s): {reason}")

    @staticmethod
    def _kick(peer: PeerConnection, error_code: str, reason: str) -> None:
        # Notify first; a dead channel must not stop the close.
        safe_send(peer.channel, messages.encode(messages.error(error_code)))
        safe_close(peer.channel, CLOSE_REPLACED, reason)
