"""WebSocket-backed signaling channel.

The session router is synchronous: it never awaits a socket write. Each
channel therefore owns an outbox that ``send`` and ``close`` append to, and a
writer task (``pump``) started by the endpoint drains it onto the socket in
order.
"""
import asyncio
from dataclasses import dataclass
from typing import Optional, Protocol

from fastapi import WebSocket

from logging_config import get_logger

logger = get_logger(__name__)


class ChannelClosedError(ConnectionError):
    """Raised when sending on a channel that is closed or broken."""


class Channel(Protocol):
    """What the router needs from a transport connection."""

    @property
    def closed(self) -> bool: ...

    def send(self, text: str) -> None: ...

    def close(self, code: int = 1000, reason: str = "") -> None: ...


def safe_send(channel: Channel, text: str) -> bool:
    """Fire-and-forget send. Failures are logged and dropped, never retried."""
    try:
        channel.send(text)
        return True
    except Exception as e:
        logger.debug(f"Dropped frame for closed channel: {e}")
        return False


def safe_close(channel: Channel, code: int, reason: str) -> None:
    try:
        channel.close(code, reason)
    except Exception as e:
        logger.debug(f"Ignoring close failure: {e}")


@dataclass(frozen=True)
class _CloseFrame:
    code: int
    reason: str


_STOP = object()


class WebSocketChannel:
    def __init__(self, websocket: WebSocket, label: Optional[str] = None):
        self._websocket = websocket
        self._outbox: asyncio.Queue = asyncio.Queue()
        self._closed = False
        self.label = label or hex(id(websocket))

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, text: str) -> None:
        if self._closed:
            raise ChannelClosedError(f"channel {self.label} is closed")
        self._outbox.put_nowait(text)

    def close(self, code: int = 1000, reason: str = "") -> None:
        """Queue a close frame behind any pending sends."""
        if self._closed:
            return
        self._closed = True
        self._outbox.put_nowait(_CloseFrame(code, reason))

    def detach(self) -> None:
        """Stop the writer without sending a close frame (peer already gone)."""
        if not self._closed:
            self._closed = True
        self._outbox.put_nowait(_STOP)

    async def pump(self) -> None:
        while True:
            item = await self._outbox.get()
            if item is _STOP:
                return
            try:
                if isinstance(item, _CloseFrame):
                    await self._websocket.close(code=item.code, reason=item.reason)
                    logger.debug(f"Closed channel {self.label} with code {item.code}: {item.reason}")
                    return
                await self._websocket.send_text(item)
            except Exception as e:
                # Socket already gone; the reader side runs the disconnect path.
                self._closed = True
                logger.debug(f"Writer for channel {self.label} stopped: {e}")
                return
