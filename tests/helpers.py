import json

from channel import ChannelClosedError


class FakeChannel:
    """In-memory channel recording decoded outbound messages."""

    def __init__(self, name: str = "peer"):
        self.name = name
        self.sent: list[dict] = []
        self.close_code = None
        self.close_reason = None
        self._closed = False
        self.broken = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, text: str) -> None:
        if self._closed or self.broken:
            raise ChannelClosedError(f"{self.name} is closed")
        self.sent.append(json.loads(text))

    def close(self, code: int = 1000, reason: str = "") -> None:
        if self._closed:
            return
        self._closed = True
        self.close_code = code
        self.close_reason = reason

    def pop(self) -> list[dict]:
        out, self.sent = self.sent, []
        return out


def frame(msg_type: str, **fields) -> str:
    return json.dumps({"type": msg_type, **fields})
