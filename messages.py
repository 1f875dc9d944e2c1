import json
import math
from typing import Optional

# Inbound classification
REGISTER_HOST = "register-host"
CLIENT_HELLO = "client-hello"

# Relayed signaling
OFFER = "offer"
ANSWER = "answer"
ICE_CANDIDATE = "ice-candidate"
SIGNAL_TYPES = frozenset({OFFER, ANSWER, ICE_CANDIDATE})

# Outbound control
HOST_REGISTERED = "host-registered"
CLIENT_WELCOME = "client-welcome"
CLIENT_CONNECTED = "client-connected"
CLIENT_DISCONNECTED = "client-disconnected"
HOST_DISCONNECTED = "host-disconnected"
ERROR = "error"

# Error codes
ERR_HOST_REPLACED = "host-replaced"
ERR_CLIENT_REPLACED = "client-replaced"
ERR_NOT_REGISTERED = "not-registered"
ERR_NO_HOST = "no-host"
ERR_MISSING_CLIENT_ID = "missing-clientId"
ERR_UNKNOWN_CLIENT = "unknown-client"

FROM_HOST = "host"
FROM_CLIENT = "client"


def _reject_constant(name):
    raise ValueError(f"non-standard JSON constant {name}")


def _finite(value):
    # Overflowed numbers (1e400) parse to inf; serialize them as null.
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _finite(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_finite(v) for v in value]
    return value


def decode_frame(data) -> Optional[dict]:
    """Parse an inbound text frame.

    Returns None for anything that is not a JSON object with a string ``type``.
    ``NaN`` and ``Infinity`` literals are not JSON and make the frame invalid.
    """
    if not isinstance(data, str):
        return None
    try:
        msg = json.loads(data, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return None
    if not isinstance(msg, dict) or not isinstance(msg.get("type"), str):
        return None
    return msg


def encode(msg: dict) -> str:
    return json.dumps(_finite(msg), allow_nan=False)


def error(code: str) -> dict:
    return {"type": ERROR, "error": code}


def host_registered(client_ids: list[str]) -> dict:
    return {"type": HOST_REGISTERED, "clients": list(client_ids)}


def client_welcome(client_id: str, has_host: bool) -> dict:
    return {"type": CLIENT_WELCOME, "clientId": client_id, "hasHost": bool(has_host)}


def client_connected(client_id: str) -> dict:
    return {"type": CLIENT_CONNECTED, "clientId": client_id}


def client_disconnected(client_id: str) -> dict:
    return {"type": CLIENT_DISCONNECTED, "clientId": client_id}


def host_disconnected() -> dict:
    return {"type": HOST_DISCONNECTED}


def forwarded(msg: dict, client_id: str, sender: str) -> dict:
    # Copy first, then overwrite: sender-supplied clientId/from never survive.
    out = dict(msg)
    out["clientId"] = client_id
    out["from"] = sender
    return out
