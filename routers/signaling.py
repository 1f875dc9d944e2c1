from fastapi import APIRouter, Request

from schemas.signaling import HealthResponse
from logging_config import get_logger

logger = get_logger(__name__)

signaling_router = APIRouter(tags=["signaling"])


@signaling_router.get("/health", response_model=HealthResponse, response_model_by_alias=True)
async def health(request: Request):
    """
    Snapshot of the signaling room. Never changes room state.

    Returns:
    - ok: Always true while the server is up
    - hostConnected: Whether a host is registered
    - clients: Identities of the connected clients
    """
    status = request.app.state.session_router.status()
    logger.debug(f"Health check: host={status['hostConnected']}, clients={len(status['clients'])}")
    return HealthResponse(**status)
