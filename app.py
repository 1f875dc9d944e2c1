import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware

from channel import WebSocketChannel
from constants import CLOSE_GOING_AWAY, CORS_ALLOW_ORIGINS, LOG_FILE, LOG_LEVEL
from logging_config import get_logger, setup_logging
from room import Room
from routers.signaling import signaling_router
from session_router import SessionRouter

# Setup logging
setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One room per process; it lives exactly as long as the app.
    room = Room()
    app.state.room = room
    app.state.session_router = SessionRouter(room)
    logger.info("Signaling room created")
    try:
        yield
    finally:
        room.close_all(CLOSE_GOING_AWAY, "server shutting down")
        logger.info("Signaling room disposed")


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(signaling_router)

logger.info("FastAPI application initialized")


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """Signaling WebSocket.

    The first ``register-host`` or ``client-hello`` frame decides the role of
    the connection; every later text frame is handed to the session router.
    """
    router: SessionRouter = websocket.app.state.session_router
    remote = f"{websocket.client.host}:{websocket.client.port}" if websocket.client else "unknown"

    await websocket.accept()
    channel = WebSocketChannel(websocket, label=remote)
    writer = asyncio.create_task(channel.pump())
    peer = router.connect(channel)
    logger.info(f"WebSocket connection accepted from {remote}")

    try:
        frame_count = 0
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                logger.info(f"WebSocket disconnected for {peer.label} ({remote}), code {message.get('code')}")
                break
            frame_count += 1
            text = message.get("text")
            if text is None:
                logger.debug(f"Dropping binary frame #{frame_count} from {remote}")
                continue
            router.handle_frame(peer, text)
    except Exception as e:
        logger.error(f"WebSocket error for {peer.label} ({remote}): {e}", exc_info=True)
    finally:
        router.disconnect(peer)
        channel.detach()
        try:
            await asyncio.wait_for(writer, timeout=1.0)
        except asyncio.TimeoutError:
            logger.debug(f"Writer for {remote} did not drain in time, cancelled")
