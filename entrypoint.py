import uvicorn
from constants import HOST, PORT, LOG_LEVEL, LOG_FILE, UVICORN_RELOAD
from logging_config import setup_logging

# Setup logging before importing app
setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)

from app import app
from logging_config import get_logger

logger = get_logger(__name__)


def main():
    logger.info(f"Starting signaling server on {HOST}:{PORT}")
    if UVICORN_RELOAD:
        uvicorn.run("app:app", host=HOST, port=PORT, reload=True, log_config=None)
    else:
        uvicorn.run(app, host=HOST, port=PORT, log_config=None)


if __name__ == "__main__":
    main()
