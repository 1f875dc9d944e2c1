import os

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8000))
UVICORN_RELOAD = os.getenv("UVICORN_RELOAD", "false").lower() in ("1", "true", "yes")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", None)

# Comma separated, "*" allows every origin
CORS_ALLOW_ORIGINS = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]

CLIENT_ID_LENGTH = int(os.getenv("CLIENT_ID_LENGTH", 8))
CLIENT_ID_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"

# WebSocket close codes
CLOSE_REPLACED = 1011
CLOSE_GOING_AWAY = 1001
