"""
Configuration and constants for the backend.
"""
import logging
import os
from collections import namedtuple
from dotenv import load_dotenv

from onlineexam import __version__

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_ORIGIN = "http://localhost:5173"
DEFAULT_PORT = 4000
DEFAULT_DB_NAME = "onlineexam"

# Request bodies above this size are rejected before reaching any route
MAX_BODY_BYTES = 1024 * 1024

API_NAME = "OnlineExam API"
API_VERSION = __version__

Settings = namedtuple(
    "Settings",
    [
        "client_origin",
        "mongo_uri",
        "mongo_db",
        "port",
        "host",
        "secret_key",
        "enable_monitor",
        "async_mode",
        "log_level",
    ],
)


def _parse_port(raw):
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return DEFAULT_PORT


def _parse_flag(raw, default):
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_settings(environ=None):
    """Resolve runtime settings from the environment."""
    env = os.environ if environ is None else environ

    mongo_uri = (env.get("MONGO_URI") or "").strip() or None

    return Settings(
        client_origin=(env.get("CLIENT_ORIGIN") or DEFAULT_CLIENT_ORIGIN).strip(),
        mongo_uri=mongo_uri,
        mongo_db=(env.get("MONGO_DB") or DEFAULT_DB_NAME).strip(),
        port=_parse_port(env.get("PORT", DEFAULT_PORT)),
        host=env.get("HOST", "0.0.0.0"),
        secret_key=env.get("SECRET_KEY", "dev-secret-change-in-production"),
        enable_monitor=_parse_flag(env.get("ENABLE_MONITOR"), True),
        async_mode=env.get("SOCKETIO_ASYNC_MODE", "eventlet"),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )


def log_settings(settings):
    """Boot logging. Never prints the secret key or the connection string."""
    logger.info("[BOOT] CLIENT_ORIGIN=%s", settings.client_origin)
    logger.info("[BOOT] PORT=%s", settings.port)
    logger.info("[BOOT] ASYNC_MODE=%s", settings.async_mode)
    logger.info("[BOOT] MONITOR=%s", "on" if settings.enable_monitor else "off")
    if not settings.mongo_uri:
        logger.warning("[WARN] MONGO_URI not set - data will live in an in-memory database!")
    else:
        logger.info("[BOOT] MONGO_URI configured (db fallback=%s)", settings.mongo_db)
