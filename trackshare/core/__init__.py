"""Core configuration and infrastructure helpers."""

from .config import (
    API_KEY,
    API_KEY_HEADER,
    DATABASE_URL,
    DB_RESET,
    LOG_LEVEL,
    MAX_CONTENT_BYTES,
)
from .database import build_engine, engine, get_session
from .errors import (
    DecodeError,
    StoreError,
    TrackNotFound,
    TrackShareError,
    TrackValidationError,
)
from .logging import configure_logging
from .time import as_utc, utcnow

__all__ = [
    "API_KEY",
    "API_KEY_HEADER",
    "DATABASE_URL",
    "DB_RESET",
    "DecodeError",
    "LOG_LEVEL",
    "MAX_CONTENT_BYTES",
    "StoreError",
    "TrackNotFound",
    "TrackShareError",
    "TrackValidationError",
    "as_utc",
    "build_engine",
    "configure_logging",
    "engine",
    "get_session",
    "utcnow",
]
