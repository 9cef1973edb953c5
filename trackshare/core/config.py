"""Application settings and environment helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


# Write gate ------------------------------------------------------------------
# Uploads and deletes are rejected with a 500 while this is unset.
API_KEY: Optional[str] = os.getenv("TRACKSHARE_API_KEY") or None
API_KEY_HEADER = "X-API-Key"


# Persistence -----------------------------------------------------------------
_PROJECT_ROOT = Path(__file__).resolve().parents[2]
DATA_DIR = Path(os.getenv("TRACKSHARE_DATA_DIR", _PROJECT_ROOT / "data"))

DATABASE_URL = os.getenv("TRACKSHARE_DATABASE_URL") or ""
DB_RESET = _env_bool("TRACKSHARE_DB_RESET", False)


# Runtime behaviour -----------------------------------------------------------
LOG_LEVEL = os.getenv("TRACKSHARE_LOG_LEVEL", "INFO").upper()
MAX_CONTENT_BYTES = _env_int("TRACKSHARE_MAX_CONTENT_BYTES", 10 * 1024 * 1024)


__all__ = [
    "API_KEY",
    "API_KEY_HEADER",
    "DATABASE_URL",
    "DATA_DIR",
    "DB_RESET",
    "LOG_LEVEL",
    "MAX_CONTENT_BYTES",
]
