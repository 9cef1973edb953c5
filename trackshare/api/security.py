"""Shared-secret gate for write endpoints."""

from __future__ import annotations

import secrets
from typing import Optional

from fastapi import Header, HTTPException

from ..core import config


def require_api_key(
    x_api_key: Optional[str] = Header(default=None, alias=config.API_KEY_HEADER),
) -> None:
    """FastAPI dependency rejecting requests without the configured key."""

    if x_api_key is None:
        raise HTTPException(status_code=401, detail="API key is missing")
    expected = config.API_KEY
    if not expected:
        raise HTTPException(status_code=500, detail="API key is not configured")
    if not secrets.compare_digest(x_api_key.encode(), expected.encode()):
        raise HTTPException(status_code=401, detail="Invalid API key")


__all__ = ["require_api_key"]
