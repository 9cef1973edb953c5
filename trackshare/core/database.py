"""Database configuration and session helpers."""

from __future__ import annotations

from typing import Iterator

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from .config import DATA_DIR, DATABASE_URL


def _default_url() -> str:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{DATA_DIR / 'trackshare.db'}"


def build_engine(url: str) -> Engine:
    """Create an engine, applying the SQLite-specific connection options."""

    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # A single shared connection keeps one in-memory database alive.
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(url, pool_pre_ping=True)


engine = build_engine(DATABASE_URL or _default_url())


def get_session() -> Iterator[Session]:
    """FastAPI dependency that yields a database session."""

    with Session(engine) as session:
        yield session


__all__ = ["build_engine", "engine", "get_session"]
