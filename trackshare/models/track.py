"""Database model for uploaded tracks."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow

IDENTIFIER_MAX_LENGTH = 256


class Track(SQLModel, table=True):
    """Raw GPX content stored under a client-chosen identifier."""

    __tablename__ = "tracks"

    id: Optional[int] = ORMField(default=None, primary_key=True)
    identifier: str = ORMField(
        max_length=IDENTIFIER_MAX_LENGTH, index=True, unique=True, nullable=False
    )
    content: str = ORMField(nullable=False)
    uploaded_at: datetime = ORMField(default_factory=utcnow, nullable=False)
    updated_at: datetime = ORMField(default_factory=utcnow, nullable=False)


__all__ = ["IDENTIFIER_MAX_LENGTH", "Track"]
