"""Identifier-keyed track storage."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import delete, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..core.errors import StoreError, TrackNotFound, TrackValidationError
from ..core.time import as_utc, utcnow
from ..models import IDENTIFIER_MAX_LENGTH, Track

logger = logging.getLogger(__name__)

_INSERT_BY_DIALECT = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def validate_upload(identifier: Any, content: Any) -> Tuple[str, str]:
    """Check the upload constraints, naming the offending field on failure."""

    if not isinstance(identifier, str) or not (
        1 <= len(identifier) <= IDENTIFIER_MAX_LENGTH
    ):
        raise TrackValidationError(
            "identifier",
            f"Identifier must be between 1 and {IDENTIFIER_MAX_LENGTH} characters",
        )
    if not isinstance(content, str) or not content:
        raise TrackValidationError("gpxContent", "GPX content cannot be empty")
    return identifier, content


def _select_by_identifier(identifier: str):
    # Core statements bypass the identity map; reload any cached instance.
    return (
        select(Track)
        .where(Track.identifier == identifier)
        .execution_options(populate_existing=True)
    )


def _insert_if_absent(session: Session, identifier: str, content: str, now: datetime) -> bool:
    dialect = session.get_bind().dialect.name
    insert = _INSERT_BY_DIALECT.get(dialect)
    if insert is None:
        raise StoreError(f"Unsupported database dialect for upserts: {dialect}")
    statement = (
        insert(Track)
        .values(identifier=identifier, content=content, uploaded_at=now, updated_at=now)
        .on_conflict_do_nothing(index_elements=["identifier"])
    )
    result = session.connection().execute(statement)
    return result.rowcount == 1


def _replace_content(session: Session, identifier: str, content: str, now: datetime) -> None:
    statement = (
        update(Track)
        .where(Track.identifier == identifier)
        .values(content=content, updated_at=now)
    )
    result = session.connection().execute(statement)
    if result.rowcount != 1:
        # The conflicting row was deleted between the insert and the update.
        raise StoreError(f"Track {identifier!r} changed during upload")


def upsert_track(
    session: Session,
    identifier: str,
    content: str,
    *,
    now: Optional[datetime] = None,
) -> Tuple[Track, bool]:
    """Create or replace the track stored under ``identifier``.

    Returns the stored record and whether it was newly created. Creation sets
    both timestamps; replacement swaps the content and refreshes only
    ``updated_at``. The insert relies on the unique identifier constraint, so
    concurrent uploads of one identifier never produce two rows. The returned
    record is read inside the write transaction and detached from the session,
    so a delete landing after the commit cannot invalidate it.
    """

    validate_upload(identifier, content)
    now = now or utcnow()
    try:
        created = _insert_if_absent(session, identifier, content, now)
        if not created:
            _replace_content(session, identifier, content, now)
        track = session.exec(_select_by_identifier(identifier)).one()
        session.expunge(track)
        session.commit()
    except StoreError:
        session.rollback()
        raise
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to store track %s", identifier)
        raise StoreError(f"Failed to store track {identifier!r}") from exc

    return track, created


def get_track(session: Session, identifier: str) -> Track:
    """Fetch a track or raise :class:`TrackNotFound`."""

    try:
        track = session.exec(_select_by_identifier(identifier)).first()
    except SQLAlchemyError as exc:
        logger.exception("Failed to load track %s", identifier)
        raise StoreError(f"Failed to load track {identifier!r}") from exc
    if track is None:
        raise TrackNotFound(identifier)
    return track


def delete_track(session: Session, identifier: str) -> bool:
    """Delete a track; return whether one existed."""

    try:
        result = session.connection().execute(
            delete(Track).where(Track.identifier == identifier)
        )
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to delete track %s", identifier)
        raise StoreError(f"Failed to delete track {identifier!r}") from exc
    return result.rowcount > 0


def track_to_dict(track: Track) -> Dict[str, Any]:
    """Serialise a track model to an API-friendly dict."""

    return {
        "identifier": track.identifier,
        "gpxContent": track.content,
        "uploadedAt": as_utc(track.uploaded_at).isoformat(),
        "updatedAt": as_utc(track.updated_at).isoformat(),
    }


__all__ = [
    "delete_track",
    "get_track",
    "track_to_dict",
    "upsert_track",
    "validate_upload",
]
