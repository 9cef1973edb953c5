"""Track upload, retrieval and display endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Response
from sqlmodel import Session

from ...core import (
    MAX_CONTENT_BYTES,
    DecodeError,
    StoreError,
    TrackNotFound,
    TrackValidationError,
    get_session,
)
from ...models import Track
from ...services.gpx import decode_gpx
from ...services.stats import compute_statistics, format_statistics
from ...services.tracks import (
    delete_track,
    get_track,
    track_to_dict,
    upsert_track,
    validate_upload,
)
from ..security import require_api_key

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tracks", tags=["tracks"])


def _store_failure() -> HTTPException:
    return HTTPException(
        status_code=500, detail="An error occurred while accessing track storage"
    )


def _load(session: Session, identifier: str) -> Track:
    try:
        return get_track(session, identifier)
    except TrackNotFound as exc:
        raise HTTPException(status_code=404, detail="Track not found") from exc
    except StoreError as exc:
        raise _store_failure() from exc


@router.post("/upload", dependencies=[Depends(require_api_key)])
def upload_track(
    response: Response,
    body: Dict[str, Any] = Body(...),
    session: Session = Depends(get_session),
) -> Dict[str, Any]:
    """Upload a new track or replace the content of an existing one."""

    try:
        identifier, content = validate_upload(body.get("identifier"), body.get("gpxContent"))
        if len(content.encode("utf-8")) > MAX_CONTENT_BYTES:
            raise TrackValidationError(
                "gpxContent",
                f"GPX content exceeds the maximum size of {MAX_CONTENT_BYTES} bytes",
            )
        _, created = upsert_track(session, identifier, content)
    except TrackValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.to_dict()) from exc
    except StoreError as exc:
        raise _store_failure() from exc

    if created:
        response.status_code = 201
        logger.info("Track %s uploaded", identifier)
    else:
        logger.info("Track %s updated", identifier)
    return {
        "success": True,
        "created": created,
        "identifier": identifier,
        "message": "Track uploaded successfully" if created else "Track updated successfully",
    }


@router.get("/{identifier}")
def fetch_track(identifier: str, session: Session = Depends(get_session)) -> Dict[str, Any]:
    """Return the stored GPX content and its timestamps."""

    return track_to_dict(_load(session, identifier))


@router.get("/{identifier}/view")
def view_track(identifier: str, session: Session = Depends(get_session)) -> Dict[str, Any]:
    """Decode a stored track and attach its trip statistics."""

    track = _load(session, identifier)
    try:
        decoded = decode_gpx(track.content)
    except DecodeError as exc:
        logger.warning("Track %s could not be decoded: %s", identifier, exc)
        raise HTTPException(
            status_code=422,
            detail={"message": "Invalid track data", "reason": str(exc)},
        ) from exc

    stats = compute_statistics(decoded.points)
    min_lat, min_lon, max_lat, max_lon = decoded.bounds()
    return {
        "identifier": track.identifier,
        "name": decoded.name,
        "points": [point.to_dict() for point in decoded.points],
        "bounds": {
            "minLat": min_lat,
            "minLon": min_lon,
            "maxLat": max_lat,
            "maxLon": max_lon,
        },
        "start": decoded.points[0].to_dict(),
        "end": decoded.points[-1].to_dict(),
        "statistics": stats.to_dict(),
        "display": format_statistics(stats),
    }


@router.delete("/{identifier}", dependencies=[Depends(require_api_key)])
def remove_track(identifier: str, session: Session = Depends(get_session)) -> Dict[str, Any]:
    """Delete a track by identifier."""

    try:
        found = delete_track(session, identifier)
    except StoreError as exc:
        raise _store_failure() from exc
    if not found:
        raise HTTPException(status_code=404, detail="Track not found")
    logger.info("Track %s deleted", identifier)
    return {"success": True, "message": "Track deleted successfully"}


__all__ = ["router"]
