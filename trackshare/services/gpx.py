"""GPX decoding into an ordered, typed point sequence."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterator, Optional, Tuple

import gpxpy
from gpxpy.gpx import GPX, GPXException
from gpxpy.utils import to_number

from ..core.errors import DecodeError
from ..core.time import as_utc

logger = logging.getLogger(__name__)

DEFAULT_TRACK_NAME = "Unnamed Track"

# <ele>, optionally namespace-prefixed, with plain text content.
_ELEVATION_RE = re.compile(r"<((?:[\w.-]+:)?ele)>([^<]*)</\1>")


@dataclass(frozen=True)
class TrackPoint:
    """One sampled position; elevation and time are independent per point."""

    latitude: float
    longitude: float
    elevation: Optional[float] = None
    time: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lat": self.latitude,
            "lon": self.longitude,
            "ele": self.elevation,
            "time": self.time.isoformat() if self.time else None,
        }


@dataclass(frozen=True)
class DecodedTrack:
    name: str
    points: Tuple[TrackPoint, ...]

    def bounds(self) -> Tuple[float, float, float, float]:
        """Return ``(min_lat, min_lon, max_lat, max_lon)`` over all points."""

        lats = [point.latitude for point in self.points]
        lons = [point.longitude for point in self.points]
        return min(lats), min(lons), max(lats), max(lons)


def _track_name(gpx: GPX) -> str:
    """Name of the first ``<trk>`` that has a ``<name>`` element, taken as written.

    An empty ``<name></name>`` carries no text and does not count as a match.
    """

    for track in gpx.tracks:
        if track.name is not None:
            return track.name
    return DEFAULT_TRACK_NAME


def _readable_elevation(raw: str) -> bool:
    value = to_number(raw, default=None)
    return value is not None and math.isfinite(value)


def _drop_unreadable_elevations(text: str) -> str:
    # gpxpy rejects the whole document over one bad <ele>; an unreadable
    # elevation is treated as absent instead.
    def _keep(match: "re.Match[str]") -> str:
        return match.group(0) if _readable_elevation(match.group(2)) else ""

    return _ELEVATION_RE.sub(_keep, text)


def _iter_points(gpx: GPX) -> Iterator[TrackPoint]:
    for track in gpx.tracks:
        for segment in track.segments or []:
            for point in segment.points or []:
                yield TrackPoint(
                    latitude=point.latitude,
                    longitude=point.longitude,
                    elevation=point.elevation,
                    time=as_utc(point.time) if point.time else None,
                )


def _check_coordinates(index: int, point: TrackPoint) -> None:
    if not (math.isfinite(point.latitude) and math.isfinite(point.longitude)):
        raise DecodeError(f"Track point {index} has a non-finite coordinate")


def decode_gpx(text: str) -> DecodedTrack:
    """Parse GPX text into its track name and flattened point sequence.

    Points from every ``<trk>`` and ``<trkseg>`` are concatenated in document
    order. A missing or unreadable ``<ele>`` and a missing or unparseable
    ``<time>`` leave the corresponding field unset. Raises
    :class:`DecodeError` when the document cannot be parsed, when it holds no
    track points, or when a coordinate is not a finite number. Coordinate
    ranges are not checked.
    """

    try:
        gpx = gpxpy.parse(_drop_unreadable_elevations(text))
    except (GPXException, ValueError) as exc:
        raise DecodeError(f"Invalid GPX format: {exc}") from exc

    points = tuple(_iter_points(gpx))
    if not points:
        raise DecodeError("No track points found in GPX")
    for index, point in enumerate(points):
        _check_coordinates(index, point)

    decoded = DecodedTrack(name=_track_name(gpx), points=points)
    logger.debug("Decoded track %r with %d points", decoded.name, len(points))
    return decoded


__all__ = ["DEFAULT_TRACK_NAME", "DecodedTrack", "TrackPoint", "decode_gpx"]
