"""Trip statistics over a decoded point sequence."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from .gpx import TrackPoint

EARTH_RADIUS_M = 6_371_000.0


@dataclass(frozen=True)
class TrackStatistics:
    total_distance_m: float = 0.0
    duration_s: Optional[float] = None
    elevation_gain_m: float = 0.0
    elevation_loss_m: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalDistanceMeters": self.total_distance_m,
            "durationSeconds": self.duration_s,
            "elevationGainMeters": self.elevation_gain_m,
            "elevationLossMeters": self.elevation_loss_m,
        }


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters using the Haversine formula."""

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def _duration_s(points: Sequence[TrackPoint]) -> Optional[float]:
    first = next((p.time for p in points if p.time is not None), None)
    last = next((p.time for p in reversed(points) if p.time is not None), None)
    if first is None or last is None:
        return None
    # Out-of-order timestamps would otherwise yield a negative duration.
    return max(0.0, (last - first).total_seconds())


def compute_statistics(points: Sequence[TrackPoint]) -> TrackStatistics:
    """Distance, elevation gain/loss and duration for an ordered track.

    Elevation only accumulates across consecutive pairs where both points
    carry an elevation. Duration spans the first and last timestamped points
    and is ``None`` when no point has a timestamp.
    """

    distance = 0.0
    gain = 0.0
    loss = 0.0
    for prev, curr in zip(points, points[1:]):
        distance += haversine_m(
            prev.latitude, prev.longitude, curr.latitude, curr.longitude
        )
        if prev.elevation is None or curr.elevation is None:
            continue
        delta = curr.elevation - prev.elevation
        if delta > 0:
            gain += delta
        elif delta < 0:
            loss += -delta

    return TrackStatistics(
        total_distance_m=distance,
        duration_s=_duration_s(points),
        elevation_gain_m=gain,
        elevation_loss_m=loss,
    )


def format_duration(seconds: float) -> str:
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_distance(meters: float) -> str:
    return f"{meters / 1000:.2f} km"


def format_statistics(stats: TrackStatistics) -> Dict[str, str]:
    """Human-readable strings for the info panel; empty values show ``N/A``."""

    return {
        "distance": (
            format_distance(stats.total_distance_m)
            if stats.total_distance_m > 0
            else "N/A"
        ),
        "duration": (
            format_duration(stats.duration_s) if stats.duration_s is not None else "N/A"
        ),
        "elevationGain": (
            f"{round(stats.elevation_gain_m)} m" if stats.elevation_gain_m > 0 else "N/A"
        ),
        "elevationLoss": (
            f"{round(stats.elevation_loss_m)} m" if stats.elevation_loss_m > 0 else "N/A"
        ),
    }


__all__ = [
    "EARTH_RADIUS_M",
    "TrackStatistics",
    "compute_statistics",
    "format_distance",
    "format_duration",
    "format_statistics",
    "haversine_m",
]
