"""Service layer helpers."""

from .gpx import DecodedTrack, TrackPoint, decode_gpx
from .stats import TrackStatistics, compute_statistics, format_statistics
from .tracks import delete_track, get_track, track_to_dict, upsert_track

__all__ = [
    "DecodedTrack",
    "TrackPoint",
    "TrackStatistics",
    "compute_statistics",
    "decode_gpx",
    "delete_track",
    "format_statistics",
    "get_track",
    "track_to_dict",
    "upsert_track",
]
