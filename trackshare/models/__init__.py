"""Database model exports."""

from .track import IDENTIFIER_MAX_LENGTH, Track

__all__ = ["IDENTIFIER_MAX_LENGTH", "Track"]
