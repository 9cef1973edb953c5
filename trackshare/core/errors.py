"""Error types shared by the store, the decoder and the API layer."""

from __future__ import annotations


class TrackShareError(Exception):
    """Base class for all application errors."""


class TrackValidationError(TrackShareError, ValueError):
    """An upload was rejected before reaching storage."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class TrackNotFound(TrackShareError, LookupError):
    """No track is stored under the requested identifier."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Track not found: {identifier}")
        self.identifier = identifier


class DecodeError(TrackShareError, ValueError):
    """Stored content could not be turned into a point sequence."""


class StoreError(TrackShareError):
    """The backing database failed; the write was rolled back."""


__all__ = [
    "DecodeError",
    "StoreError",
    "TrackNotFound",
    "TrackShareError",
    "TrackValidationError",
]
