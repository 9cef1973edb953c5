"""Share GPS tracks under client-chosen identifiers."""

__version__ = "0.1.0"
