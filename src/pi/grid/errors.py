"""Exception types raised by pi-grid."""

from __future__ import annotations


class GridError(Exception):
    """Base class for every error raised by pi-grid."""


class DataSourceError(GridError):
    """A table could not be loaded from its source."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class TableIOError(DataSourceError):
    """The source file is missing or unreadable."""


class TableEncodingError(DataSourceError):
    """The source file is not valid UTF-8 text."""


class DrawError(GridError):
    """The terminal failed while a frame was being drawn.

    ``row`` is the viewport row whose draw operation failed.  Rows above it
    may already be on screen.
    """

    def __init__(self, message: str, row: int) -> None:
        super().__init__(message)
        self.row = row


class DegenerateConfigError(GridError, ValueError):
    """Cell dimensions that cannot produce a grid."""
