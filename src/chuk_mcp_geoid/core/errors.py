"""
Exception hierarchy for geoid grid access.

Every failure raised by the grid derives from GeoidGridError. Where a
builtin family fits, the class also derives from it (OSError for I/O,
ValueError for malformed headers) so generic handlers keep working.
"""


class GeoidGridError(Exception):
    """Base class for all geoid grid failures."""


class GridOpenError(GeoidGridError, OSError):
    """The grid file could not be opened for reading."""


class GridFormatError(GeoidGridError, ValueError):
    """The PGM header is malformed or truncated."""


class CalibrationMissingError(GridFormatError):
    """The # Offset and/or # Scale comment is absent from the header."""

    def __init__(self, message: str, missing: list[str]) -> None:
        super().__init__(message)
        self.missing = missing


class GridDepthError(GridFormatError):
    """The maximum-value line does not declare a 16-bit grid."""


class GridIOError(GeoidGridError, OSError):
    """Seek or read against an already-open grid failed."""


class GridClosedError(GeoidGridError):
    """A query was made after the grid was closed."""
