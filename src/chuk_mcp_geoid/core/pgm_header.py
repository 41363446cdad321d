"""
PGM header parsing for GeographicLib geoid grids.

GeographicLib stores each geoid model as a 16-bit binary PGM (P5) whose
comment lines carry the calibration needed to turn a raw sample into
metres:

    P5
    # Description WGS84 EGM96, 5-minute grid
    # Offset -108
    # Scale 0.003
    # MaxBilinearError 0.140
    # MaxCubicError 0.003
    4320 2161
    65535
    <height rows of width big-endian uint16 samples>

Parsing reads the header from a shared binary stream and leaves the stream
positioned at the first pixel byte. The caller keeps using the same handle
for row reads.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import BinaryIO

from ..constants import (
    BYTES_PER_SAMPLE,
    MAX_BILINEAR_ERROR_KEY,
    MAX_CUBIC_ERROR_KEY,
    OFFSET_TAG,
    PGM_MAGIC,
    PGM_MAXVAL,
    SCALE_TAG,
    ErrorMessages,
)
from .errors import CalibrationMissingError, GridDepthError, GridFormatError

logger = logging.getLogger(__name__)

_NUMBER = r"([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"
_OFFSET_RE = re.compile(rf"^#\s*{OFFSET_TAG}\s+{_NUMBER}", re.IGNORECASE)
_SCALE_RE = re.compile(rf"^#\s*{SCALE_TAG}\s+{_NUMBER}", re.IGNORECASE)
_COMMENT_RE = re.compile(r"^#\s*(\S+)\s+(.*?)\s*$")


@dataclass(frozen=True)
class GridDescriptor:
    """Immutable geometry and calibration of an opened geoid grid."""

    offset: float
    scale: float
    width: int
    height: int
    data_offset: int
    metadata: dict[str, str] = field(default_factory=dict, compare=False)
    lat_res: float = field(init=False)
    lon_res: float = field(init=False)

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 2:
            raise GridFormatError(
                ErrorMessages.INVALID_DIMENSIONS.format(self.width, self.height)
            )
        for tag, value in ((OFFSET_TAG, self.offset), (SCALE_TAG, self.scale)):
            if not math.isfinite(value):
                raise GridFormatError(ErrorMessages.NON_FINITE_CALIBRATION.format(tag, value))
        object.__setattr__(self, "lat_res", 180.0 / (self.height - 1))
        object.__setattr__(self, "lon_res", 360.0 / self.width)

    @property
    def row_bytes(self) -> int:
        """Size in bytes of one stored grid row."""
        return self.width * BYTES_PER_SAMPLE

    def max_error(self, cubic: bool) -> float | None:
        """Published maximum interpolation error in metres, if the header has one."""
        key = MAX_CUBIC_ERROR_KEY if cubic else MAX_BILINEAR_ERROR_KEY
        raw = self.metadata.get(key)
        if raw is None:
            return None
        try:
            return float(raw.split()[0])
        except (ValueError, IndexError):
            return None


def _read_line(stream: BinaryIO, context: str) -> str:
    line = stream.readline()
    if not line:
        raise GridFormatError(ErrorMessages.UNEXPECTED_EOF.format(context))
    return line.decode("latin-1").rstrip("\r\n")


def _parse_positive_ints(text: str) -> list[int] | None:
    parts = text.split()
    if not parts or not all(p.isascii() and p.isdigit() for p in parts):
        return None
    return [int(p) for p in parts]


def parse_header(stream: BinaryIO) -> GridDescriptor:
    """
    Parse a GeographicLib PGM header.

    Args:
        stream: Binary stream positioned at offset 0

    Returns:
        Validated GridDescriptor; the stream is left at the first pixel byte

    Raises:
        GridFormatError: wrong magic, bad dimensions, or truncated header
        GridDepthError: maximum value is not 65535
        CalibrationMissingError: # Offset or # Scale comment not found
    """
    magic = stream.readline()
    if magic.strip() != PGM_MAGIC:
        raise GridFormatError(ErrorMessages.BAD_MAGIC.format(magic.strip()))

    offset: float | None = None
    scale: float | None = None
    metadata: dict[str, str] = {}

    while True:
        line = _read_line(stream, "dimensions")
        if not line.startswith("#"):
            break

        if m := _OFFSET_RE.match(line):
            offset = float(m.group(1))
        elif m := _SCALE_RE.match(line):
            scale = float(m.group(1))
        elif m := _COMMENT_RE.match(line):
            metadata[m.group(1)] = m.group(2)

    dims = _parse_positive_ints(line)
    if dims is not None and len(dims) == 2:
        width, height = dims
    elif dims is not None and len(dims) == 1:
        width = dims[0]
        height_line = _read_line(stream, "row count")
        rows = _parse_positive_ints(height_line)
        if rows is None or len(rows) != 1:
            raise GridFormatError(ErrorMessages.BAD_DIMENSIONS.format(height_line))
        height = rows[0]
    else:
        raise GridFormatError(ErrorMessages.BAD_DIMENSIONS.format(line))

    maxval = _read_line(stream, "maximum value").strip()
    if maxval != str(PGM_MAXVAL):
        raise GridDepthError(ErrorMessages.BAD_MAXVAL.format(PGM_MAXVAL, maxval))

    missing = [
        tag for tag, value in ((OFFSET_TAG, offset), (SCALE_TAG, scale)) if value is None
    ]
    if missing:
        raise CalibrationMissingError(
            ErrorMessages.MISSING_CALIBRATION.format(" and # ".join(missing)), missing
        )

    descriptor = GridDescriptor(
        offset=offset,  # type: ignore[arg-type]
        scale=scale,  # type: ignore[arg-type]
        width=width,
        height=height,
        data_offset=stream.tell(),
        metadata=metadata,
    )
    logger.debug(
        f"Parsed PGM header: {width}x{height}, offset={offset}, scale={scale}, "
        f"data at byte {descriptor.data_offset}"
    )
    return descriptor
