"""
Bounded LRU cache of raw grid rows.

Rows are fetched with a seek + read against the grid's shared file handle
and kept in recency order. The cache does not validate row indices; the
pixel accessor clamps them before calling fetch_row().
"""

import logging
from collections import OrderedDict
from typing import BinaryIO

from ..constants import BYTES_PER_SAMPLE, DEFAULT_CACHE_ROWS, MIN_CACHE_ROWS, ErrorMessages
from .errors import GridIOError

logger = logging.getLogger(__name__)


class RowCache:
    """LRU cache mapping row index -> raw row bytes (width * 2 bytes)."""

    def __init__(
        self,
        stream: BinaryIO,
        data_offset: int,
        width: int,
        capacity: int = DEFAULT_CACHE_ROWS,
    ) -> None:
        self._stream = stream
        self._data_offset = data_offset
        self._row_bytes = width * BYTES_PER_SAMPLE
        self.capacity = max(MIN_CACHE_ROWS, int(capacity))

        self._rows: OrderedDict[int, bytes] = OrderedDict()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, row: int) -> bool:
        return row in self._rows

    def fetch_row(self, row: int) -> bytes:
        """Return the raw bytes of a grid row, reading it from disk on a miss."""
        data = self._rows.get(row)
        if data is not None:
            self._rows.move_to_end(row)
            self.hits += 1
            return data

        self.misses += 1
        data = self._read_row(row)

        if len(self._rows) >= self.capacity:
            evicted, _ = self._rows.popitem(last=False)
            self.evictions += 1
            logger.debug(f"Evicted row {evicted} from cache")

        self._rows[row] = data
        return data

    def clear(self) -> None:
        """Discard all cached rows."""
        self._rows.clear()

    def stats(self) -> dict:
        return {
            "size": len(self._rows),
            "capacity": self.capacity,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
        }

    def _read_row(self, row: int) -> bytes:
        byte_pos = self._data_offset + row * self._row_bytes
        try:
            pos = self._stream.seek(byte_pos)
        except (OSError, ValueError) as e:
            raise GridIOError(ErrorMessages.SEEK_FAILED.format(row, byte_pos, e)) from e
        if pos != byte_pos:
            raise GridIOError(
                ErrorMessages.SEEK_FAILED.format(row, byte_pos, f"landed at byte {pos}")
            )

        try:
            data = self._stream.read(self._row_bytes)
        except (OSError, ValueError) as e:
            raise GridIOError(
                ErrorMessages.SHORT_READ.format(row, self._row_bytes, 0)
            ) from e
        if data is None or len(data) != self._row_bytes:
            got = 0 if data is None else len(data)
            raise GridIOError(ErrorMessages.SHORT_READ.format(row, self._row_bytes, got))

        logger.debug(f"Read row {row} ({self._row_bytes} bytes at byte {byte_pos})")
        return data
