"""
Geoid Manager — central orchestrator for geoid height queries.

Owns the open GeoidGrid, serialises access to it, and recovers from
transient I/O failures by reopening the grid. All public async methods
wrap synchronous grid I/O via asyncio.to_thread().
"""

import asyncio
import logging
import math
import os
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..constants import (
    DEFAULT_CACHE_ROWS,
    DEFAULT_INTERPOLATION,
    GEOID_MODELS,
    INTERPOLATION_METHODS,
    RETRY_ATTEMPTS,
    RETRY_WAIT_MAX,
    RETRY_WAIT_MIN,
    EnvVar,
    ErrorMessages,
    grid_shape_for_spacing,
)
from .errors import GridIOError
from .geoid_grid import GeoidGrid

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class GridInfoResult:
    """Geometry, calibration, and provenance of the open grid."""

    path: str
    model_id: str | None
    width: int
    height: int
    lat_res_deg: float
    lon_res_deg: float
    offset_m: float
    scale_m: float
    description: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class HeightResult:
    """Result of a single-point geoid height query."""

    height_m: float
    uncertainty_m: float | None


@dataclass
class MultiHeightResult:
    """Result of a multi-point geoid height query."""

    heights: list[float]
    height_range: list[float]
    uncertainty_m: float | None


def identify_model(width: int, height: int, description: str | None = None) -> str | None:
    """Match grid dimensions (and the header description) to a known geoid model."""
    candidates = [
        model_id
        for model_id, model in GEOID_MODELS.items()
        if grid_shape_for_spacing(model["spacing_arcmin"]) == (width, height)
    ]
    if description:
        for model_id in candidates:
            if GEOID_MODELS[model_id]["model"].lower() in description.lower():
                return model_id
    if len(candidates) == 1:
        return candidates[0]
    return None


class GeoidManager:
    """Central manager for geoid grid operations."""

    def __init__(
        self,
        grid_path: str | Path | None = None,
        cache_rows: int = DEFAULT_CACHE_ROWS,
        default_interpolation: str = DEFAULT_INTERPOLATION,
    ) -> None:
        self.grid_path = str(grid_path) if grid_path else None
        self.cache_rows = cache_rows
        self.default_interpolation = default_interpolation

        self._grid: GeoidGrid | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_env(cls) -> "GeoidManager":
        """Build a manager from GEOID_* environment variables."""
        cache_rows = DEFAULT_CACHE_ROWS
        raw_rows = os.environ.get(EnvVar.CACHE_ROWS)
        if raw_rows:
            try:
                cache_rows = int(raw_rows)
            except ValueError:
                logger.warning(
                    f"Ignoring invalid {EnvVar.CACHE_ROWS}={raw_rows!r}; "
                    f"using {DEFAULT_CACHE_ROWS} rows"
                )

        interpolation = os.environ.get(EnvVar.DEFAULT_INTERPOLATION, DEFAULT_INTERPOLATION)
        if interpolation not in INTERPOLATION_METHODS:
            logger.warning(
                f"Ignoring invalid {EnvVar.DEFAULT_INTERPOLATION}={interpolation!r}; "
                f"using {DEFAULT_INTERPOLATION}"
            )
            interpolation = DEFAULT_INTERPOLATION

        return cls(
            grid_path=os.environ.get(EnvVar.GRID_PATH),
            cache_rows=cache_rows,
            default_interpolation=interpolation,
        )

    # ------------------------------------------------------------------
    # Discovery (sync, no I/O)
    # ------------------------------------------------------------------

    def list_models(self) -> list[dict]:
        """List all known GeographicLib geoid grids."""
        return [dict(model) for model in GEOID_MODELS.values()]

    def describe_model(self, model_id: str) -> dict:
        if model_id not in GEOID_MODELS:
            raise ValueError(
                ErrorMessages.UNKNOWN_MODEL.format(model_id, ", ".join(GEOID_MODELS.keys()))
            )
        model = dict(GEOID_MODELS[model_id])
        width, height = grid_shape_for_spacing(model["spacing_arcmin"])
        model["width"] = width
        model["height"] = height
        return model

    @property
    def grid_open(self) -> bool:
        return self._grid is not None and not self._grid.closed

    def cache_stats(self) -> dict:
        with self._lock:
            if self._grid is None:
                return {"size": 0, "capacity": 0, "hits": 0, "misses": 0, "evictions": 0}
            return self._grid.cache_stats()

    # ------------------------------------------------------------------
    # Grid lifecycle
    # ------------------------------------------------------------------

    async def open_grid(self, path: str, cache_rows: int | None = None) -> GridInfoResult:
        """Switch to a different grid file and return its description."""
        rows = self.cache_rows if cache_rows is None else cache_rows
        grid = await asyncio.to_thread(GeoidGrid, path, rows)

        with self._lock:
            self.cache_rows = rows
            previous, self._grid = self._grid, grid
            self.grid_path = str(path)
        if previous is not None:
            previous.close()

        return self._describe(grid)

    def close(self) -> None:
        with self._lock:
            if self._grid is not None:
                self._grid.close()
                self._grid = None

    # ------------------------------------------------------------------
    # Queries (async)
    # ------------------------------------------------------------------

    async def get_info(self) -> GridInfoResult:
        """Describe the configured grid, opening it if needed."""
        return await asyncio.to_thread(self._query, self._describe)

    async def fetch_height(
        self,
        lat: float,
        lon: float,
        interpolation: str | None = None,
    ) -> HeightResult:
        """Get the geoid height at a single point."""
        cubic = self._use_cubic(interpolation)
        self._validate_point(lat, lon)

        def run(grid: GeoidGrid) -> HeightResult:
            return HeightResult(
                height_m=grid.height(lat, lon, cubic),
                uncertainty_m=grid.descriptor.max_error(cubic),
            )

        return await asyncio.to_thread(self._query, run)

    async def fetch_heights(
        self,
        points: list[list[float]],
        interpolation: str | None = None,
    ) -> MultiHeightResult:
        """Get geoid heights at multiple [lat, lon] points."""
        cubic = self._use_cubic(interpolation)
        pairs = []
        for p in points:
            if len(p) != 2:
                raise ValueError(ErrorMessages.INVALID_POINT.format(p))
            self._validate_point(p[0], p[1])
            pairs.append((float(p[0]), float(p[1])))

        def run(grid: GeoidGrid) -> MultiHeightResult:
            heights = grid.heights(pairs, cubic)
            height_range = [min(heights), max(heights)] if heights else [0.0, 0.0]
            return MultiHeightResult(
                heights=heights,
                height_range=height_range,
                uncertainty_m=grid.descriptor.max_error(cubic),
            )

        return await asyncio.to_thread(self._query, run)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _use_cubic(self, interpolation: str | None) -> bool:
        method = interpolation or self.default_interpolation
        if method not in INTERPOLATION_METHODS:
            raise ValueError(
                ErrorMessages.INVALID_INTERPOLATION.format(
                    method, ", ".join(INTERPOLATION_METHODS)
                )
            )
        return method == "cubic"

    def _validate_point(self, lat: float, lon: float) -> None:
        if not -90.0 <= lat <= 90.0:
            raise ValueError(ErrorMessages.INVALID_LATITUDE.format(lat))
        if not math.isfinite(lon):
            raise ValueError(ErrorMessages.INVALID_LONGITUDE.format(lon))

    def _get_grid(self) -> GeoidGrid:
        """Return the open grid, opening the configured path on first use."""
        if self._grid is None or self._grid.closed:
            if not self.grid_path:
                raise ValueError(ErrorMessages.NO_GRID_CONFIGURED)
            self._grid = GeoidGrid(self.grid_path, self.cache_rows)
        return self._grid

    def _reopen(self, retry_state: RetryCallState) -> None:
        """Drop the current handle so the next attempt reopens the file."""
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            f"Geoid grid I/O failed (attempt {retry_state.attempt_number}): {error}; reopening"
        )
        with self._lock:
            if self._grid is not None:
                self._grid.close()
                self._grid = None

    def _query(self, fn: Callable[[GeoidGrid], T]) -> T:
        """Run fn against the grid under the lock, reopening once on I/O errors."""
        for attempt in Retrying(
            stop=stop_after_attempt(RETRY_ATTEMPTS),
            wait=wait_exponential(multiplier=RETRY_WAIT_MIN, min=RETRY_WAIT_MIN, max=RETRY_WAIT_MAX),
            retry=retry_if_exception_type(GridIOError),
            before_sleep=self._reopen,
            reraise=True,
        ):
            with attempt:
                with self._lock:
                    return fn(self._get_grid())
        raise AssertionError("unreachable")  # pragma: no cover

    def _describe(self, grid: GeoidGrid) -> GridInfoResult:
        info: dict[str, Any] = grid.info()
        description = grid.descriptor.metadata.get("Description")
        return GridInfoResult(
            path=str(grid.path),
            model_id=identify_model(info["width"], info["height"], description),
            description=description,
            metadata=dict(grid.descriptor.metadata),
            **info,
        )
