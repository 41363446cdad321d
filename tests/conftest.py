"""Shared test fixtures for chuk-mcp-geoid."""

from pathlib import Path

import numpy as np
import pytest


def _pgm_bytes(
    data: np.ndarray,
    offset: float | str | None = -108.0,
    scale: float | str | None = 0.003,
    magic: str = "P5",
    maxval: str = "65535",
    split_dims: bool = False,
    comments: list[str] | None = None,
) -> bytes:
    height, width = data.shape
    lines = [magic]
    for c in comments or []:
        lines.append(f"# {c}")
    if offset is not None:
        lines.append(f"# Offset {offset}")
    if scale is not None:
        lines.append(f"# Scale {scale}")
    if split_dims:
        lines.extend([str(width), str(height)])
    else:
        lines.append(f"{width} {height}")
    lines.append(maxval)
    header = ("\n".join(lines) + "\n").encode("ascii")
    return header + np.asarray(data, dtype=">u2").tobytes()


@pytest.fixture
def pgm_bytes():
    """Factory building an in-memory GeographicLib-style PGM file."""
    return _pgm_bytes


@pytest.fixture
def make_pgm(tmp_path):
    """Factory writing a PGM grid to tmp_path and returning its path.

    Pass either ``data`` (uint16 array of shape (height, width)) or
    ``width``/``height``/``fill``. ``truncate`` drops that many bytes
    from the end of the file.
    """
    counter = {"n": 0}

    def factory(
        data: np.ndarray | None = None,
        width: int = 8,
        height: int = 5,
        fill: int = 5000,
        truncate: int = 0,
        **header,
    ) -> Path:
        if data is None:
            data = np.full((height, width), fill, dtype=np.uint16)
        raw = _pgm_bytes(np.asarray(data), **header)
        if truncate:
            raw = raw[:-truncate]
        counter["n"] += 1
        path = tmp_path / f"grid{counter['n']}.pgm"
        path.write_bytes(raw)
        return path

    return factory


@pytest.fixture
def ramp_data():
    """12x10 grid whose raw value is 1000 + 10*col + 20*row."""
    rows, cols = np.mgrid[0:10, 0:12]
    return (1000 + 10 * cols + 20 * rows).astype(np.uint16)


@pytest.fixture
def random_data():
    """25-row x 48-column grid of random uint16 samples (7.5 degree spacing)."""
    rng = np.random.default_rng(42)
    return rng.integers(20000, 45000, size=(25, 48), dtype=np.uint16)


@pytest.fixture
def grid_path(make_pgm, random_data):
    """Path to a random-valued grid with error bounds in its header."""
    return make_pgm(
        random_data,
        comments=[
            "Description WGS84 EGM96, synthetic test grid",
            "MaxBilinearError 0.140",
            "MaxCubicError 0.003",
        ],
    )


@pytest.fixture
def mock_manager():
    """GeoidManager with no grid configured."""
    from chuk_mcp_geoid.core.geoid_manager import GeoidManager

    return GeoidManager()


