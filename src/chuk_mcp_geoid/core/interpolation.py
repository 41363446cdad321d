"""
Bilinear and 12-point cubic interpolation over geoid grid nodes.

Both functions take a pixel accessor ``pixel(row, col) -> int`` and the
cell's north-west node (row, col) with the southward (dy) and eastward (dx)
fractions inside the cell. They return a raw, uncalibrated sample value.

The cubic method is Karney's least-squares cubic fit from GeographicLib
(Geoid.cpp): a 10-term cubic polynomial fitted to the 12 nodes around the
cell. The coefficient table and its denominator are fixed; the fit
reproduces any cubic surface exactly but does not pass through every node
of general data.
"""

from collections.abc import Callable
from typing import Any

import numpy as np
from numpy.typing import NDArray

PixelFn = Callable[[int, int], int]

# (row delta, col delta) of each stencil node, in coefficient-table order
CUBIC_STENCIL: tuple[tuple[int, int], ...] = (
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 0),
    (0, 1),
    (0, 2),
    (1, -1),
    (1, 0),
    (1, 1),
    (1, 2),
    (2, 0),
    (2, 1),
)

CUBIC_DENOMINATOR = 240

# Columns: 1, x, y, x^2, xy, y^2, x^3, x^2y, xy^2, y^3
CUBIC_COEFFICIENTS: NDArray[np.int64] = np.array(
    [
        [9, -18, -88, 0, 96, 90, 0, 0, -60, -20],
        [-9, 18, 8, 0, -96, 30, 0, 0, 60, -20],
        [9, -88, -18, 90, 96, 0, -20, -60, 0, 0],
        [186, -42, -42, -150, -96, -150, 60, 60, 60, 60],
        [54, 162, -78, 30, -24, -90, -60, 60, -60, 60],
        [-9, -32, 18, 30, 24, 0, 20, -60, 0, 0],
        [-9, 8, 18, 30, -96, 0, -20, 60, 0, 0],
        [54, -78, 162, -90, -24, 30, 60, -60, 60, -60],
        [-54, 78, 78, 90, 144, 90, -60, -60, -60, -60],
        [9, -8, -18, -30, -24, 0, 20, 60, 0, 0],
        [-9, 18, -32, 0, 24, 30, 0, 0, -60, 20],
        [9, -18, -8, 0, -24, -30, 0, 0, 60, 20],
    ],
    dtype=np.int64,
)
CUBIC_COEFFICIENTS.setflags(write=False)


def cubic_basis(dx: float, dy: float) -> NDArray[np.float64]:
    """Evaluate [1, x, y, x^2, xy, y^2, x^3, x^2y, xy^2, y^3] at (dx, dy)."""
    x, y = dx, dy
    return np.array(
        [1.0, x, y, x * x, x * y, y * y, x * x * x, x * x * y, x * y * y, y * y * y],
        dtype=np.float64,
    )


def cubic_weights(dx: float, dy: float) -> NDArray[np.float64]:
    """Per-node weights (already divided by the denominator) for a cell offset."""
    return (CUBIC_COEFFICIENTS @ cubic_basis(dx, dy)) / CUBIC_DENOMINATOR


def bilinear(pixel: PixelFn, row: int, col: int, dy: float, dx: float) -> float:
    """
    4-point bilinear interpolation inside a grid cell.

    Corners (rows increase southward, columns eastward):
        NW (row, col)      NE (row, col+1)
        SW (row+1, col)    SE (row+1, col+1)
    """
    nw = pixel(row, col)
    ne = pixel(row, col + 1)
    sw = pixel(row + 1, col)
    se = pixel(row + 1, col + 1)

    return (1.0 - dy) * ((1.0 - dx) * nw + dx * ne) + dy * ((1.0 - dx) * sw + dx * se)


def stencil_values(pixel: PixelFn, row: int, col: int) -> NDArray[np.float64]:
    """Sample the 12 cubic stencil nodes around (row, col)."""
    return np.array(
        [pixel(row + dr, col + dc) for dr, dc in CUBIC_STENCIL],
        dtype=np.float64,
    )


def cubic(pixel: PixelFn, row: int, col: int, dy: float, dx: float) -> float:
    """12-point least-squares cubic interpolation around a grid cell."""
    values = stencil_values(pixel, row, col)
    weighted: Any = (CUBIC_COEFFICIENTS @ cubic_basis(dx, dy)) @ values
    return float(weighted) / CUBIC_DENOMINATOR
