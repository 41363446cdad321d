"""Tests for chuk_mcp_geoid.core.interpolation: bilinear and 12-point cubic."""

import itertools

import numpy as np
import pytest

from chuk_mcp_geoid.core.interpolation import (
    CUBIC_COEFFICIENTS,
    CUBIC_DENOMINATOR,
    CUBIC_STENCIL,
    bilinear,
    cubic,
    cubic_basis,
    cubic_weights,
    stencil_values,
)

FRACTIONS = [(0.0, 0.0), (0.25, 0.75), (0.5, 0.5), (0.9, 0.1), (0.999, 0.001)]


def _pixel_from(fn):
    """Pixel accessor over an unbounded lattice defined by fn(row, col)."""
    return lambda row, col: fn(row, col)


# ---------------------------------------------------------------------------
# Coefficient table
# ---------------------------------------------------------------------------


class TestCoefficientTable:
    def test_shape(self):
        assert CUBIC_COEFFICIENTS.shape == (12, 10)
        assert len(CUBIC_STENCIL) == 12

    def test_denominator(self):
        assert CUBIC_DENOMINATOR == 240

    def test_integer_dtype(self):
        assert np.issubdtype(CUBIC_COEFFICIENTS.dtype, np.integer)

    def test_read_only(self):
        with pytest.raises(ValueError):
            CUBIC_COEFFICIENTS[0, 0] = 1

    def test_known_rows(self):
        assert CUBIC_COEFFICIENTS[0].tolist() == [9, -18, -88, 0, 96, 90, 0, 0, -60, -20]
        assert CUBIC_COEFFICIENTS[3].tolist() == [186, -42, -42, -150, -96, -150, 60, 60, 60, 60]
        assert CUBIC_COEFFICIENTS[8].tolist() == [-54, 78, 78, 90, 144, 90, -60, -60, -60, -60]
        assert CUBIC_COEFFICIENTS[11].tolist() == [9, -18, -8, 0, -24, -30, 0, 0, 60, 20]

    def test_stencil_order(self):
        assert CUBIC_STENCIL == (
            (-1, 0), (-1, 1),
            (0, -1), (0, 0), (0, 1), (0, 2),
            (1, -1), (1, 0), (1, 1), (1, 2),
            (2, 0), (2, 1),
        )

    def test_column_sums_partition_of_unity(self):
        sums = CUBIC_COEFFICIENTS.sum(axis=0).tolist()
        assert sums == [240, 0, 0, 0, 0, 0, 0, 0, 0, 0]

    @pytest.mark.parametrize("dx,dy", FRACTIONS)
    def test_weights_sum_to_one(self, dx, dy):
        assert cubic_weights(dx, dy).sum() == pytest.approx(1.0, abs=1e-12)


class TestCubicBasis:
    def test_origin(self):
        assert cubic_basis(0.0, 0.0).tolist() == [1, 0, 0, 0, 0, 0, 0, 0, 0, 0]

    def test_terms(self):
        x, y = 0.5, 0.25
        expected = [1, x, y, x * x, x * y, y * y, x**3, x * x * y, x * y * y, y**3]
        assert cubic_basis(x, y).tolist() == pytest.approx(expected)


# ---------------------------------------------------------------------------
# Bilinear
# ---------------------------------------------------------------------------


class TestBilinear:
    def test_corners(self):
        values = {(0, 0): 10, (0, 1): 20, (1, 0): 30, (1, 1): 40}
        pixel = lambda r, c: values[(r, c)]  # noqa: E731
        assert bilinear(pixel, 0, 0, 0.0, 0.0) == 10
        assert bilinear(pixel, 0, 0, 0.0, 1.0) == 20
        assert bilinear(pixel, 0, 0, 1.0, 0.0) == 30
        assert bilinear(pixel, 0, 0, 1.0, 1.0) == 40

    def test_centre_is_mean(self):
        values = {(0, 0): 10, (0, 1): 20, (1, 0): 30, (1, 1): 40}
        assert bilinear(lambda r, c: values[(r, c)], 0, 0, 0.5, 0.5) == pytest.approx(25.0)

    def test_reads_four_corners_only(self):
        seen = []

        def pixel(r, c):
            seen.append((r, c))
            return 0

        bilinear(pixel, 5, 7, 0.3, 0.6)
        assert sorted(seen) == [(5, 7), (5, 8), (6, 7), (6, 8)]

    @pytest.mark.parametrize("dx,dy", FRACTIONS)
    def test_linear_field_reproduced(self, dx, dy):
        pixel = _pixel_from(lambda r, c: 100 + 3 * c + 7 * r)
        assert bilinear(pixel, 4, 9, dy, dx) == pytest.approx(100 + 3 * (9 + dx) + 7 * (4 + dy))


# ---------------------------------------------------------------------------
# Cubic
# ---------------------------------------------------------------------------


class TestCubic:
    def test_reads_stencil_nodes(self):
        seen = []

        def pixel(r, c):
            seen.append((r, c))
            return 0

        cubic(pixel, 10, 20, 0.5, 0.5)
        assert seen == [(10 + dr, 20 + dc) for dr, dc in CUBIC_STENCIL]

    def test_stencil_values_order(self):
        values = stencil_values(lambda r, c: r * 100 + c, 1, 1)
        assert values.tolist() == [(1 + dr) * 100 + (1 + dc) for dr, dc in CUBIC_STENCIL]

    @pytest.mark.parametrize("dx,dy", FRACTIONS)
    def test_constant_field(self, dx, dy):
        assert cubic(lambda r, c: 5000, 3, 3, dy, dx) == pytest.approx(5000.0, abs=1e-9)

    @pytest.mark.parametrize("dx,dy", FRACTIONS)
    def test_cubic_polynomial_reproduced(self, dx, dy):
        def f(y, x):
            return 50 + 2 * x - 3 * y + x * x - x * y + 0.5 * y * y + 0.1 * x**3 - 0.2 * x * y * y

        value = cubic(_pixel_from(f), 0, 0, dy, dx)
        assert value == pytest.approx(f(dy, dx), abs=1e-9)

    @pytest.mark.parametrize(
        "power",
        [(i, j) for i, j in itertools.product(range(4), repeat=2) if i + j <= 3],
    )
    def test_each_monomial_reproduced(self, power):
        px, py = power
        dx, dy = 0.3, 0.6
        value = cubic(_pixel_from(lambda r, c: c**px * r**py), 0, 0, dy, dx)
        assert value == pytest.approx(dx**px * dy**py, abs=1e-12)

    def test_node_value_for_polynomial_field(self):
        pixel = _pixel_from(lambda r, c: 1000 + 10 * c + 20 * r)
        assert cubic(pixel, 4, 6, 0.0, 0.0) == pytest.approx(pixel(4, 6))

    def test_not_interpolating_for_spike(self):
        # Least-squares fit: a lone spike at the node is smoothed, not reproduced
        pixel = _pixel_from(lambda r, c: 240 if (r, c) == (0, 0) else 0)
        assert cubic(pixel, 0, 0, 0.0, 0.0) == pytest.approx(186.0)
