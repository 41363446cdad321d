"""Tests for chuk_mcp_geoid.core.pgm_header: PGM header parsing."""

import io

import numpy as np
import pytest

from chuk_mcp_geoid.core.errors import (
    CalibrationMissingError,
    GridDepthError,
    GridFormatError,
)
from chuk_mcp_geoid.core.pgm_header import GridDescriptor, parse_header


@pytest.fixture
def small_data():
    return np.arange(12, dtype=np.uint16).reshape(3, 4)


def _parse(raw: bytes) -> GridDescriptor:
    return parse_header(io.BytesIO(raw))


# ---------------------------------------------------------------------------
# Valid headers
# ---------------------------------------------------------------------------


class TestValidHeader:
    def test_dimensions_on_one_line(self, pgm_bytes, small_data):
        d = _parse(pgm_bytes(small_data))
        assert d.width == 4
        assert d.height == 3

    def test_dimensions_on_two_lines(self, pgm_bytes, small_data):
        d = _parse(pgm_bytes(small_data, split_dims=True))
        assert d.width == 4
        assert d.height == 3

    def test_calibration_values(self, pgm_bytes, small_data):
        d = _parse(pgm_bytes(small_data, offset=-108, scale=0.003))
        assert d.offset == -108.0
        assert d.scale == pytest.approx(0.003)

    def test_exponent_and_sign(self, pgm_bytes, small_data):
        d = _parse(pgm_bytes(small_data, offset="+1.5e2", scale="3E-3"))
        assert d.offset == 150.0
        assert d.scale == pytest.approx(0.003)

    def test_tags_are_case_insensitive(self, small_data):
        raw = b"P5\n# OFFSET -50\n# scale 0.01\n4 3\n65535\n" + small_data.astype(">u2").tobytes()
        d = _parse(raw)
        assert d.offset == -50.0
        assert d.scale == 0.01

    def test_derived_resolutions(self, pgm_bytes):
        data = np.zeros((61, 121), dtype=np.uint16)
        d = _parse(pgm_bytes(data))
        assert d.lat_res == pytest.approx(180.0 / 60)
        assert d.lon_res == pytest.approx(360.0 / 121)

    def test_data_offset_points_at_first_pixel(self, pgm_bytes, small_data):
        raw = pgm_bytes(small_data)
        d = _parse(raw)
        assert d.data_offset == len(raw) - small_data.size * 2
        assert raw[d.data_offset : d.data_offset + 2] == b"\x00\x00"

    def test_stream_left_at_data_offset(self, pgm_bytes, small_data):
        stream = io.BytesIO(pgm_bytes(small_data, split_dims=True))
        d = parse_header(stream)
        assert stream.tell() == d.data_offset

    def test_row_bytes(self, pgm_bytes, small_data):
        d = _parse(pgm_bytes(small_data))
        assert d.row_bytes == 8

    def test_crlf_line_endings(self, small_data):
        raw = b"P5\r\n# Offset 1\r\n# Scale 2\r\n4 3\r\n65535\r\n" + small_data.astype(">u2").tobytes()
        d = _parse(raw)
        assert (d.width, d.height, d.offset, d.scale) == (4, 3, 1.0, 2.0)


class TestMetadata:
    def test_other_comments_collected(self, pgm_bytes, small_data):
        d = _parse(
            pgm_bytes(
                small_data,
                comments=["Description WGS84 EGM96, 5-minute grid", "Vertical_Datum WGS84"],
            )
        )
        assert d.metadata["Description"] == "WGS84 EGM96, 5-minute grid"
        assert d.metadata["Vertical_Datum"] == "WGS84"
        assert "Offset" not in d.metadata

    def test_unmatched_comments_ignored(self, pgm_bytes, small_data):
        d = _parse(pgm_bytes(small_data, comments=["just some words", "#"]))
        assert d.width == 4

    def test_max_error_cubic_and_bilinear(self, pgm_bytes, small_data):
        d = _parse(
            pgm_bytes(small_data, comments=["MaxBilinearError 0.140", "MaxCubicError 0.003"])
        )
        assert d.max_error(cubic=True) == pytest.approx(0.003)
        assert d.max_error(cubic=False) == pytest.approx(0.140)

    def test_max_error_absent(self, pgm_bytes, small_data):
        d = _parse(pgm_bytes(small_data))
        assert d.max_error(cubic=True) is None

    def test_max_error_unparseable(self, pgm_bytes, small_data):
        d = _parse(pgm_bytes(small_data, comments=["MaxCubicError n/a"]))
        assert d.max_error(cubic=True) is None


# ---------------------------------------------------------------------------
# Rejections
# ---------------------------------------------------------------------------


class TestFormatErrors:
    def test_wrong_magic(self, pgm_bytes, small_data):
        with pytest.raises(GridFormatError, match="P5"):
            _parse(pgm_bytes(small_data, magic="P2"))

    def test_wrong_magic_is_not_calibration_or_depth(self, pgm_bytes, small_data):
        with pytest.raises(GridFormatError) as exc:
            _parse(pgm_bytes(small_data, magic="P6"))
        assert not isinstance(exc.value, (CalibrationMissingError, GridDepthError))

    def test_empty_stream(self):
        with pytest.raises(GridFormatError):
            _parse(b"")

    def test_eof_in_comments(self):
        with pytest.raises(GridFormatError, match="Unexpected end of file"):
            _parse(b"P5\n# Offset 1\n# Scale 2\n")

    def test_eof_before_row_count(self):
        with pytest.raises(GridFormatError, match="row count"):
            _parse(b"P5\n# Offset 1\n# Scale 2\n4\n")

    def test_eof_before_maxval(self):
        with pytest.raises(GridFormatError, match="maximum value"):
            _parse(b"P5\n# Offset 1\n# Scale 2\n4 3\n")

    def test_non_numeric_dimension_line(self):
        with pytest.raises(GridFormatError, match="width/height"):
            _parse(b"P5\n# Offset 1\n# Scale 2\nfour three\n65535\n")

    def test_three_numbers_on_dimension_line(self):
        with pytest.raises(GridFormatError, match="width/height"):
            _parse(b"P5\n# Offset 1\n# Scale 2\n4 3 2\n65535\n")

    def test_bad_second_dimension_line(self):
        with pytest.raises(GridFormatError, match="width/height"):
            _parse(b"P5\n# Offset 1\n# Scale 2\n4\nx\n65535\n")

    def test_non_ascii_digit_dimension(self):
        # latin-1 \xb2 decodes to a superscript two, which str.isdigit accepts
        with pytest.raises(GridFormatError, match="width/height"):
            _parse(b"P5\n# Offset 0\n# Scale 1\n4 \xb2\n65535\n" + b"\0" * 16)

    def test_non_ascii_digit_row_count(self):
        with pytest.raises(GridFormatError, match="width/height"):
            _parse(b"P5\n# Offset 0\n# Scale 1\n4\n\xb3\n65535\n" + b"\0" * 16)

    def test_negative_dimension(self):
        with pytest.raises(GridFormatError):
            _parse(b"P5\n# Offset 1\n# Scale 2\n-4 3\n65535\n")

    def test_height_below_two(self):
        with pytest.raises(GridFormatError, match="Invalid grid dimensions"):
            _parse(b"P5\n# Offset 1\n# Scale 2\n4 1\n65535\n")

    def test_zero_width(self):
        with pytest.raises(GridFormatError, match="Invalid grid dimensions"):
            _parse(b"P5\n# Offset 1\n# Scale 2\n0 3\n65535\n")

    def test_infinite_scale(self, pgm_bytes, small_data):
        with pytest.raises(GridFormatError, match="not finite"):
            _parse(pgm_bytes(small_data, scale="1e999"))


class TestDepthErrors:
    def test_8bit_maxval(self, pgm_bytes, small_data):
        with pytest.raises(GridDepthError, match="65535"):
            _parse(pgm_bytes(small_data, maxval="255"))

    def test_non_numeric_maxval(self, pgm_bytes, small_data):
        with pytest.raises(GridDepthError):
            _parse(pgm_bytes(small_data, maxval="big"))

    def test_depth_error_is_format_error(self):
        assert issubclass(GridDepthError, GridFormatError)


class TestCalibrationMissing:
    def test_missing_offset(self, pgm_bytes, small_data):
        with pytest.raises(CalibrationMissingError, match="Offset") as exc:
            _parse(pgm_bytes(small_data, offset=None))
        assert exc.value.missing == ["Offset"]

    def test_missing_scale(self, pgm_bytes, small_data):
        with pytest.raises(CalibrationMissingError, match="Scale") as exc:
            _parse(pgm_bytes(small_data, scale=None))
        assert exc.value.missing == ["Scale"]

    def test_missing_both(self, pgm_bytes, small_data):
        with pytest.raises(CalibrationMissingError) as exc:
            _parse(pgm_bytes(small_data, offset=None, scale=None))
        assert exc.value.missing == ["Offset", "Scale"]

    def test_depth_checked_before_calibration(self, pgm_bytes, small_data):
        with pytest.raises(GridDepthError):
            _parse(pgm_bytes(small_data, offset=None, maxval="255"))

    def test_calibration_after_dimensions_not_seen(self, small_data):
        raw = b"P5\n# Offset 1\n4 3\n# Scale 2\n65535\n"
        with pytest.raises(GridDepthError):
            _parse(raw)


class TestGridDescriptor:
    def test_frozen(self, pgm_bytes, small_data):
        d = _parse(pgm_bytes(small_data))
        with pytest.raises(AttributeError):
            d.width = 10  # type: ignore[misc]

    def test_direct_construction_validates(self):
        with pytest.raises(GridFormatError):
            GridDescriptor(offset=0.0, scale=1.0, width=4, height=1, data_offset=0)

    def test_direct_construction_nan_offset(self):
        with pytest.raises(GridFormatError):
            GridDescriptor(offset=float("nan"), scale=1.0, width=4, height=3, data_offset=0)
