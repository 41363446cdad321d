"""
Constants for chuk-mcp-geoid server.

All magic strings, grid format values, and configuration defaults live here.
"""


class ServerConfig:
    NAME = "chuk-mcp-geoid"
    VERSION = "0.1.0"
    DESCRIPTION = "Geoid Undulation Lookup & Interpolation MCP Server"


class EnvVar:
    GRID_PATH = "GEOID_GRID_PATH"
    CACHE_ROWS = "GEOID_CACHE_ROWS"
    DEFAULT_INTERPOLATION = "GEOID_DEFAULT_INTERPOLATION"
    MCP_STDIO = "MCP_STDIO"


# PGM grid format
PGM_MAGIC = b"P5"
PGM_MAXVAL = 65535
BYTES_PER_SAMPLE = 2
OFFSET_TAG = "Offset"
SCALE_TAG = "Scale"

# Header comments that carry GeographicLib's published error bounds
MAX_BILINEAR_ERROR_KEY = "MaxBilinearError"
MAX_CUBIC_ERROR_KEY = "MaxCubicError"

# Row cache
DEFAULT_CACHE_ROWS = 16
MIN_CACHE_ROWS = 4

# Interpolation methods
INTERPOLATION_METHODS = ["bilinear", "cubic"]
DEFAULT_INTERPOLATION = "cubic"

# Retry (service layer only; the grid itself never retries)
RETRY_ATTEMPTS = 2
RETRY_WAIT_MIN = 0.1
RETRY_WAIT_MAX = 1.0

# Greenwich Observatory, used when the CLI is given no coordinates
DEFAULT_LAT = 51.477928
DEFAULT_LON = -0.001545


class GeoidModel:
    EGM84_15 = "egm84-15"
    EGM84_30 = "egm84-30"
    EGM96_5 = "egm96-5"
    EGM96_15 = "egm96-15"
    EGM2008_1 = "egm2008-1"
    EGM2008_2_5 = "egm2008-2_5"
    EGM2008_5 = "egm2008-5"


# GeographicLib distributes each model as <id>.pgm
GEOID_MODELS: dict[str, dict] = {
    GeoidModel.EGM84_15: {
        "id": GeoidModel.EGM84_15,
        "model": "EGM84",
        "spacing_arcmin": 15.0,
        "filename": "egm84-15.pgm",
    },
    GeoidModel.EGM84_30: {
        "id": GeoidModel.EGM84_30,
        "model": "EGM84",
        "spacing_arcmin": 30.0,
        "filename": "egm84-30.pgm",
    },
    GeoidModel.EGM96_5: {
        "id": GeoidModel.EGM96_5,
        "model": "EGM96",
        "spacing_arcmin": 5.0,
        "filename": "egm96-5.pgm",
    },
    GeoidModel.EGM96_15: {
        "id": GeoidModel.EGM96_15,
        "model": "EGM96",
        "spacing_arcmin": 15.0,
        "filename": "egm96-15.pgm",
    },
    GeoidModel.EGM2008_1: {
        "id": GeoidModel.EGM2008_1,
        "model": "EGM2008",
        "spacing_arcmin": 1.0,
        "filename": "egm2008-1.pgm",
    },
    GeoidModel.EGM2008_2_5: {
        "id": GeoidModel.EGM2008_2_5,
        "model": "EGM2008",
        "spacing_arcmin": 2.5,
        "filename": "egm2008-2_5.pgm",
    },
    GeoidModel.EGM2008_5: {
        "id": GeoidModel.EGM2008_5,
        "model": "EGM2008",
        "spacing_arcmin": 5.0,
        "filename": "egm2008-5.pgm",
    },
}

ALL_MODEL_IDS = list(GEOID_MODELS.keys())


def grid_shape_for_spacing(spacing_arcmin: float) -> tuple[int, int]:
    """Return (width, height) of a global grid with the given node spacing."""
    per_degree = 60.0 / spacing_arcmin
    width = int(round(360.0 * per_degree))
    height = int(round(180.0 * per_degree)) + 1
    return width, height


class ErrorMessages:
    CANNOT_OPEN = "Cannot open geoid grid '{}': {}"
    BAD_MAGIC = "Not a binary PGM (P5) file. Magic={!r}"
    UNEXPECTED_EOF = "Unexpected end of file while reading PGM header ({})"
    BAD_DIMENSIONS = "Could not parse width/height from PGM header line {!r}"
    INVALID_DIMENSIONS = "Invalid grid dimensions {}x{}: width must be >= 1 and height >= 2"
    BAD_MAXVAL = "Expected 16-bit PGM (maxval={}), got {!r}"
    MISSING_CALIBRATION = "PGM header is missing # {} comment"
    NON_FINITE_CALIBRATION = "Calibration value # {} is not finite: {}"
    SEEK_FAILED = "Seek failed for row {} (byte {}): {}"
    SHORT_READ = "Short read for row {}: expected {} bytes, got {}"
    GRID_CLOSED = "Geoid grid '{}' has been closed"
    INVALID_INTERPOLATION = "Invalid interpolation '{}'. Available: {}"
    INVALID_LATITUDE = "Latitude must be between -90 and 90, got {}"
    INVALID_LONGITUDE = "Longitude must be a finite number, got {}"
    INVALID_POINT = "Each point must be a [lat, lon] pair, got {!r}"
    NO_GRID_CONFIGURED = (
        "No geoid grid configured. Set the GEOID_GRID_PATH environment variable "
        "or call geoid_open_grid with a path to a GeographicLib .pgm file."
    )
    UNKNOWN_MODEL = "Unknown geoid model '{}'. Available: {}"


class SuccessMessages:
    GRID_INFO = "Grid {}x{} ({:.4f} x {:.4f} deg)"
    GRID_OPENED = "Opened geoid grid {}"
    HEIGHT = "Geoid height: {:.4f}m ({})"
    HEIGHTS = "Computed geoid height for {} points"
    MODELS_LIST = "{} geoid models known"
    STATUS = "Geoid MCP Server v{} (grid: {})"
