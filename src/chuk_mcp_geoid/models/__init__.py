"""Response models for chuk-mcp-geoid."""

from .responses import (
    CacheStats,
    CapabilitiesResponse,
    ErrorResponse,
    GridInfoResponse,
    HeightResponse,
    ModelInfo,
    ModelsResponse,
    MultiHeightResponse,
    PointInfo,
    StatusResponse,
    format_response,
)

__all__ = [
    "ErrorResponse",
    "GridInfoResponse",
    "HeightResponse",
    "PointInfo",
    "MultiHeightResponse",
    "ModelInfo",
    "ModelsResponse",
    "CacheStats",
    "StatusResponse",
    "CapabilitiesResponse",
    "format_response",
]
