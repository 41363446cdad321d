"""
Response models for chuk-mcp-geoid tools.

All tool responses are Pydantic models for type safety and consistent API.
"""

from pydantic import BaseModel, ConfigDict, Field


def format_response(model: BaseModel, output_mode: str = "json") -> str:
    """Format a response model as JSON or human-readable text.

    Args:
        model: Pydantic response model instance
        output_mode: "json" (default) or "text"

    Returns:
        Formatted string
    """
    if output_mode == "text" and hasattr(model, "to_text"):
        return str(model.to_text())
    return str(model.model_dump_json())


class ErrorResponse(BaseModel):
    """Error response model for tool failures."""

    model_config = ConfigDict(extra="forbid")

    error: str = Field(..., description="Error message describing what went wrong")

    def to_text(self) -> str:
        return f"Error: {self.error}"


class GridInfoResponse(BaseModel):
    """Response model for describing the open geoid grid."""

    model_config = ConfigDict(extra="forbid")

    path: str = Field(..., description="Path of the grid file")
    model_id: str | None = Field(None, description="Identified geoid model (e.g., egm96-5)")
    description: str | None = Field(None, description="Description comment from the header")
    width: int = Field(..., description="Number of columns (longitude samples)", ge=1)
    height: int = Field(..., description="Number of rows (latitude samples)", ge=2)
    lat_res_deg: float = Field(..., description="Degrees of latitude per row")
    lon_res_deg: float = Field(..., description="Degrees of longitude per column")
    offset_m: float = Field(..., description="Calibration offset in metres")
    scale_m: float = Field(..., description="Calibration scale in metres per raw unit")
    metadata: dict[str, str] = Field(
        default_factory=dict, description="Other header comments (key -> value)"
    )
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        lines = [
            f"Grid: {self.path}",
            f"Model: {self.model_id or 'unknown'}",
            f"Size: {self.width} x {self.height}",
            f"Resolution: {self.lat_res_deg:.6f} deg (lat) x {self.lon_res_deg:.6f} deg (lon)",
            f"Calibration: offset {self.offset_m} m, scale {self.scale_m} m",
        ]
        if self.description:
            lines.insert(1, f"Description: {self.description}")
        return "\n".join(lines)


class HeightResponse(BaseModel):
    """Response model for single-point geoid height query."""

    model_config = ConfigDict(extra="forbid")

    lat: float = Field(..., description="Latitude of the query point")
    lon: float = Field(..., description="Longitude of the query point")
    height_m: float = Field(..., description="Geoid height above the WGS-84 ellipsoid in metres")
    interpolation: str = Field(..., description="Interpolation method used")
    uncertainty_m: float | None = Field(
        None, description="Maximum interpolation error published in the grid header"
    )
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        lines = [
            f"Geoid height at ({self.lat:.6f}, {self.lon:.6f}): {self.height_m:+.4f}m",
            f"Interpolation: {self.interpolation}",
        ]
        if self.uncertainty_m is not None:
            lines.append(f"Max interpolation error: +/-{self.uncertainty_m:.3f}m")
        return "\n".join(lines)


class PointInfo(BaseModel):
    """Geoid height for a single point in a multi-point query."""

    model_config = ConfigDict(extra="forbid")

    lat: float = Field(..., description="Latitude")
    lon: float = Field(..., description="Longitude")
    height_m: float = Field(..., description="Geoid height in metres")


class MultiHeightResponse(BaseModel):
    """Response model for multi-point geoid height query."""

    model_config = ConfigDict(extra="forbid")

    point_count: int = Field(..., description="Number of points queried", ge=0)
    points: list[PointInfo] = Field(..., description="Per-point geoid heights")
    height_range: list[float] = Field(..., description="[min, max] geoid height in metres")
    interpolation: str = Field(..., description="Interpolation method used")
    uncertainty_m: float | None = Field(
        None, description="Maximum interpolation error published in the grid header"
    )
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        lines = [self.message]
        for p in self.points:
            lines.append(f"  ({p.lat:.6f}, {p.lon:.6f}): {p.height_m:+.4f}m")
        if self.points:
            lines.append(f"Range: {self.height_range[0]:+.4f}m to {self.height_range[1]:+.4f}m")
        return "\n".join(lines)


class ModelInfo(BaseModel):
    """Summary information about a GeographicLib geoid grid."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., description="Grid identifier (e.g., egm96-5)")
    model: str = Field(..., description="Gravity model (EGM84, EGM96, EGM2008)")
    spacing_arcmin: float = Field(..., description="Node spacing in arc-minutes", gt=0)
    filename: str = Field(..., description="GeographicLib file name")

    def to_text(self) -> str:
        return f"{self.id}: {self.model} ({self.spacing_arcmin:g}' grid, {self.filename})"


class ModelsResponse(BaseModel):
    """Response model for listing known geoid grids."""

    model_config = ConfigDict(extra="forbid")

    models: list[ModelInfo] = Field(..., description="Known geoid grids")
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        lines = [self.message, ""]
        for m in self.models:
            lines.append(f"  {m.to_text()}")
        return "\n".join(lines)


class CacheStats(BaseModel):
    """Row cache counters."""

    model_config = ConfigDict(extra="forbid")

    size: int = Field(..., description="Rows currently cached", ge=0)
    capacity: int = Field(..., description="Maximum rows kept in memory", ge=0)
    hits: int = Field(..., description="Row lookups served from memory", ge=0)
    misses: int = Field(..., description="Row lookups that read from disk", ge=0)
    evictions: int = Field(..., description="Rows evicted under capacity pressure", ge=0)


class StatusResponse(BaseModel):
    """Response model for server status queries."""

    model_config = ConfigDict(extra="forbid")

    server: str = Field(default="chuk-mcp-geoid", description="Server name")
    version: str = Field(default="0.1.0", description="Server version")
    grid_path: str | None = Field(None, description="Configured grid file")
    grid_open: bool = Field(default=False, description="Whether the grid file is open")
    default_interpolation: str = Field(..., description="Default interpolation method")
    cache: CacheStats = Field(..., description="Row cache counters")

    def to_text(self) -> str:
        grid_state = "open" if self.grid_open else "not open"
        lines = [
            f"{self.server} v{self.version}",
            f"Grid: {self.grid_path or 'not configured'} ({grid_state})",
            f"Default interpolation: {self.default_interpolation}",
            f"Cache: {self.cache.size}/{self.cache.capacity} rows, "
            f"{self.cache.hits} hits, {self.cache.misses} misses, "
            f"{self.cache.evictions} evictions",
        ]
        return "\n".join(lines)


class CapabilitiesResponse(BaseModel):
    """Response model for server capabilities listing."""

    model_config = ConfigDict(extra="forbid")

    server: str = Field(..., description="Server name")
    version: str = Field(..., description="Server version")
    models: list[ModelInfo] = Field(..., description="Known geoid grids")
    interpolation_methods: list[str] = Field(..., description="Available interpolation methods")
    default_interpolation: str = Field(..., description="Default interpolation method")
    tool_count: int = Field(..., description="Number of available tools", ge=0)
    llm_guidance: str = Field(..., description="Guidance for LLM tool usage")
    message: str = Field(..., description="Operation result message")

    def to_text(self) -> str:
        lines = [
            f"{self.server} v{self.version}",
            f"Tools: {self.tool_count}",
            f"Interpolation: {', '.join(self.interpolation_methods)} "
            f"(default {self.default_interpolation})",
            "",
            "Known grids:",
        ]
        for m in self.models:
            lines.append(f"  {m.to_text()}")
        lines.append("")
        lines.append(self.llm_guidance)
        return "\n".join(lines)
