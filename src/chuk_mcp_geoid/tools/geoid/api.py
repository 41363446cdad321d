"""
Geoid tools — point and batch geoid height queries, grid inspection.

Heights are read from the configured GeographicLib PGM grid with either
bilinear or 12-point cubic interpolation.
"""

import logging

from ...constants import (
    INTERPOLATION_METHODS,
    ErrorMessages,
    SuccessMessages,
)
from ...models.responses import (
    ErrorResponse,
    GridInfoResponse,
    HeightResponse,
    MultiHeightResponse,
    PointInfo,
    format_response,
)

logger = logging.getLogger(__name__)


def _check_interpolation(interpolation: str | None) -> None:
    if interpolation is not None and interpolation not in INTERPOLATION_METHODS:
        raise ValueError(
            ErrorMessages.INVALID_INTERPOLATION.format(
                interpolation, ", ".join(INTERPOLATION_METHODS)
            )
        )


def _grid_info_response(result, message: str) -> GridInfoResponse:
    return GridInfoResponse(
        path=result.path,
        model_id=result.model_id,
        description=result.description,
        width=result.width,
        height=result.height,
        lat_res_deg=result.lat_res_deg,
        lon_res_deg=result.lon_res_deg,
        offset_m=result.offset_m,
        scale_m=result.scale_m,
        metadata=result.metadata,
        message=message,
    )


def register_geoid_tools(mcp, manager):
    """Register geoid query tools with the MCP server."""

    @mcp.tool()
    async def geoid_height(
        lat: float,
        lon: float,
        interpolation: str | None = None,
        output_mode: str = "json",
    ) -> str:
        """Get the geoid undulation (geoid height above the WGS-84 ellipsoid) at a point.

        Add the result to an orthometric (mean-sea-level) height to get an
        ellipsoidal height; subtract it to go the other way.

        Args:
            lat: Latitude (-90 to 90)
            lon: Longitude in degrees east (any value, wrapped to 0-360)
            interpolation: "cubic" (default, more accurate) or "bilinear"
            output_mode: "json" or "text"

        Returns:
            Geoid height in metres with the grid's published error bound
        """
        try:
            _check_interpolation(interpolation)
            method = interpolation or manager.default_interpolation

            result = await manager.fetch_height(lat=lat, lon=lon, interpolation=method)

            response = HeightResponse(
                lat=lat,
                lon=lon,
                height_m=result.height_m,
                interpolation=method,
                uncertainty_m=result.uncertainty_m,
                message=SuccessMessages.HEIGHT.format(result.height_m, method),
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"geoid_height failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)

    @mcp.tool()
    async def geoid_heights(
        points: list[list[float]],
        interpolation: str | None = None,
        output_mode: str = "json",
    ) -> str:
        """Get geoid heights at multiple points in a single request.

        Args:
            points: List of [lat, lon] coordinate pairs
            interpolation: "cubic" (default) or "bilinear"
            output_mode: "json" or "text"

        Returns:
            Geoid height for each point with range statistics
        """
        try:
            _check_interpolation(interpolation)
            method = interpolation or manager.default_interpolation

            result = await manager.fetch_heights(points=points, interpolation=method)

            point_infos = [
                PointInfo(lat=p[0], lon=p[1], height_m=h) for p, h in zip(points, result.heights)
            ]

            response = MultiHeightResponse(
                point_count=len(points),
                points=point_infos,
                height_range=result.height_range,
                interpolation=method,
                uncertainty_m=result.uncertainty_m,
                message=SuccessMessages.HEIGHTS.format(len(points)),
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"geoid_heights failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)

    @mcp.tool()
    async def geoid_grid_info(output_mode: str = "json") -> str:
        """Describe the configured geoid grid: size, resolution, calibration, and model.

        Args:
            output_mode: "json" or "text"

        Returns:
            Grid geometry and calibration constants
        """
        try:
            result = await manager.get_info()
            message = SuccessMessages.GRID_INFO.format(
                result.width, result.height, result.lat_res_deg, result.lon_res_deg
            )
            return format_response(_grid_info_response(result, message), output_mode)

        except Exception as e:
            logger.error(f"geoid_grid_info failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)

    @mcp.tool()
    async def geoid_open_grid(
        path: str,
        cache_rows: int | None = None,
        output_mode: str = "json",
    ) -> str:
        """Open a GeographicLib .pgm geoid grid and use it for subsequent queries.

        Args:
            path: Path to the grid file (e.g., /usr/share/GeographicLib/geoids/egm96-5.pgm)
            cache_rows: Number of grid rows kept in memory (minimum 4)
            output_mode: "json" or "text"

        Returns:
            Description of the newly opened grid
        """
        try:
            result = await manager.open_grid(path, cache_rows=cache_rows)
            message = SuccessMessages.GRID_OPENED.format(result.path)
            return format_response(_grid_info_response(result, message), output_mode)

        except Exception as e:
            logger.error(f"geoid_open_grid failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)
