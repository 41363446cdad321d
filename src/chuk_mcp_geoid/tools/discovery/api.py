"""
Discovery tools — geoid model listing, status, capabilities.

These tools do no grid I/O and return information about known geoid
grids and server configuration.
"""

import logging

from ...constants import (
    INTERPOLATION_METHODS,
    ServerConfig,
    SuccessMessages,
)
from ...models.responses import (
    CacheStats,
    CapabilitiesResponse,
    ErrorResponse,
    ModelInfo,
    ModelsResponse,
    StatusResponse,
    format_response,
)

logger = logging.getLogger(__name__)

TOOL_COUNT = 7


def register_discovery_tools(mcp, manager):
    """Register discovery tools with the MCP server."""

    @mcp.tool()
    async def geoid_list_models(output_mode: str = "json") -> str:
        """List the GeographicLib geoid grids (EGM84, EGM96, EGM2008) and their spacing.

        Args:
            output_mode: "json" for structured data, "text" for human-readable summary

        Returns:
            Known geoid grids with model name, node spacing, and file name
        """
        try:
            models = [ModelInfo(**m) for m in manager.list_models()]
            response = ModelsResponse(
                models=models,
                message=SuccessMessages.MODELS_LIST.format(len(models)),
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"geoid_list_models failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)

    @mcp.tool()
    async def geoid_status(output_mode: str = "json") -> str:
        """Get server status including version, configured grid, and row cache counters.

        Args:
            output_mode: "json" for structured data, "text" for human-readable summary

        Returns:
            Server status information
        """
        try:
            response = StatusResponse(
                server=ServerConfig.NAME,
                version=ServerConfig.VERSION,
                grid_path=manager.grid_path,
                grid_open=manager.grid_open,
                default_interpolation=manager.default_interpolation,
                cache=CacheStats(**manager.cache_stats()),
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"geoid_status failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)

    @mcp.tool()
    async def geoid_capabilities(output_mode: str = "json") -> str:
        """Get full server capabilities including known grids and interpolation methods.

        Args:
            output_mode: "json" for structured data, "text" for human-readable summary

        Returns:
            Complete server capabilities
        """
        try:
            models = [ModelInfo(**m) for m in manager.list_models()]

            response = CapabilitiesResponse(
                server=ServerConfig.NAME,
                version=ServerConfig.VERSION,
                models=models,
                interpolation_methods=INTERPOLATION_METHODS,
                default_interpolation=manager.default_interpolation,
                tool_count=TOOL_COUNT,
                llm_guidance=(
                    "Use geoid_height for a single point and geoid_heights for many. "
                    "Heights are geoid undulations N in metres: ellipsoidal height "
                    "h = orthometric height H + N. Cubic interpolation is the default "
                    "and most accurate; bilinear is slightly faster. "
                    "Use geoid_grid_info to see which grid is loaded and "
                    "geoid_open_grid to switch grids."
                ),
                message=f"{ServerConfig.NAME} v{ServerConfig.VERSION} capabilities",
            )
            return format_response(response, output_mode)

        except Exception as e:
            logger.error(f"geoid_capabilities failed: {e}")
            return format_response(ErrorResponse(error=str(e)), output_mode)
