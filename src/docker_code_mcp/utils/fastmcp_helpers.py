"""Helper functions for FastMCP integration."""

from typing import Any

from fastmcp import FastMCP

from docker_code_mcp.utils.safety import OperationSafety
from docker_code_mcp.version import __version__

SERVER_INSTRUCTIONS = (
    "Run commands and edit files inside Docker containers. "
    "File paths refer to the container filesystem; get_compose_file reads the host."
)


def create_fastmcp_app(name: str = "docker-code-mcp") -> FastMCP:
    """Create and configure a FastMCP application instance."""
    return FastMCP(
        name=name,
        version=__version__,
        instructions=SERVER_INSTRUCTIONS,
    )


def get_mcp_annotations(safety_level: OperationSafety) -> dict[str, Any]:
    """Get MCP annotations for a tool based on its safety level.

    >>> get_mcp_annotations(OperationSafety.SAFE)
    {'readOnlyHint': True, 'destructiveHint': False}
    """
    return {
        "readOnlyHint": safety_level == OperationSafety.SAFE,
        "destructiveHint": safety_level == OperationSafety.DESTRUCTIVE,
    }
