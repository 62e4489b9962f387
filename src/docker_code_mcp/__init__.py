"""Docker code editing MCP server.

Exposes command execution and file editing inside Docker containers as MCP tools.
"""

from docker_code_mcp.version import __version__

__all__ = ["__version__"]
