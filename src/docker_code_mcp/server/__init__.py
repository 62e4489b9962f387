"""Server assembly: FastMCP app, middleware and tool registration."""

from docker_code_mcp.server.server import DockerCodeServer

__all__ = ["DockerCodeServer"]
