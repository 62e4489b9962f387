"""FastMCP middleware."""

from docker_code_mcp.middleware.debug_logging import DebugLoggingMiddleware

__all__ = ["DebugLoggingMiddleware"]
