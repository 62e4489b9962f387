"""Bearer token authentication for the HTTP transport."""

from docker_code_mcp.auth.middleware import BearerTokenMiddleware

__all__ = ["BearerTokenMiddleware"]
