"""FastMCP server assembly for docker-code-mcp."""

import asyncio

from fastmcp import FastMCP
from starlette.middleware import Middleware

from docker_code_mcp.auth import BearerTokenMiddleware
from docker_code_mcp.config import Config
from docker_code_mcp.docker_wrapper.client import DockerClientWrapper
from docker_code_mcp.middleware import DebugLoggingMiddleware
from docker_code_mcp.tools import register_all_tools
from docker_code_mcp.utils.errors import DockerHealthCheckError
from docker_code_mcp.utils.fastmcp_helpers import create_fastmcp_app
from docker_code_mcp.utils.logger import get_logger

logger = get_logger(__name__)


class DockerCodeServer:
    """FastMCP application exposing the container tools.

    Owns the Docker client wrapper shared by all tools and the HTTP
    middleware used by the streamable HTTP transport.
    """

    def __init__(self, config: Config) -> None:
        self.config = config
        self.docker_client = DockerClientWrapper(config.docker)

        logger.info("Initializing docker-code-mcp server")
        self.app = create_fastmcp_app(name=config.server.server_name)

        self.debug_middleware = DebugLoggingMiddleware(debug_enabled=config.server.debug_mode)
        # Middleware is protocol-compatible without inheriting from the base class
        self.app.add_middleware(self.debug_middleware)  # type: ignore[arg-type]

        self.registered_tools = register_all_tools(self.app, self.docker_client, config)

        if self.docker_client.default_container:
            logger.info(f"Target container: {self.docker_client.default_container}")
        else:
            logger.warning(
                "No target container configured. Set DOCKER_CONTAINER_ID or pass container_id "
                "to each tool call."
            )

    @property
    def tool_names(self) -> list[str]:
        return [name for names in self.registered_tools.values() for name in names]

    def http_middleware(self) -> list[Middleware]:
        """Starlette middleware for the HTTP transport (bearer token check when configured)."""
        auth_token = self.config.server.auth_token
        if auth_token is None:
            logger.warning("No MCP_AUTH_TOKEN set - running without authentication")
            return []

        logger.info("Authentication enabled")
        return [Middleware(BearerTokenMiddleware, token=auth_token.get_secret_value())]

    async def start(self) -> None:
        """Check the Docker daemon before serving requests."""
        logger.info("Starting docker-code-mcp server")
        try:
            health = await asyncio.to_thread(self.docker_client.health_check)
            logger.info(
                f"Docker daemon is healthy (server {health['server_version']}, "
                f"API {health['api_version']})"
            )
        except DockerHealthCheckError as e:
            logger.warning(f"Docker daemon health check failed: {e}")

    async def stop(self) -> None:
        """Release the Docker client."""
        logger.info("Stopping docker-code-mcp server")
        await asyncio.to_thread(self.docker_client.close)

    def get_app(self) -> FastMCP:
        return self.app
