"""Registration of every tool with the FastMCP application."""

from typing import Any

from docker_code_mcp.config import Config
from docker_code_mcp.docker_wrapper.client import DockerClientWrapper
from docker_code_mcp.docker_wrapper.executor import CommandRunner
from docker_code_mcp.tools.compose import register_compose_tools
from docker_code_mcp.tools.container import register_container_tools
from docker_code_mcp.tools.files import register_file_tools
from docker_code_mcp.tools.search import register_search_tools
from docker_code_mcp.utils.logger import get_logger

logger = get_logger(__name__)


def register_all_tools(
    app: Any,
    docker_client: DockerClientWrapper,
    config: Config,
) -> dict[str, list[str]]:
    """Register all tools with the application.

    Args:
        app: FastMCP application instance
        docker_client: Docker client wrapper
        config: Full server configuration

    Returns:
        Dictionary mapping category to list of registered tool names

    Example:
        ```python
        from docker_code_mcp.config import Config
        from docker_code_mcp.docker_wrapper.client import DockerClientWrapper
        from docker_code_mcp.tools import register_all_tools
        from docker_code_mcp.utils.fastmcp_helpers import create_fastmcp_app

        config = Config()
        app = create_fastmcp_app()
        registered = register_all_tools(app, DockerClientWrapper(config.docker), config)
        ```
    """
    logger.info("Registering tools...")

    runner = CommandRunner(docker_client, config.execution)
    safety = config.safety

    registered: dict[str, list[str]] = {}
    registered["container"] = register_container_tools(app, docker_client, runner, safety)
    registered["files"] = register_file_tools(app, runner, safety)
    registered["search"] = register_search_tools(app, runner, safety)
    registered["compose"] = register_compose_tools(
        app, docker_client, config.server.compose_file, safety
    )

    total_tools = sum(len(tools) for tools in registered.values())
    logger.info(f"Registered {total_tools} tools across {len(registered)} categories")

    return registered
