"""Compose file tool.

Unlike the other tools this one reads the host filesystem where the server
runs, not the container.
"""

import asyncio
import os
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import Field

from docker_code_mcp.config import SafetyConfig
from docker_code_mcp.docker_wrapper.client import DockerClientWrapper
from docker_code_mcp.tools.filters import ToolSpec, register_tools_with_filtering
from docker_code_mcp.utils.logger import get_logger
from docker_code_mcp.utils.safety import OperationSafety
from docker_code_mcp.utils.tool_errors import log_call, returns_error_text

logger = get_logger(__name__)

RULE_WIDTH = 60

FALLBACK_COMPOSE_PATHS = (
    "docker/compose.yaml",
    "docker/compose.yml",
    "docker-compose.yaml",
    "docker-compose.yml",
    "compose.yaml",
    "compose.yml",
)


def candidate_paths(requested: str) -> list[str]:
    """The requested path followed by the conventional compose file locations."""
    return [requested, *FALLBACK_COMPOSE_PATHS]


def find_compose_file(requested: str, cwd: Path | None = None) -> tuple[str, str] | None:
    """Return ``(path, content)`` of the first readable candidate, or None."""
    base = cwd or Path.cwd()
    for candidate in candidate_paths(requested):
        resolved = base / candidate
        try:
            return candidate, resolved.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Compose file candidate {resolved} not usable: {e}")
    return None


def list_services(content: str) -> list[str]:
    """Service names declared in compose ``content`` (empty if it does not parse)."""
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as e:
        logger.debug(f"Compose file is not valid YAML: {e}")
        return []
    if not isinstance(document, dict) or not isinstance(document.get("services"), dict):
        return []
    return [str(name) for name in document["services"]]


def format_compose_file(
    found_path: str,
    content: str,
    target_container: str | None,
    cwd: Path,
) -> str:
    rule = "=" * RULE_WIDTH
    output = f"Docker Compose Configuration ({found_path}):\n{rule}\n\n{content}\n\n{rule}\n"

    services = list_services(content)
    if services:
        output += f"Services: {', '.join(services)}\n"
    if target_container:
        output += f"Target Container: {target_container}\n"
    output += f"File Location: {(cwd / found_path).resolve()}"
    return output.strip()


def format_compose_not_found(requested: str, target_container: str | None, cwd: Path) -> str:
    searched = "\n".join(f"- {(cwd / path).resolve()}" for path in candidate_paths(requested))
    output = (
        "Docker Compose file not found on host filesystem.\n\n"
        f"Searched for compose file in:\n{searched}\n\n"
        "To view the compose file:\n"
        "1. Make sure it exists in one of the searched locations\n"
        "2. Specify the correct path with the compose_file parameter\n"
        "3. Use an absolute path if the file is elsewhere\n\n"
    )
    if target_container:
        output += f"Target Container: {target_container}\n"
    output += f"MCP Server working directory: {cwd}"
    return output


def create_get_compose_file_tool(
    docker_client: DockerClientWrapper,
    default_compose_file: str,
) -> ToolSpec:
    """Create the get_compose_file tool."""

    @returns_error_text("Error getting compose file")
    async def get_compose_file(
        compose_file: Annotated[
            str,
            Field(
                description="Path to the Docker Compose file relative to the MCP server "
                "working directory"
            ),
        ] = default_compose_file,
    ) -> str:
        log_call("get_compose_file", compose_file=compose_file)

        cwd = Path(os.getcwd())
        found = await asyncio.to_thread(find_compose_file, compose_file, cwd)
        target = docker_client.default_container

        if found is None:
            logger.info(f"No compose file found for {compose_file} under {cwd}")
            return format_compose_not_found(compose_file, target, cwd)

        found_path, content = found
        return format_compose_file(found_path, content, target, cwd)

    return (
        "get_compose_file",
        "Fetch and display the Docker Compose configuration file. This reads from the host "
        "filesystem where the MCP server is running, not from inside the container.",
        OperationSafety.SAFE,
        True,
        False,
        get_compose_file,
    )


def register_compose_tools(
    app: Any,
    docker_client: DockerClientWrapper,
    default_compose_file: str,
    safety_config: SafetyConfig,
) -> list[str]:
    """Register the compose tool with FastMCP."""
    tools = [create_get_compose_file_tool(docker_client, default_compose_file)]
    return register_tools_with_filtering(app, tools, safety_config)
