"""Container tools: listing, inspection, command execution and shell instructions."""

import asyncio
from typing import Annotated, Any

from pydantic import Field

from docker_code_mcp.config import SafetyConfig
from docker_code_mcp.docker_wrapper.client import DockerClientWrapper
from docker_code_mcp.docker_wrapper.executor import CommandRunner
from docker_code_mcp.tools.filters import ToolSpec, register_tools_with_filtering
from docker_code_mcp.utils.logger import get_logger
from docker_code_mcp.utils.safety import OperationSafety
from docker_code_mcp.utils.tool_errors import log_call, returns_error_text

logger = get_logger(__name__)

RULE_WIDTH = 80
UNSET_TIMESTAMP = "0001-01-01T00:00:00Z"

# Common field descriptions
DESC_CONTAINER_ID = "Container ID or name (defaults to DOCKER_CONTAINER_ID)"

ContainerIdParam = Annotated[str | None, Field(description=DESC_CONTAINER_ID)]


def _text(value: Any) -> str:
    """Render a Docker API value the way its JSON reads (``true``, not ``True``)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _format_port(port: dict[str, Any]) -> str:
    private = f"{port.get('PrivatePort')}/{port.get('Type')}"
    if port.get("PublicPort"):
        return f"{port.get('IP') or '0.0.0.0'}:{port['PublicPort']}->{private}"  # noqa: S104
    return private


def format_container_list(containers: list[dict[str, Any]], all: bool) -> str:  # noqa: A002
    """Format ``GET /containers/json`` summaries as a readable listing."""
    if not containers:
        if all:
            return "No containers found."
        return "No running containers found. Use all=true to see all containers."

    output = f"{'All' if all else 'Running'} Containers:\n{'=' * RULE_WIDTH}\n\n"
    for container in containers:
        name = ", ".join(n.lstrip("/") for n in container.get("Names") or [])
        ports = ", ".join(_format_port(p) for p in container.get("Ports") or []) or "none"

        output += f"Name:    {name}\n"
        output += f"ID:      {container.get('Id', '')[:12]}\n"
        output += f"Image:   {container.get('Image')}\n"
        output += f"State:   {container.get('State')}\n"
        output += f"Status:  {container.get('Status')}\n"
        output += f"Ports:   {ports}\n"
        output += "-" * RULE_WIDTH + "\n\n"

    return output.strip()


def _format_state(state: dict[str, Any]) -> str:
    output = "State:\n"
    output += f"  Status:     {state.get('Status')}\n"
    output += f"  Running:    {_text(state.get('Running'))}\n"
    output += f"  Paused:     {_text(state.get('Paused'))}\n"
    output += f"  Restarting: {_text(state.get('Restarting'))}\n"
    output += f"  Pid:        {state.get('Pid')}\n"
    output += f"  Exit Code:  {state.get('ExitCode')}\n"
    if state.get("StartedAt"):
        output += f"  Started:    {state['StartedAt']}\n"
    if state.get("FinishedAt") and state["FinishedAt"] != UNSET_TIMESTAMP:
        output += f"  Finished:   {state['FinishedAt']}\n"
    return output + "\n"


def _format_network(network: dict[str, Any]) -> str:
    output = "Network:\n"
    output += f"  IP Address: {network.get('IPAddress') or 'none'}\n"
    output += f"  Gateway:    {network.get('Gateway') or 'none'}\n"

    ports = network.get("Ports") or {}
    if ports:
        output += "  Ports:\n"
        for container_port, bindings in ports.items():
            if isinstance(bindings, list):
                for binding in bindings:
                    output += (
                        f"    {binding.get('HostIp')}:{binding.get('HostPort')} -> "
                        f"{container_port}\n"
                    )
            else:
                output += f"    {container_port} (not published)\n"

    networks = network.get("Networks") or {}
    if networks:
        output += "  Networks:\n"
        for network_name, details in networks.items():
            output += f"    {network_name}: {(details or {}).get('IPAddress') or 'no IP'}\n"
    return output + "\n"


def _format_resources(host_config: dict[str, Any]) -> str:
    output = "Resources:\n"
    if host_config.get("Memory"):
        output += f"  Memory: {host_config['Memory'] / 1024 / 1024:.0f} MB\n"
    if host_config.get("CpuShares"):
        output += f"  CPU Shares: {host_config['CpuShares']}\n"
    if host_config.get("NanoCpus"):
        output += f"  CPU Limit: {host_config['NanoCpus'] / 1_000_000_000:g} cores\n"

    policy = host_config.get("RestartPolicy") or {}
    output += f"\nRestart Policy: {policy.get('Name') or 'no'}"
    if policy.get("MaximumRetryCount"):
        output += f" (max: {policy['MaximumRetryCount']})"
    return output


def format_container_info(info: dict[str, Any]) -> str:
    """Format ``GET /containers/{id}/json`` as a readable report."""
    name = str(info.get("Name", "")).lstrip("/")
    config = info.get("Config") or {}

    output = f"Container Information: {name}\n{'=' * RULE_WIDTH}\n\n"
    output += f"ID:      {info.get('Id')}\n"
    output += f"Name:    {name}\n"
    output += f"Image:   {config.get('Image')}\n"
    output += f"Created: {info.get('Created')}\n\n"

    output += _format_state(info.get("State") or {})
    output += _format_network(info.get("NetworkSettings") or {})

    mounts = info.get("Mounts") or []
    if mounts:
        output += "Mounts:\n"
        for mount in mounts:
            source, destination = mount.get("Source"), mount.get("Destination")
            output += f"  {mount.get('Type')}: {source} -> {destination}\n"
            if mount.get("Mode"):
                output += f"    Mode: {mount['Mode']}\n"
        output += "\n"

    env = config.get("Env") or []
    if env:
        output += "Environment:\n"
        output += "".join(f"  {entry}\n" for entry in env)
        output += "\n"

    if isinstance(config.get("Cmd"), list) and config["Cmd"]:
        output += f"Command: {' '.join(config['Cmd'])}\n"
    if isinstance(config.get("Entrypoint"), list) and config["Entrypoint"]:
        output += f"Entrypoint: {' '.join(config['Entrypoint'])}\n"
    if config.get("WorkingDir"):
        output += f"Working Dir: {config['WorkingDir']}\n"
    output += "\n"

    output += _format_resources(info.get("HostConfig") or {})
    return output


def create_list_containers_tool(docker_client: DockerClientWrapper) -> ToolSpec:
    """Create the list_containers tool.

    Returns:
        Tuple of (name, description, safety_level, idempotent, open_world, function)
    """

    @returns_error_text("Error listing containers")
    async def list_containers(
        all: Annotated[  # noqa: A002
            bool, Field(description="Show all containers (default shows just running)")
        ] = False,
    ) -> str:
        log_call("list_containers", all=all)
        containers = await asyncio.to_thread(docker_client.list_containers, all)
        logger.info(f"Found {len(containers)} containers")
        return format_container_list(containers, all)

    return (
        "list_containers",
        "List Docker containers. By default shows only running containers, "
        "use all=true to show all containers including stopped ones.",
        OperationSafety.SAFE,
        True,  # idempotent
        False,  # not open_world
        list_containers,
    )


def create_get_container_info_tool(docker_client: DockerClientWrapper) -> ToolSpec:
    """Create the get_container_info tool."""

    @returns_error_text("Error getting container info")
    async def get_container_info(container_id: ContainerIdParam = None) -> str:
        target = docker_client.resolve_container_id(container_id)
        log_call("get_container_info", container_id=target)
        container = await asyncio.to_thread(docker_client.get_container, target)
        return format_container_info(container.attrs)

    return (
        "get_container_info",
        "Get detailed information about a specific Docker container including state, "
        "network, mounts, environment, and resource configuration.",
        OperationSafety.SAFE,
        True,
        False,
        get_container_info,
    )


def create_exec_tool(runner: CommandRunner) -> ToolSpec:
    """Create the exec tool."""

    @returns_error_text("Execution error")
    async def exec_command(  # noqa: PLR0913
        command: Annotated[str, Field(description="Command to execute in the container")],
        stdin: Annotated[
            str | None, Field(description="Input to send to the command via stdin")
        ] = None,
        working_dir: Annotated[
            str | None, Field(description="Working directory for the command")
        ] = None,
        user: Annotated[str | None, Field(description="User to run the command as")] = None,
        env: Annotated[
            list[str] | None, Field(description="Environment variables (format: KEY=value)")
        ] = None,
        timeout: Annotated[float, Field(gt=0, description="Command timeout in seconds")] = 30,
        container_id: ContainerIdParam = None,
    ) -> str:
        log_call(
            "exec",
            command=command,
            working_dir=working_dir,
            user=user,
            timeout=timeout,
            container_id=container_id,
        )
        result = await runner.run(
            command,
            container_id=container_id,
            stdin=stdin,
            working_dir=working_dir,
            user=user,
            env=env,
            timeout=timeout,
        )
        return result.format()

    return (
        "exec",
        "Execute a command in the target Docker container",
        OperationSafety.MODERATE,
        False,  # same command may have different effects
        True,  # commands may reach external networks
        exec_command,
    )


def create_shell_tool(docker_client: DockerClientWrapper) -> ToolSpec:
    """Create the shell tool.

    The tool only describes how to open an interactive session; MCP has no
    interactive terminal to hand over.
    """

    @returns_error_text("Error")
    async def shell(
        shell: Annotated[str, Field(description="Shell to use (default: /bin/bash)")] = "/bin/bash",
        user: Annotated[str | None, Field(description="User to run shell as")] = None,
        working_dir: Annotated[
            str | None, Field(description="Working directory to start in")
        ] = None,
        container_id: ContainerIdParam = None,
    ) -> str:
        target = docker_client.resolve_container_id(container_id)
        options = ""
        if user:
            options += f"-u {user} "
        if working_dir:
            options += f"-w {working_dir} "

        return f"""To start an interactive shell in container '{target}':

Direct Docker command:
docker exec -it {options}{target} {shell}

Or use the 'exec' tool with commands like:
- "pwd" to see current directory
- "ls -la" to list files
- "whoami" to see current user
- "env" to see environment variables

This server provides full code editing capabilities inside the container:
- read_file: Read files from the container
- write_file: Create/edit files in the container
- search_replace: Find and replace text in container files
- list_dir: Browse directories in the container
- grep: Search for patterns in container files
- find_files: Find files by name pattern
- delete_file: Remove files from the container
- get_compose_file: View the Docker Compose configuration"""

    return (
        "shell",
        "Get instructions for starting an interactive shell session in the target container",
        OperationSafety.SAFE,
        True,
        False,
        shell,
    )


def register_container_tools(
    app: Any,
    docker_client: DockerClientWrapper,
    runner: CommandRunner,
    safety_config: SafetyConfig,
) -> list[str]:
    """Register the container tools with FastMCP.

    Returns:
        List of registered tool names
    """
    tools = [
        create_exec_tool(runner),
        create_list_containers_tool(docker_client),
        create_get_container_info_tool(docker_client),
        create_shell_tool(docker_client),
    ]

    return register_tools_with_filtering(app, tools, safety_config)
