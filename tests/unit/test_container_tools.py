"""Unit tests for tools/container.py."""

from typing import Any
from unittest.mock import Mock

import pytest

from docker_code_mcp.docker_wrapper.client import DockerClientWrapper
from docker_code_mcp.docker_wrapper.executor import CommandResult
from docker_code_mcp.tools.container import (
    create_exec_tool,
    create_get_container_info_tool,
    create_list_containers_tool,
    create_shell_tool,
    format_container_info,
    format_container_list,
)
from docker_code_mcp.utils.errors import (
    CommandTimeoutError,
    ContainerNotFound,
    DockerOperationError,
    NoTargetContainerError,
)
from docker_code_mcp.utils.safety import OperationSafety

RULE = "=" * 80
SEPARATOR = "-" * 80

WEB_SUMMARY: dict[str, Any] = {
    "Id": "0123456789abcdef0123",
    "Names": ["/web", "/alias"],
    "Image": "nginx:latest",
    "State": "running",
    "Status": "Up 2 hours",
    "Ports": [
        {"IP": "0.0.0.0", "PrivatePort": 80, "PublicPort": 8080, "Type": "tcp"},
        {"PrivatePort": 443, "Type": "tcp"},
    ],
}

INSPECT: dict[str, Any] = {
    "Id": "0123456789abcdef",
    "Name": "/web",
    "Created": "2024-01-01T00:00:00Z",
    "Config": {
        "Image": "nginx:latest",
        "Env": ["PATH=/usr/bin"],
        "Cmd": ["nginx", "-g", "daemon off;"],
        "Entrypoint": None,
        "WorkingDir": "/srv",
    },
    "State": {
        "Status": "running",
        "Running": True,
        "Paused": False,
        "Restarting": False,
        "Pid": 42,
        "ExitCode": 0,
        "StartedAt": "2024-01-01T00:00:01Z",
        "FinishedAt": "0001-01-01T00:00:00Z",
    },
    "NetworkSettings": {
        "IPAddress": "172.17.0.2",
        "Gateway": "",
        "Ports": {"80/tcp": [{"HostIp": "0.0.0.0", "HostPort": "8080"}], "9000/tcp": None},
        "Networks": {"bridge": {"IPAddress": "172.17.0.2"}},
    },
    "Mounts": [{"Type": "bind", "Source": "/host", "Destination": "/srv", "Mode": "rw"}],
    "HostConfig": {
        "Memory": 536870912,
        "CpuShares": 512,
        "NanoCpus": 1500000000,
        "RestartPolicy": {"Name": "on-failure", "MaximumRetryCount": 3},
    },
}


@pytest.fixture
def mock_docker_client() -> Mock:
    """Wrapper double with the configured target container."""
    client = Mock(spec=DockerClientWrapper)
    client.resolve_container_id.side_effect = lambda container_id=None: container_id or "dev-box"
    return client


class TestMetadata:
    """Test tool metadata."""

    def test_exec_metadata(self, mock_runner: Mock) -> None:
        name, _, safety, idempotent, open_world, _ = create_exec_tool(mock_runner)
        assert name == "exec"
        assert safety == OperationSafety.MODERATE
        assert idempotent is False
        assert open_world is True

    @pytest.mark.parametrize(
        "creator,name",
        [
            (create_list_containers_tool, "list_containers"),
            (create_get_container_info_tool, "get_container_info"),
            (create_shell_tool, "shell"),
        ],
    )
    def test_read_only_tools(self, mock_docker_client: Mock, creator: Any, name: str) -> None:
        tool_name, _, safety, idempotent, _, _ = creator(mock_docker_client)
        assert tool_name == name
        assert safety == OperationSafety.SAFE
        assert idempotent is True


class TestFormatContainerList:
    """Tests for format_container_list."""

    def test_empty_running(self) -> None:
        assert format_container_list([], all=False) == (
            "No running containers found. Use all=true to see all containers."
        )

    def test_empty_all(self) -> None:
        assert format_container_list([], all=True) == "No containers found."

    def test_listing(self) -> None:
        """Test header, fields and separators."""
        output = format_container_list([WEB_SUMMARY], all=False)
        assert output == (
            f"Running Containers:\n{RULE}\n\n"
            "Name:    web, alias\n"
            "ID:      0123456789ab\n"
            "Image:   nginx:latest\n"
            "State:   running\n"
            "Status:  Up 2 hours\n"
            "Ports:   0.0.0.0:8080->80/tcp, 443/tcp\n"
            f"{SEPARATOR}"
        )

    def test_no_ports(self) -> None:
        summary = {**WEB_SUMMARY, "Ports": []}
        assert "Ports:   none" in format_container_list([summary], all=True)

    def test_public_port_without_ip(self) -> None:
        port = {"PrivatePort": 22, "PublicPort": 2222, "Type": "tcp"}
        summary = {**WEB_SUMMARY, "Ports": [port]}
        assert "0.0.0.0:2222->22/tcp" in format_container_list([summary], all=True)


class TestFormatContainerInfo:
    """Tests for format_container_info."""

    def test_sections(self) -> None:
        output = format_container_info(INSPECT)

        assert output.startswith(f"Container Information: web\n{RULE}\n\n")
        assert "ID:      0123456789abcdef\n" in output
        assert "  Running:    true\n" in output
        assert "  Paused:     false\n" in output
        assert "  Started:    2024-01-01T00:00:01Z\n" in output
        assert "Finished:" not in output
        assert "  Gateway:    none\n" in output
        assert "    0.0.0.0:8080 -> 80/tcp\n" in output
        assert "    9000/tcp (not published)\n" in output
        assert "    bridge: 172.17.0.2\n" in output
        assert "  bind: /host -> /srv\n    Mode: rw\n" in output
        assert "  PATH=/usr/bin\n" in output
        assert "Command: nginx -g daemon off;\n" in output
        assert "Entrypoint:" not in output
        assert "Working Dir: /srv\n" in output
        assert "  Memory: 512 MB\n" in output
        assert "  CPU Shares: 512\n" in output
        assert "  CPU Limit: 1.5 cores\n" in output
        assert output.endswith("Restart Policy: on-failure (max: 3)")

    def test_minimal_inspect(self) -> None:
        """Test that missing sections do not break formatting."""
        output = format_container_info({"Id": "abc", "Name": "/bare"})
        assert "Container Information: bare" in output
        assert output.endswith("Restart Policy: no")


class TestListContainersTool:
    """Tests for the list_containers tool."""

    async def test_lists(self, mock_docker_client: Mock) -> None:
        mock_docker_client.list_containers.return_value = [WEB_SUMMARY]
        *_, list_containers = create_list_containers_tool(mock_docker_client)

        output = await list_containers(all=True)

        assert output.startswith("All Containers:")
        mock_docker_client.list_containers.assert_called_once_with(True)

    async def test_error(self, mock_docker_client: Mock) -> None:
        mock_docker_client.list_containers.side_effect = DockerOperationError("daemon gone")
        *_, list_containers = create_list_containers_tool(mock_docker_client)
        assert await list_containers() == "Error listing containers: daemon gone"


class TestGetContainerInfoTool:
    """Tests for the get_container_info tool."""

    async def test_default_target(self, mock_docker_client: Mock) -> None:
        mock_docker_client.get_container.return_value = Mock(attrs=INSPECT)
        *_, get_container_info = create_get_container_info_tool(mock_docker_client)

        output = await get_container_info()

        assert output.startswith("Container Information: web")
        mock_docker_client.get_container.assert_called_once_with("dev-box")

    async def test_not_found(self, mock_docker_client: Mock) -> None:
        mock_docker_client.get_container.side_effect = ContainerNotFound(
            "Container not found: ghost"
        )
        *_, get_container_info = create_get_container_info_tool(mock_docker_client)
        assert await get_container_info(container_id="ghost") == (
            "Error getting container info: Container not found: ghost"
        )


class TestExecTool:
    """Tests for the exec tool."""

    async def test_formats_result(self, mock_runner: Mock) -> None:
        mock_runner.run.return_value = CommandResult(stdout="hi\n", stderr="", exit_code=0)
        *_, exec_command = create_exec_tool(mock_runner)

        output = await exec_command(command="echo hi", env=["A=1"], timeout=10)

        assert output == "STDOUT:\nhi\n\nExit Code: 0"
        mock_runner.run.assert_awaited_once_with(
            "echo hi",
            container_id=None,
            stdin=None,
            working_dir=None,
            user=None,
            env=["A=1"],
            timeout=10,
        )

    async def test_timeout(self, mock_runner: Mock) -> None:
        mock_runner.run.side_effect = CommandTimeoutError("Command timeout")
        *_, exec_command = create_exec_tool(mock_runner)
        assert await exec_command(command="sleep 100") == "Execution error: Command timeout"

    async def test_no_target(self, mock_runner: Mock) -> None:
        mock_runner.run.side_effect = NoTargetContainerError("No target container.")
        *_, exec_command = create_exec_tool(mock_runner)
        assert await exec_command(command="ls") == "Execution error: No target container."


class TestShellTool:
    """Tests for the shell tool."""

    async def test_default_shell(self, mock_docker_client: Mock) -> None:
        *_, shell = create_shell_tool(mock_docker_client)
        output = await shell()
        assert output.startswith("To start an interactive shell in container 'dev-box':")
        assert "docker exec -it dev-box /bin/bash\n" in output
        assert "- get_compose_file:" in output

    async def test_user_and_workdir(self, mock_docker_client: Mock) -> None:
        *_, shell = create_shell_tool(mock_docker_client)
        output = await shell(shell="/bin/sh", user="dev", working_dir="/app", container_id="web")
        assert "docker exec -it -u dev -w /app web /bin/sh\n" in output
