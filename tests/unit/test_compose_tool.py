"""Unit tests for tools/compose.py."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from docker_code_mcp.docker_wrapper.client import DockerClientWrapper
from docker_code_mcp.tools.compose import (
    FALLBACK_COMPOSE_PATHS,
    create_get_compose_file_tool,
    find_compose_file,
    list_services,
)

COMPOSE = """services:
  app:
    image: python:3.12
  db:
    image: postgres:16
"""


@pytest.fixture
def mock_docker_client() -> Mock:
    client = Mock(spec=DockerClientWrapper)
    client.default_container = "dev-box"
    return client


class TestFindComposeFile:
    """Tests for find_compose_file."""

    def test_requested_path_first(self, tmp_path: Path) -> None:
        (tmp_path / "custom.yml").write_text("a: 1\n")
        (tmp_path / "compose.yaml").write_text("b: 2\n")
        assert find_compose_file("custom.yml", tmp_path) == ("custom.yml", "a: 1\n")

    def test_falls_back(self, tmp_path: Path) -> None:
        (tmp_path / "docker-compose.yml").write_text(COMPOSE)
        assert find_compose_file("missing.yaml", tmp_path) == ("docker-compose.yml", COMPOSE)

    def test_absolute_path(self, tmp_path: Path) -> None:
        target = tmp_path / "elsewhere.yaml"
        target.write_text("x: 1\n")
        assert find_compose_file(str(target), Path("/nonexistent")) == (str(target), "x: 1\n")

    def test_nothing_found(self, tmp_path: Path) -> None:
        assert find_compose_file("docker/compose.yaml", tmp_path) is None


class TestListServices:
    """Tests for list_services."""

    def test_services(self) -> None:
        assert list_services(COMPOSE) == ["app", "db"]

    @pytest.mark.parametrize("content", ["", "just text", "services: [1, 2]", "a: [unclosed"])
    def test_no_services(self, content: str) -> None:
        assert list_services(content) == []


class TestGetComposeFileTool:
    """Tests for the get_compose_file tool."""

    async def test_found(
        self, mock_docker_client: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "docker").mkdir()
        (tmp_path / "docker" / "compose.yaml").write_text(COMPOSE)
        monkeypatch.chdir(tmp_path)
        *_, get_compose_file = create_get_compose_file_tool(
            mock_docker_client, "docker/compose.yaml"
        )

        output = await get_compose_file()

        header = "Docker Compose Configuration (docker/compose.yaml):"
        assert output.startswith(f"{header}\n{'=' * 60}\n\n")
        assert COMPOSE.strip() in output
        assert "Services: app, db\n" in output
        assert "Target Container: dev-box\n" in output
        assert output.endswith(f"File Location: {(tmp_path / 'docker/compose.yaml').resolve()}")

    async def test_not_found(
        self, mock_docker_client: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        *_, get_compose_file = create_get_compose_file_tool(
            mock_docker_client, "docker/compose.yaml"
        )

        output = await get_compose_file(compose_file="deploy/stack.yml")

        assert output.startswith("Docker Compose file not found on host filesystem.")
        assert f"- {(tmp_path / 'deploy/stack.yml').resolve()}" in output
        for fallback in FALLBACK_COMPOSE_PATHS:
            assert f"- {(tmp_path / fallback).resolve()}" in output
        assert "Target Container: dev-box" in output
        assert output.endswith(f"MCP Server working directory: {Path.cwd()}")

    async def test_unexpected_error(
        self, mock_docker_client: Mock, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def unreadable(*args: object) -> None:
            raise PermissionError("permission denied")

        monkeypatch.setattr("docker_code_mcp.tools.compose.find_compose_file", unreadable)
        *_, get_compose_file = create_get_compose_file_tool(mock_docker_client, "compose.yaml")

        assert await get_compose_file() == "Error getting compose file: permission denied"
