"""Unit tests for the CLI entry point."""

from typing import Any
from unittest.mock import Mock

import pytest
from typer.testing import CliRunner

from docker_code_mcp import __main__ as cli
from docker_code_mcp.version import __version__

runner = CliRunner()


@pytest.fixture
def fake_server(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    """Replace server construction and transports with recorders."""
    calls: dict[str, Any] = {}

    def make_server(config: Any) -> Mock:
        calls["config"] = config
        server = Mock()
        server.tool_names = ["exec", "read_file"]
        return server

    monkeypatch.setattr(cli, "DockerCodeServer", make_server)
    monkeypatch.setattr(cli, "setup_logger", lambda *args, **kwargs: None)
    monkeypatch.setattr(
        cli, "run_stdio", lambda logger, server: calls.setdefault("transport", "stdio")
    )
    monkeypatch.setattr(
        cli,
        "run_http",
        lambda host, port, logger, server: calls.update(transport="http", host=host, port=port),
    )
    return calls


class TestCli:
    """Tests for the typer app."""

    def test_version(self) -> None:
        result = runner.invoke(cli.app, ["--version"])
        assert result.exit_code == 0
        assert result.stdout.strip() == f"docker-code-mcp {__version__}"

    def test_stdio_default(
        self, fake_server: dict[str, Any], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("PORT", raising=False)
        result = runner.invoke(cli.app, [])
        assert result.exit_code == 0, result.output
        assert fake_server["transport"] == "stdio"

    def test_http_defaults_to_port_4200(
        self, fake_server: dict[str, Any], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("PORT", raising=False)
        result = runner.invoke(cli.app, ["--transport", "http"])
        assert result.exit_code == 0, result.output
        assert fake_server["port"] == 4200
        assert fake_server["host"] == "127.0.0.1"

    def test_port_from_environment(
        self, fake_server: dict[str, Any], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PORT", "9123")
        result = runner.invoke(cli.app, ["--transport", "http", "--host", "0.0.0.0"])
        assert result.exit_code == 0, result.output
        assert fake_server["port"] == 9123
        assert fake_server["host"] == "0.0.0.0"

    def test_container_option_overrides_env(
        self, fake_server: dict[str, Any], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DOCKER_CONTAINER_ID", "from-env")
        result = runner.invoke(cli.app, ["--container", "from-flag"])
        assert result.exit_code == 0, result.output
        assert fake_server["config"].docker.container_id == "from-flag"

    def test_container_from_env(
        self, fake_server: dict[str, Any], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DOCKER_CONTAINER_ID", "from-env")
        result = runner.invoke(cli.app, [])
        assert result.exit_code == 0, result.output
        assert fake_server["config"].docker.container_id == "from-env"


class TestRunHttp:
    """Tests for the HTTP transport wiring."""

    def test_passes_stateless_mcp_path(self) -> None:
        server = Mock()
        server.http_middleware.return_value = ["auth"]

        async def noop() -> None:
            return None

        server.start = noop
        server.stop = noop

        cli.run_http("127.0.0.1", 4200, Mock(), server)

        server.get_app.return_value.run.assert_called_once_with(
            transport="http",
            host="127.0.0.1",
            port=4200,
            path="/mcp",
            middleware=["auth"],
            stateless_http=True,
        )
