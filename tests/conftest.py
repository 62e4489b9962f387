"""Pytest configuration and shared fixtures."""

from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock, Mock

import pytest
from docker import DockerClient

from docker_code_mcp.config import Config, DockerConfig, ExecConfig, SafetyConfig, ServerConfig
from docker_code_mcp.docker_wrapper.client import DockerClientWrapper
from docker_code_mcp.docker_wrapper.executor import CommandRunner
from docker_code_mcp.version import __version__

TARGET_CONTAINER = "dev-box"


@pytest.fixture
def docker_config() -> DockerConfig:
    """Create test Docker configuration."""
    return DockerConfig(
        base_url="unix:///var/run/docker.sock",
        timeout=30,
        container_id=TARGET_CONTAINER,
    )


@pytest.fixture
def exec_config() -> ExecConfig:
    """Create test exec configuration."""
    return ExecConfig(shell="/bin/sh", default_timeout=5, max_output_bytes=1024)


@pytest.fixture
def safety_config() -> SafetyConfig:
    """Create test safety configuration (all tools exposed)."""
    return SafetyConfig()


@pytest.fixture
def server_config() -> ServerConfig:
    """Create test server configuration."""
    return ServerConfig(
        server_name="docker-code-mcp-test",
        server_version=__version__,
        log_level="DEBUG",
    )


@pytest.fixture
def config(
    docker_config: DockerConfig,
    exec_config: ExecConfig,
    safety_config: SafetyConfig,
    server_config: ServerConfig,
) -> Config:
    """Create complete test configuration without reading the environment."""
    test_config = Config.__new__(Config)
    test_config.docker = docker_config
    test_config.execution = exec_config
    test_config.safety = safety_config
    test_config.server = server_config
    return test_config


@pytest.fixture
def mock_docker_client() -> Mock:
    """Create mock Docker client."""
    mock_client = MagicMock(spec=DockerClient)
    mock_client.api = MagicMock()
    mock_client.ping.return_value = True
    mock_client.version.return_value = {
        "Version": "24.0.0",
        "ApiVersion": "1.43",
    }
    return mock_client


@pytest.fixture
def docker_client_wrapper(
    docker_config: DockerConfig,
    mock_docker_client: Mock,
) -> Generator[DockerClientWrapper, None, None]:
    """Create Docker client wrapper already holding the mocked client."""
    wrapper = DockerClientWrapper(docker_config)
    wrapper._client = mock_docker_client
    yield wrapper
    wrapper.close()


@pytest.fixture
def mock_runner() -> Mock:
    """CommandRunner double whose ``run`` results are set per test."""
    runner = Mock(spec=CommandRunner)
    runner.run = AsyncMock()
    return runner


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: Integration tests requiring Docker")
