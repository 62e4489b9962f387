"""Docker client wrapper with lazy connection, health checks and container lookup."""

from pathlib import Path
from typing import Any

import docker
from docker import DockerClient
from docker.errors import APIError, DockerException, NotFound
from docker.models.containers import Container
from loguru import logger

from docker_code_mcp.config import DockerConfig
from docker_code_mcp.utils.errors import (
    ContainerNotFound,
    DockerConnectionError,
    DockerHealthCheckError,
    DockerOperationError,
    NoTargetContainerError,
)
from docker_code_mcp.utils.messages import ERROR_CONTAINER_NOT_FOUND, ERROR_NO_TARGET_CONTAINER


class DockerClientWrapper:
    """Docker client wrapper shared by all tools."""

    def __init__(self, config: DockerConfig) -> None:
        """Initialize Docker client wrapper.

        Args:
            config: Docker configuration settings
        """
        self.config = config
        self._client: DockerClient | None = None
        logger.debug(f"Initialized DockerClientWrapper with base_url={config.base_url}")

    @property
    def client(self) -> DockerClient:
        """Docker client, connected on first use.

        Raises:
            DockerConnectionError: If unable to connect to Docker daemon
        """
        if self._client is None:
            self._connect()
        assert self._client is not None  # _connect() raises on failure
        return self._client

    @property
    def api(self) -> Any:
        """Low-level API client (exec create/start/inspect)."""
        return self.client.api

    @property
    def default_container(self) -> str | None:
        return self.config.container_id

    def _build_tls_config(self) -> Any:
        if not self.config.tls_verify:
            return None
        client_cert = None
        if self.config.tls_client_cert and self.config.tls_client_key:
            client_cert = (str(self.config.tls_client_cert), str(self.config.tls_client_key))
        return docker.tls.TLSConfig(
            client_cert=client_cert,
            ca_cert=str(self.config.tls_ca_cert) if self.config.tls_ca_cert else None,
            verify=True,
        )

    def _connect(self) -> None:
        """Connect to the Docker daemon and ping it.

        Raises:
            DockerConnectionError: If connection fails
        """
        base_url = self.config.base_url
        logger.info(f"Connecting to Docker daemon at {base_url}")

        if base_url.startswith("unix://"):
            socket_path = base_url.removeprefix("unix://")
            if not Path(socket_path).exists():
                logger.error(f"Docker socket not found: {socket_path}")
                raise DockerConnectionError(f"Docker socket not found: {socket_path}")

        try:
            self._client = docker.DockerClient(
                base_url=base_url,
                timeout=self.config.timeout,
                tls=self._build_tls_config(),
            )
            self._client.ping()  # type: ignore[no-untyped-call]
            logger.success("Successfully connected to Docker daemon")
        except DockerException as e:
            self._client = None
            logger.error(f"Failed to connect to Docker daemon: {e}")
            raise DockerConnectionError(f"Cannot connect to Docker daemon: {e}") from e

    def resolve_container_id(self, container_id: str | None = None) -> str:
        """Return the explicit container or the configured default.

        Raises:
            NoTargetContainerError: If neither is set
        """
        target = (container_id or "").strip() or self.default_container
        if not target:
            raise NoTargetContainerError(ERROR_NO_TARGET_CONTAINER)
        return target

    def get_container(self, container_id: str) -> Container:
        """Look up a container by ID or name.

        Raises:
            ContainerNotFound: If the daemon does not know the container
            DockerOperationError: For other API failures
        """
        try:
            return self.client.containers.get(container_id)
        except NotFound as e:
            logger.error(f"Container not found: {container_id}")
            raise ContainerNotFound(ERROR_CONTAINER_NOT_FOUND.format(container_id)) from e
        except APIError as e:
            logger.error(f"Failed to inspect container {container_id}: {e}")
            raise DockerOperationError(f"Failed to inspect container: {e}") from e

    def list_containers(self, all: bool = False) -> list[dict[str, Any]]:  # noqa: A002
        """Raw container summaries as returned by ``GET /containers/json``."""
        try:
            return list(self.api.containers(all=all))
        except APIError as e:
            logger.error(f"Failed to list containers: {e}")
            raise DockerOperationError(f"Failed to list containers: {e}") from e

    def health_check(self) -> dict[str, Any]:
        """Ping the daemon and summarize it.

        Raises:
            DockerHealthCheckError: If health check fails
        """
        try:
            self.client.ping()  # type: ignore[no-untyped-call]
            version = self.client.version()  # type: ignore[no-untyped-call]
        except (DockerException, DockerConnectionError) as e:
            logger.error(f"Docker health check failed: {e}")
            raise DockerHealthCheckError(f"Health check failed: {e}") from e

        logger.debug("Docker health check passed")
        return {
            "status": "healthy",
            "server_version": version.get("Version"),
            "api_version": version.get("ApiVersion"),
        }

    def close(self) -> None:
        """Close the Docker client connection."""
        if self._client is None:
            return
        try:
            self._client.close()  # type: ignore[no-untyped-call]
            logger.debug("Docker client connection closed")
        except DockerException as e:
            logger.warning(f"Error closing Docker client: {e}")
        finally:
            self._client = None

    def __repr__(self) -> str:
        """Return string representation."""
        status = "connected" if self._client is not None else "disconnected"
        return f"DockerClientWrapper(base_url={self.config.base_url}, status={status})"
