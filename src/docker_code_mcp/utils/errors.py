"""Custom exceptions for the Docker code editing MCP server."""


class DockerCodeError(Exception):
    """Base exception for all server errors."""


class DockerConnectionError(DockerCodeError):
    """Raised when unable to connect to Docker daemon."""


class DockerHealthCheckError(DockerCodeError):
    """Raised when Docker health check fails."""


class DockerOperationError(DockerCodeError):
    """Raised when a Docker operation fails."""


class ContainerNotFound(DockerCodeError):  # noqa: N818
    """Raised when a container is not found."""


class ContainerNotRunning(DockerCodeError):  # noqa: N818
    """Raised when a command targets a stopped container."""


class NoTargetContainerError(DockerCodeError):
    """Raised when neither a container_id argument nor DOCKER_CONTAINER_ID is set."""


class CommandTimeoutError(DockerCodeError):
    """Raised when a command outlives its timeout."""
