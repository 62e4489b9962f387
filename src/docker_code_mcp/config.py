"""Configuration management for the Docker code editing MCP server."""

import json
import platform
import warnings
from pathlib import Path

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from docker_code_mcp.version import __version__

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_tool_names(value: str | list[str] | None) -> list[str]:
    """Normalize a tool name list.

    ``SAFETY_DENIED_TOOLS="exec, delete_file"`` and
    ``SAFETY_DENIED_TOOLS='["exec","delete_file"]'`` both give
    ``["exec", "delete_file"]``. Blank entries are dropped.
    """
    if not value:
        return []
    if isinstance(value, str):
        text = value.strip()
        items: list[object] | None = None
        if text.startswith("[") and text.endswith("]"):
            try:
                decoded = json.loads(text)
            except json.JSONDecodeError:
                decoded = None
            if isinstance(decoded, list):
                items = decoded
        if items is None:
            items = list(text.split(","))
    else:
        items = list(value)
    names = (str(item).strip() for item in items if item is not None)
    return [name for name in names if name]


def _default_docker_base_url() -> str:
    if platform.system() == "Windows":
        return "npipe:////./pipe/docker_engine"
    return "unix:///var/run/docker.sock"


class DockerConfig(BaseSettings):
    """Docker daemon connection and target container."""

    model_config = SettingsConfigDict(
        env_prefix="DOCKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(
        default_factory=_default_docker_base_url,
        description="Docker daemon socket URL (auto-detected, overridable via DOCKER_BASE_URL)",
    )
    timeout: int = Field(
        default=60,
        description="Timeout for Docker API calls in seconds",
        gt=0,
    )
    tls_verify: bool = Field(
        default=False,
        description="Enable TLS verification for Docker daemon",
    )
    tls_ca_cert: Path | None = Field(default=None, description="Path to CA certificate for TLS")
    tls_client_cert: Path | None = Field(
        default=None, description="Path to client certificate for TLS"
    )
    tls_client_key: Path | None = Field(default=None, description="Path to client key for TLS")
    container_id: str | None = Field(
        default=None,
        description=(
            "Default target container ID or name (DOCKER_CONTAINER_ID). "
            "Tools fall back to it when no container_id argument is given."
        ),
    )

    @field_validator("base_url")
    @classmethod
    def check_base_url(cls, url: str) -> str:
        """Refuse plain ``http://`` daemons; warn about remote unencrypted TCP."""
        if url.startswith("http://"):
            raise ValueError(
                f"Refusing plain HTTP Docker daemon URL {url}; use unix://, npipe:// or TLS"
            )
        if url.startswith("tcp://") and not url.startswith(("tcp://127.0.0.1", "tcp://localhost")):
            warnings.warn(
                f"Docker daemon reached over the network at {url}. Anyone who can reach "
                "that port controls the host; prefer a unix socket or TLS.",
                UserWarning,
                stacklevel=2,
            )
        return url

    @field_validator("tls_ca_cert", "tls_client_cert", "tls_client_key")
    @classmethod
    def check_cert_exists(cls, path: Path | None) -> Path | None:
        if path is not None and not path.is_file():
            raise ValueError(f"TLS file does not exist: {path}")
        return path

    @field_validator("container_id", mode="before")
    @classmethod
    def blank_container_is_none(cls, value: str | None) -> str | None:
        """Treat an empty DOCKER_CONTAINER_ID as unset."""
        if isinstance(value, str):
            return value.strip() or None
        return value

    @model_validator(mode="after")
    def warn_unused_certs(self) -> "DockerConfig":
        has_certs = any((self.tls_ca_cert, self.tls_client_cert, self.tls_client_key))
        if has_certs and not self.tls_verify:
            warnings.warn(
                "TLS files are set but DOCKER_TLS_VERIFY is false, so they are ignored.",
                UserWarning,
                stacklevel=2,
            )
        return self


class ExecConfig(BaseSettings):
    """Settings for commands run inside the target container."""

    model_config = SettingsConfigDict(
        env_prefix="EXEC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    shell: str = Field(
        default="/bin/bash",
        description="Shell used to interpret commands (invoked as <shell> -c <command>)",
    )
    default_timeout: int = Field(
        default=30,
        description="Seconds a command may run before the call fails with a timeout",
        gt=0,
        le=3600,
    )
    max_output_bytes: int = Field(
        default=1048576,  # 1 MB
        description="Maximum bytes kept per output stream (0 = unlimited)",
        ge=0,
        le=104857600,
    )


class SafetyConfig(BaseSettings):
    """Tool exposure controls."""

    model_config = SettingsConfigDict(
        env_prefix="SAFETY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # str | list[str] keeps pydantic-settings from JSON-decoding empty env values
    allowed_tools: str | list[str] = Field(
        default=[],
        description=(
            "Tool names to expose (empty = all). "
            "Can be set via SAFETY_ALLOWED_TOOLS as comma-separated string."
        ),
    )
    denied_tools: str | list[str] = Field(
        default=[],
        description=(
            "Tool names to hide (takes precedence over allowed_tools). "
            "Can be set via SAFETY_DENIED_TOOLS as comma-separated string."
        ),
    )

    @field_validator("allowed_tools", "denied_tools", mode="before")
    @classmethod
    def parse_tool_list(cls, value: str | list[str] | None) -> list[str]:
        """Normalize tool lists given as comma-separated strings, JSON arrays or lists."""
        return _parse_tool_names(value)


class ServerConfig(BaseSettings):
    """MCP server configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    server_name: str = Field(default="docker-code-mcp", description="MCP server name")
    server_version: str = Field(default=__version__, description="MCP server version")
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        description="Log format string for loguru",
    )
    json_logging: bool = Field(default=False, description="Emit JSON structured logs")
    debug_mode: bool = Field(
        default=False,
        description="Log every MCP request and response at DEBUG level",
    )
    log_file: Path | None = Field(default=None, description="Optional rotating log file")
    auth_token: SecretStr | None = Field(
        default=None,
        description="Token required in the Authorization header of HTTP requests (MCP_AUTH_TOKEN)",
    )
    compose_file: str = Field(
        default="docker/compose.yaml",
        description="Default compose file path, relative to the server working directory",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, level: str) -> str:
        name = level.strip().upper()
        if name not in LOG_LEVELS:
            expected = ", ".join(LOG_LEVELS)
            raise ValueError(f"Unknown log level {level!r}; expected one of {expected}")
        return name

    @field_validator("auth_token", mode="before")
    @classmethod
    def blank_token_is_none(cls, value: object) -> object:
        """An empty MCP_AUTH_TOKEN disables authentication."""
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Config:
    """All settings sections, each read from its own env prefix."""

    def __init__(self) -> None:
        self.docker = DockerConfig()
        self.execution = ExecConfig()
        self.safety = SafetyConfig()
        self.server = ServerConfig()

    def __repr__(self) -> str:
        return (
            f"Config(docker={self.docker!r}, execution={self.execution!r}, "
            f"safety={self.safety!r}, server={self.server!r})"
        )
