"""Logging configuration using loguru."""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

from docker_code_mcp.config import ServerConfig

LOG_ROTATION = "10 MB"
LOG_RETENTION = "7 days"


def _file_sink_options(config: ServerConfig) -> dict[str, Any]:
    """Options for the rotating file sink, matching the console sink's format."""
    options: dict[str, Any] = {
        "level": config.log_level,
        "rotation": LOG_ROTATION,
        "retention": LOG_RETENTION,
        "compression": "zip",
        "backtrace": True,
    }
    if config.json_logging:
        options.update(serialize=True, diagnose=False)
    else:
        options.update(format=config.log_format, diagnose=True)
    return options


def setup_logger(config: ServerConfig, log_file: Path | None = None) -> None:
    """Configure loguru for the server.

    Everything goes to stderr: stdout belongs to the stdio transport.
    JSON output (``MCP_JSON_LOGGING=true``) is meant for log shippers.

    Args:
        config: Server configuration
        log_file: Optional path to a rotating log file (falls back to ``config.log_file``)
    """
    logger.remove()

    if config.json_logging:
        logger.add(
            sys.stderr,
            level=config.log_level,
            serialize=True,
            backtrace=True,
            diagnose=False,  # Don't expose locals in production logs
        )
    else:
        logger.add(
            sys.stderr,
            format=config.log_format,
            level=config.log_level,
            colorize=True,
            backtrace=True,
            diagnose=True,
        )

    log_file = log_file or config.log_file
    if log_file:
        logger.add(log_file, **_file_sink_options(config))

    logger.info(f"Logger initialized with level: {config.log_level}")
    if log_file:
        logger.info(f"Logging to file: {log_file}")


def get_logger(name: str | None = None) -> Any:  # noqa: ARG001
    """Get the shared loguru logger (name kept for call-site symmetry with logging)."""
    return logger
