"""docker-code-mcp entry point."""

import asyncio
from enum import Enum
from typing import Any

import typer

from docker_code_mcp.config import Config
from docker_code_mcp.server import DockerCodeServer
from docker_code_mcp.utils.logger import get_logger, setup_logger
from docker_code_mcp.version import __version__


class Transport(str, Enum):
    """Supported transport types."""

    stdio = "stdio"
    http = "http"


DEFAULT_PORT = 4200
MCP_PATH = "/mcp"
SHUTDOWN_COMPLETE_MSG = "docker-code-mcp shutdown complete"


def _serve(logger: Any, server: DockerCodeServer, **run_kwargs: Any) -> None:
    asyncio.run(server.start())
    try:
        server.get_app().run(**run_kwargs)
    finally:
        asyncio.run(server.stop())
        logger.info(SHUTDOWN_COMPLETE_MSG)


def run_stdio(logger: Any, server: DockerCodeServer) -> None:
    """Run the server over stdin/stdout."""
    logger.info("Starting server with stdio transport")
    _serve(logger, server, transport="stdio")


def run_http(host: str, port: int, logger: Any, server: DockerCodeServer) -> None:
    """Run the server with the stateless streamable HTTP transport on ``/mcp``.

    The transport is plain HTTP; put a TLS-terminating reverse proxy in front
    of it when exposing it beyond localhost.
    """
    logger.info(f"Starting server with HTTP transport on http://{host}:{port}{MCP_PATH}")
    if host not in ("127.0.0.1", "localhost", "::1"):
        logger.warning(
            f"Listening on non-localhost address {host}: traffic is plaintext. "
            "Set MCP_AUTH_TOKEN and use a reverse proxy for TLS."
        )

    _serve(
        logger,
        server,
        transport="http",
        host=host,
        port=port,
        path=MCP_PATH,
        middleware=server.http_middleware(),
        stateless_http=True,
    )


app = typer.Typer(
    name="docker-code-mcp",
    help="MCP server for running commands and editing files inside a Docker container",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"docker-code-mcp {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(  # noqa: B008
    transport: Transport = typer.Option(
        Transport.stdio,
        "--transport",
        help="Transport type",
    ),
    host: str = typer.Option(
        "127.0.0.1",
        "--host",
        help="Host to bind the HTTP server",
    ),
    port: int = typer.Option(
        DEFAULT_PORT,
        "--port",
        envvar="PORT",
        help="Port to bind the HTTP server",
    ),
    container: str | None = typer.Option(
        None,
        "--container",
        "-c",
        help="Target container ID or name (overrides DOCKER_CONTAINER_ID)",
    ),
    version: bool = typer.Option(  # noqa: ARG001
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Run the docker-code-mcp server with the specified transport."""
    config = Config()
    if container:
        config.docker.container_id = container

    setup_logger(config.server)

    logger = get_logger(__name__)
    logger.info(f"docker-code-mcp v{__version__}")
    logger.info(f"Configuration: {config}")

    server = DockerCodeServer(config)
    logger.info(f"Available tools: {', '.join(server.tool_names)}")

    try:
        if transport == Transport.stdio:
            run_stdio(logger, server)
        else:
            run_http(host, port, logger, server)
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
    except Exception as e:
        logger.exception(f"Server error: {e}")
        raise


if __name__ == "__main__":
    app()
