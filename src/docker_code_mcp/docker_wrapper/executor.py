"""Command execution inside containers.

Commands run as ``<shell> -c <command>`` through the Docker exec API. The raw
attached stream is read in a worker thread and raced against a timer; the
first to finish decides the outcome of the call.
"""

import asyncio
import socket
import threading
from dataclasses import dataclass
from typing import Any

from docker.errors import APIError, NotFound

from docker_code_mcp.config import ExecConfig
from docker_code_mcp.docker_wrapper.client import DockerClientWrapper
from docker_code_mcp.docker_wrapper.exec_stream import demux_exec_stream
from docker_code_mcp.utils.errors import (
    CommandTimeoutError,
    ContainerNotFound,
    ContainerNotRunning,
    DockerOperationError,
)
from docker_code_mcp.utils.logger import get_logger
from docker_code_mcp.utils.messages import (
    ERROR_COMMAND_TIMEOUT,
    ERROR_CONTAINER_NOT_FOUND,
    ERROR_CONTAINER_NOT_RUNNING,
)
from docker_code_mcp.utils.output_limits import limit_stream_output

logger = get_logger(__name__)

READ_CHUNK_SIZE = 65536


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a command run in a container."""

    stdout: str
    stderr: str
    exit_code: int | None
    truncated: bool = False

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    def format(self) -> str:
        """Render as ``STDOUT:``/``STDERR:`` sections followed by the exit code."""
        output = ""
        if self.stdout:
            output += f"STDOUT:\n{self.stdout}\n"
        if self.stderr:
            output += f"STDERR:\n{self.stderr}\n"
        output += f"Exit Code: {self.exit_code}"
        return output


def _raw_socket(attached: Any) -> Any:
    """Underlying socket of the object returned by ``exec_start(socket=True)``."""
    return getattr(attached, "_sock", attached)


def _read_all(sock: Any) -> bytes:
    chunks: list[bytes] = []
    while True:
        chunk = sock.recv(READ_CHUNK_SIZE)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


def _write_stdin(sock: Any, data: bytes) -> None:
    try:
        sock.sendall(data)
        sock.shutdown(socket.SHUT_WR)
    except OSError as e:
        # The command may exit before consuming all of its input
        logger.debug(f"Stopped writing stdin after {type(e).__name__}: {e}")


def _start_stdin_writer(sock: Any, data: bytes) -> threading.Thread:
    """Feed stdin from its own thread so output is drained while input is sent."""
    writer = threading.Thread(target=_write_stdin, args=(sock, data), daemon=True)
    writer.start()
    return writer


class CommandRunner:
    """Runs shell commands in the target container."""

    def __init__(self, docker_client: DockerClientWrapper, config: ExecConfig) -> None:
        self.docker_client = docker_client
        self.config = config

    def _ensure_running(self, container_id: str) -> str:
        """Return the full container ID after checking the container runs."""
        container = self.docker_client.get_container(container_id)
        state = container.attrs.get("State") or {}
        if not state.get("Running"):
            raise ContainerNotRunning(ERROR_CONTAINER_NOT_RUNNING.format(container_id))
        return str(container.id)

    def _exec_blocking(  # noqa: PLR0913
        self,
        container_id: str,
        command: str,
        stdin: str | None,
        working_dir: str | None,
        user: str | None,
        env: list[str] | None,
        timeout: float,
    ) -> CommandResult:
        full_id = self._ensure_running(container_id)
        api = self.docker_client.api

        try:
            exec_id = api.exec_create(
                full_id,
                cmd=[self.config.shell, "-c", command],
                stdout=True,
                stderr=True,
                stdin=stdin is not None,
                tty=False,
                user=user or "",
                environment=env or None,
                workdir=working_dir or None,
            )["Id"]

            attached = api.exec_start(exec_id, detach=False, tty=False, socket=True)
            sock = _raw_socket(attached)
            writer: threading.Thread | None = None
            try:
                sock.settimeout(timeout)
                if stdin is not None:
                    writer = _start_stdin_writer(sock, stdin.encode("utf-8"))
                raw = _read_all(sock)
            except TimeoutError as e:
                raise CommandTimeoutError(ERROR_COMMAND_TIMEOUT) from e
            finally:
                if writer is not None:
                    writer.join(timeout)
                attached.close()

            exit_code = api.exec_inspect(exec_id).get("ExitCode")
        except NotFound as e:
            raise ContainerNotFound(ERROR_CONTAINER_NOT_FOUND.format(container_id)) from e
        except APIError as e:
            logger.error(f"Failed to execute command in {container_id}: {e}")
            raise DockerOperationError(f"Failed to execute command: {e}") from e

        streams = demux_exec_stream(raw)
        stdout = streams.stdout.decode("utf-8", errors="replace")
        stderr = streams.stderr.decode("utf-8", errors="replace")

        truncated = False
        if self.config.max_output_bytes > 0:
            stdout, cut_out = limit_stream_output(stdout, self.config.max_output_bytes, "STDOUT")
            stderr, cut_err = limit_stream_output(stderr, self.config.max_output_bytes, "STDERR")
            truncated = cut_out or cut_err

        return CommandResult(stdout=stdout, stderr=stderr, exit_code=exit_code, truncated=truncated)

    async def run(  # noqa: PLR0913
        self,
        command: str,
        *,
        container_id: str | None = None,
        stdin: str | None = None,
        working_dir: str | None = None,
        user: str | None = None,
        env: list[str] | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        """Run ``command`` in the target container.

        Args:
            command: Shell command line
            container_id: Container to use instead of the configured default
            stdin: Text written to the command's stdin, then closed
            working_dir: Working directory inside the container
            user: User to run the command as
            env: Extra environment entries in ``KEY=value`` form
            timeout: Seconds before failing with a timeout (default from config)

        Raises:
            NoTargetContainerError: If no container is given or configured
            ContainerNotFound: If the container does not exist
            ContainerNotRunning: If the container is stopped
            CommandTimeoutError: If the command outlives the timeout
            DockerOperationError: For other Docker API failures
        """
        target = self.docker_client.resolve_container_id(container_id)
        limit = timeout if timeout is not None else self.config.default_timeout
        logger.debug(f"Running in {target} (timeout={limit}s): {command}")

        try:
            result = await asyncio.wait_for(
                asyncio.to_thread(
                    self._exec_blocking, target, command, stdin, working_dir, user, env, limit
                ),
                timeout=limit,
            )
        except TimeoutError as e:
            logger.warning(f"Command timed out after {limit}s in {target}: {command}")
            raise CommandTimeoutError(ERROR_COMMAND_TIMEOUT) from e

        logger.debug(f"Command finished in {target} with exit code {result.exit_code}")
        return result
