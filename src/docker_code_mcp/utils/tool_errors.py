"""Conversion of tool failures into plain-text results.

Tools never raise into the MCP layer: any failure becomes a readable message
for the calling agent, prefixed with what the tool was doing.
"""

import functools
from collections.abc import Awaitable, Callable
from typing import Any, ParamSpec

from docker.errors import DockerException

from docker_code_mcp.utils.errors import DockerCodeError
from docker_code_mcp.utils.logger import get_logger
from docker_code_mcp.utils.messages import UNKNOWN_ERROR

logger = get_logger(__name__)

P = ParamSpec("P")


def describe_error(error: BaseException) -> str:
    """Message shown to the client for ``error``."""
    if isinstance(error, DockerException):
        explanation = getattr(error, "explanation", None)
        if explanation:
            return str(explanation)
    message = str(error)
    return message or UNKNOWN_ERROR


def returns_error_text(
    prefix: str,
) -> Callable[[Callable[P, Awaitable[str]]], Callable[P, Awaitable[str]]]:
    """Decorator turning exceptions raised by an async tool into ``"<prefix>: <message>"``.

    Example:
        @returns_error_text("Execution error")
        async def exec_tool(command: str) -> str:
            ...
    """

    def decorator(func: Callable[P, Awaitable[str]]) -> Callable[P, Awaitable[str]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> str:
            try:
                return await func(*args, **kwargs)
            except (DockerCodeError, DockerException) as e:
                logger.warning(f"{func.__name__} failed: {type(e).__name__}: {e}")
                return f"{prefix}: {describe_error(e)}"
            except Exception as e:
                logger.exception(f"Unexpected error in {func.__name__}: {e}")
                return f"{prefix}: {describe_error(e)}"

        return wrapper

    return decorator


def log_call(tool_name: str, **arguments: Any) -> None:
    """Log a tool invocation with its non-empty arguments."""
    shown = {key: value for key, value in arguments.items() if value is not None}
    logger.info(f"Tool call: {tool_name} {shown}")
