"""Debug logging middleware for MCP protocol operations.

Logs every incoming request and outgoing response at DEBUG level when
``MCP_DEBUG_MODE`` is enabled.
"""

import json
from typing import Any

from fastmcp.server.middleware import CallNext, MiddlewareContext

from docker_code_mcp.middleware.utils import get_operation_type
from docker_code_mcp.utils.logger import get_logger

logger = get_logger(__name__)

MAX_ARGUMENTS_LENGTH = 2000
MAX_RESULT_LENGTH = 5000


def _shorten(data: Any, max_length: int) -> str:
    if isinstance(data, dict | list):
        try:
            text = json.dumps(data, indent=2)
        except (TypeError, ValueError):
            text = str(data)
    else:
        text = str(data)

    if len(text) > max_length:
        return text[:max_length] + f"\n... (truncated, {len(text)} total characters)"
    return text


class DebugLoggingMiddleware:
    """FastMCP middleware logging requests and responses.

    When disabled, requests pass straight through without any formatting work.

    Example:
        ```python
        app = create_fastmcp_app()
        app.add_middleware(DebugLoggingMiddleware(debug_enabled=True))
        ```
    """

    def __init__(self, debug_enabled: bool = False) -> None:
        self._debug_enabled = debug_enabled
        state = "ENABLED" if debug_enabled else "disabled"
        logger.info(f"DebugLoggingMiddleware initialized (debug logging {state})")

    async def __call__(
        self,
        context: MiddlewareContext[Any],
        call_next: CallNext[Any, Any],
    ) -> Any:
        if not self._debug_enabled:
            return await call_next(context)

        operation_type = get_operation_type(context)
        arguments = getattr(context.message, "arguments", None)

        logger.debug(f"MCP Request: {operation_type}")
        if arguments:
            logger.debug(f"Arguments:\n{_shorten(arguments, MAX_ARGUMENTS_LENGTH)}")

        try:
            result = await call_next(context)
        except Exception as e:
            logger.debug(f"MCP Response: {operation_type} - ERROR {type(e).__name__}: {e}")
            raise

        logger.debug(f"MCP Response: {operation_type} - SUCCESS")
        logger.debug(f"Result:\n{_shorten(result, MAX_RESULT_LENGTH)}")
        return result
