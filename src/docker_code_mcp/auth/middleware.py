"""HTTP authentication middleware for the streamable HTTP transport.

The check runs on raw HTTP requests before they reach the MCP layer, so
rejected calls are answered with a JSON-RPC error envelope and never dispatched.
The stdio transport has no HTTP layer and is never gated.
"""

import secrets
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from docker_code_mcp.utils.logger import get_logger

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "

AUTH_REQUIRED_CODE = -32001
AUTH_REQUIRED_MESSAGE = "Authentication required. Please provide Authorization header."
INVALID_TOKEN_CODE = -32002
INVALID_TOKEN_MESSAGE = "Invalid authentication token."


def jsonrpc_error(status_code: int, code: int, message: str) -> JSONResponse:
    """JSON-RPC 2.0 error response not tied to any request id."""
    return JSONResponse(
        {"jsonrpc": "2.0", "error": {"code": code, "message": message}, "id": None},
        status_code=status_code,
    )


def extract_token(header_value: str) -> str:
    """Token from an Authorization header holding ``Bearer <token>`` or the raw token."""
    if header_value.startswith(BEARER_PREFIX):
        return header_value[len(BEARER_PREFIX) :]
    return header_value


class BearerTokenMiddleware(BaseHTTPMiddleware):
    """Rejects HTTP requests that do not carry the configured token.

    Missing header: 401 with code -32001. Wrong token: 403 with code -32002.
    An empty ``token`` disables the check.
    """

    def __init__(self, app: ASGIApp, token: str | None) -> None:
        super().__init__(app)
        self.token = token or None

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        if self.token is None:
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        header = request.headers.get("authorization")
        if not header:
            logger.warning(f"Rejected request from {client}: missing Authorization header")
            return jsonrpc_error(401, AUTH_REQUIRED_CODE, AUTH_REQUIRED_MESSAGE)

        if not secrets.compare_digest(extract_token(header).encode(), self.token.encode()):
            logger.warning(f"Rejected request from {client}: invalid token")
            return jsonrpc_error(403, INVALID_TOKEN_CODE, INVALID_TOKEN_MESSAGE)

        return await call_next(request)
