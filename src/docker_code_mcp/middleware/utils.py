"""Helpers for reading FastMCP middleware contexts."""

from typing import Any

from fastmcp.server.middleware import MiddlewareContext


def get_operation_type(context: MiddlewareContext[Any]) -> str:
    """Describe the MCP operation carried by ``context``.

    Examples:
        - Tool call: "tool_call:read_file"
        - MCP protocol: "tools/list"
        - Anything else: the context's method, or "mcp_protocol"
    """
    message = context.message

    tool_name = getattr(message, "name", None)
    if tool_name and hasattr(message, "arguments"):
        return f"tool_call:{tool_name}"

    method = getattr(message, "method", None) or getattr(context, "method", None)
    if method:
        return str(method)

    return "mcp_protocol"
