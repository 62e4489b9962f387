"""MCP tools operating on the target container.

Each module exposes ``create_*_tool`` factories and a ``register_*_tools``
function; :func:`register_all_tools` wires all of them into a FastMCP app.
"""

from docker_code_mcp.tools.registration import register_all_tools

__all__ = ["register_all_tools"]
