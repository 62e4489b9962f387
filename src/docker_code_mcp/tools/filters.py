"""Allow/deny filtering applied while registering tools.

Kept apart from registration.py so tool modules can import it without a cycle.
"""

from typing import Any

from docker_code_mcp.config import SafetyConfig
from docker_code_mcp.utils.fastmcp_helpers import get_mcp_annotations
from docker_code_mcp.utils.logger import get_logger
from docker_code_mcp.utils.safety import OperationSafety

logger = get_logger(__name__)

ToolSpec = tuple[str, str, OperationSafety, bool, bool, Any]


def should_register_tool(tool_name: str, safety_config: SafetyConfig) -> bool:
    """Check a tool name against the allow/deny lists.

    The deny list wins. A non-empty allow list admits only the tools it names.
    """
    if safety_config.denied_tools and tool_name in safety_config.denied_tools:
        logger.debug(f"Skipping tool {tool_name} (in deny list)")
        return False

    if safety_config.allowed_tools and tool_name not in safety_config.allowed_tools:
        logger.debug(f"Skipping tool {tool_name} (not in allow list)")
        return False

    return True


def register_tools_with_filtering(
    app: Any,
    tools: list[ToolSpec],
    safety_config: SafetyConfig | None,
) -> list[str]:
    """Register ``(name, description, safety, idempotent, open_world, func)`` tuples.

    Args:
        app: FastMCP application instance
        tools: Tool tuples produced by the ``create_*_tool`` factories
        safety_config: Safety configuration (None to skip filtering)

    Returns:
        Names of the tools actually registered
    """
    registered_names = []

    for name, description, safety_level, idempotent, open_world, func in tools:
        if safety_config and not should_register_tool(name, safety_config):
            continue

        annotations = get_mcp_annotations(safety_level)
        annotations["idempotentHint"] = idempotent
        annotations["openWorldHint"] = open_world

        app.tool(name=name, description=description, annotations=annotations)(func)

        registered_names.append(name)
        logger.debug(f"Registered tool: {name} (safety: {safety_level.value})")

    return registered_names
