"""Search tools: ``grep`` over file contents and ``find`` over file names."""

from typing import Annotated, Any, Literal

from pydantic import Field

from docker_code_mcp.config import SafetyConfig
from docker_code_mcp.docker_wrapper.executor import CommandRunner
from docker_code_mcp.tools.container import ContainerIdParam
from docker_code_mcp.tools.filters import ToolSpec, register_tools_with_filtering
from docker_code_mcp.utils.safety import OperationSafety
from docker_code_mcp.utils.shell import find_command, grep_command
from docker_code_mcp.utils.tool_errors import log_call, returns_error_text

GREP_NO_MATCH = 1


def create_grep_tool(runner: CommandRunner) -> ToolSpec:
    """Create the grep tool."""

    @returns_error_text("Error")
    async def grep(  # noqa: PLR0913
        pattern: Annotated[
            str, Field(description="The regular expression pattern to search for in file contents")
        ],
        path: Annotated[
            str,
            Field(
                description="File or directory to search in inside the container. "
                "Defaults to current working directory."
            ),
        ] = ".",
        type: Annotated[  # noqa: A002
            str | None, Field(description="File extension to search (js, py, ts, etc).")
        ] = None,
        case_insensitive: Annotated[bool, Field(description="Case insensitive search")] = False,
        context_before: Annotated[
            int | None, Field(ge=0, description="Number of lines to show before each match")
        ] = None,
        context_after: Annotated[
            int | None, Field(ge=0, description="Number of lines to show after each match")
        ] = None,
        context: Annotated[
            int | None,
            Field(ge=0, description="Number of lines to show before and after each match"),
        ] = None,
        head_limit: Annotated[
            int | None, Field(ge=0, description="Limit output to first N lines")
        ] = None,
        container_id: ContainerIdParam = None,
    ) -> str:
        log_call("grep", pattern=pattern, path=path, type=type, head_limit=head_limit)

        command = grep_command(
            pattern,
            path,
            file_type=type,
            case_insensitive=case_insensitive,
            context_before=context_before,
            context_after=context_after,
            context=context,
            head_limit=head_limit,
        )
        result = await runner.run(command, container_id=container_id)

        if result.exit_code == GREP_NO_MATCH and not result.stderr:
            return "No matches found."
        if result.exit_code not in (0, GREP_NO_MATCH):
            return f"Error: {result.stderr or 'Search failed'}"

        return result.stdout.strip() or "No matches found."

    return (
        "grep",
        "A powerful search tool for finding patterns in files inside the Docker container. "
        "Supports full regex syntax.",
        OperationSafety.SAFE,
        True,
        False,
        grep,
    )


def create_find_files_tool(runner: CommandRunner) -> ToolSpec:
    """Create the find_files tool."""

    @returns_error_text("Error")
    async def find_files(
        pattern: Annotated[
            str,
            Field(description="The file name pattern to search for (supports wildcards like *.js)"),
        ],
        path: Annotated[
            str, Field(description="Directory to search in inside the container")
        ] = ".",
        type: Annotated[  # noqa: A002
            Literal["f", "d", "l"],
            Field(description="Type of files to find: f=files, d=directories, l=links"),
        ] = "f",
        container_id: ContainerIdParam = None,
    ) -> str:
        log_call("find_files", pattern=pattern, path=path, type=type)

        result = await runner.run(find_command(pattern, path, type), container_id=container_id)
        if result.exit_code != 0:
            return f"Error: {result.stderr or 'Find command failed'}"

        return result.stdout.strip() or f"No files found matching pattern: {pattern}"

    return (
        "find_files",
        "Find files matching a pattern inside the Docker container using find command.",
        OperationSafety.SAFE,
        True,
        False,
        find_files,
    )


def register_search_tools(
    app: Any,
    runner: CommandRunner,
    safety_config: SafetyConfig,
) -> list[str]:
    """Register the search tools with FastMCP."""
    tools = [
        create_grep_tool(runner),
        create_find_files_tool(runner),
    ]

    return register_tools_with_filtering(app, tools, safety_config)
