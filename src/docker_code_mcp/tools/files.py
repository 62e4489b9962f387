"""File tools: read, write, edit, list and delete files inside the target container.

All file access goes through shell commands run by :class:`CommandRunner`.
Writes feed the new content to ``cat > <path>`` over stdin so it lands byte
for byte.
"""

import posixpath
from typing import Annotated, Any

from pydantic import Field

from docker_code_mcp.config import SafetyConfig
from docker_code_mcp.docker_wrapper.executor import CommandRunner
from docker_code_mcp.tools.container import ContainerIdParam
from docker_code_mcp.tools.filters import ToolSpec, register_tools_with_filtering
from docker_code_mcp.utils.logger import get_logger
from docker_code_mcp.utils.messages import DIRECTORY_MARKER, FILE_EXISTS_MARKER
from docker_code_mcp.utils.output_limits import split_truncation_notice
from docker_code_mcp.utils.safety import OperationSafety
from docker_code_mcp.utils.shell import (
    cat_command,
    directory_exists_command,
    file_exists_command,
    is_directory_command,
    list_directory_command,
    mkdir_command,
    remove_file_command,
    write_from_stdin_command,
)
from docker_code_mcp.utils.tool_errors import log_call, returns_error_text

logger = get_logger(__name__)

LINE_NUMBER_WIDTH = 6


def number_lines(content: str, offset: int | None = None, limit: int | None = None) -> str:
    """Prefix lines with right-aligned 1-based numbers (``%6d|line``).

    Args:
        content: File content; a final newline does not start an extra line
        offset: First line to show (values below 1 are treated as 1)
        limit: Maximum number of lines to show
    """
    lines = content.split("\n")
    if content.endswith("\n"):
        lines.pop()

    start = max(1, offset) if offset is not None else 1
    end = len(lines)
    if limit is not None:
        end = min(end, start + limit - 1)

    return "\n".join(
        f"{number:{LINE_NUMBER_WIDTH}d}|{line}"
        for number, line in enumerate(lines[start - 1 : end], start=start)
    )


async def _file_exists(runner: CommandRunner, path: str, container_id: str | None) -> bool:
    result = await runner.run(file_exists_command(path), container_id=container_id)
    return result.stdout.strip() == FILE_EXISTS_MARKER


def create_read_file_tool(runner: CommandRunner) -> ToolSpec:
    """Create the read_file tool."""

    @returns_error_text("Error")
    async def read_file(
        target_file: Annotated[
            str, Field(description="The path of the file to read inside the container")
        ],
        offset: Annotated[
            int | None,
            Field(
                description="The line number to start reading from. "
                "Only provide if the file is too large to read at once."
            ),
        ] = None,
        limit: Annotated[
            int | None,
            Field(
                ge=0,
                description="The number of lines to read. "
                "Only provide if the file is too large to read at once.",
            ),
        ] = None,
        container_id: ContainerIdParam = None,
    ) -> str:
        log_call("read_file", target_file=target_file, offset=offset, limit=limit)

        if not await _file_exists(runner, target_file, container_id):
            return f"Error: File not found: {target_file}"

        result = await runner.run(cat_command(target_file), container_id=container_id)
        if result.exit_code != 0:
            return f"Error reading file: {result.stderr}"

        if not result.stdout:
            return "File is empty."

        content, notice = result.stdout, None
        if result.truncated:
            content, notice = split_truncation_notice(result.stdout)

        numbered = number_lines(content, offset, limit)
        return f"{numbered}\n\n{notice}" if notice else numbered

    return (
        "read_file",
        "Reads a file from inside the Docker container. You can optionally specify a line "
        "offset and limit for large files. Lines in the output are numbered starting at 1.",
        OperationSafety.SAFE,
        True,
        False,
        read_file,
    )


def create_write_file_tool(runner: CommandRunner) -> ToolSpec:
    """Create the write_file tool."""

    @returns_error_text("Error")
    async def write_file(
        file_path: Annotated[str, Field(description="The path to the file inside the container")],
        contents: Annotated[str, Field(description="The contents of the file to write")],
        container_id: ContainerIdParam = None,
    ) -> str:
        log_call("write_file", file_path=file_path, characters=len(contents))

        parent = posixpath.dirname(file_path)
        if parent and parent not in (".", "/"):
            await runner.run(mkdir_command(parent), container_id=container_id)

        existed = await _file_exists(runner, file_path, container_id)

        result = await runner.run(
            write_from_stdin_command(file_path), container_id=container_id, stdin=contents
        )
        if result.exit_code != 0:
            return f"Error writing file: {result.stderr}"

        action = "Overwritten" if existed else "Created"
        logger.info(f"{action} {file_path} in container")
        return f"{action} file: {file_path} ({len(contents)} characters)"

    return (
        "write_file",
        "Writes a file inside the Docker container. This tool will overwrite the existing "
        "file if there is one at the provided path.",
        OperationSafety.MODERATE,
        True,  # same contents give the same file
        False,
        write_file,
    )


def create_search_replace_tool(runner: CommandRunner) -> ToolSpec:
    """Create the search_replace tool."""

    @returns_error_text("Error")
    async def search_replace(
        file_path: Annotated[
            str, Field(description="The path to the file inside the container to modify")
        ],
        old_string: Annotated[str, Field(description="The text to replace")],
        new_string: Annotated[
            str,
            Field(description="The text to replace it with (must be different from old_string)"),
        ],
        replace_all: Annotated[
            bool, Field(description="Replace all occurrences of old_string (default false)")
        ] = False,
        container_id: ContainerIdParam = None,
    ) -> str:
        log_call("search_replace", file_path=file_path, replace_all=replace_all)

        if old_string == new_string:
            return "Error: old_string and new_string must be different"

        if not await _file_exists(runner, file_path, container_id):
            return f"Error: File not found: {file_path}"

        current = await runner.run(cat_command(file_path), container_id=container_id)
        if current.exit_code != 0:
            return f"Error reading file: {current.stderr}"
        if current.truncated:
            return (
                f"Error: {file_path} exceeds EXEC_MAX_OUTPUT_BYTES and cannot be edited "
                "without losing content"
            )

        content = current.stdout
        occurrences = content.count(old_string)
        if occurrences > 1 and not replace_all:
            return (
                f'Error: old_string "{old_string}" is not unique in the file. '
                "Use replace_all=true or provide more context to make it unique."
            )
        if occurrences == 0:
            return f'Error: old_string "{old_string}" not found in file'

        if replace_all:
            updated = content.replace(old_string, new_string)
            replaced = occurrences
        else:
            updated = content.replace(old_string, new_string, 1)
            replaced = 1

        result = await runner.run(
            write_from_stdin_command(file_path), container_id=container_id, stdin=updated
        )
        if result.exit_code != 0:
            return f"Error writing file: {result.stderr}"

        return f"Successfully replaced {replaced} occurrence(s) in {file_path}"

    return (
        "search_replace",
        "Performs exact string replacements in files inside the Docker container. The edit "
        "will FAIL if old_string is not unique in the file unless replace_all is true.",
        OperationSafety.MODERATE,
        False,
        False,
        search_replace,
    )


def create_list_dir_tool(runner: CommandRunner) -> ToolSpec:
    """Create the list_dir tool."""

    @returns_error_text("Error")
    async def list_dir(
        target_directory: Annotated[
            str, Field(description="Path to directory inside the container to list contents of.")
        ],
        show_hidden: Annotated[
            bool, Field(description="Show hidden files and directories (starting with .)")
        ] = False,
        container_id: ContainerIdParam = None,
    ) -> str:
        log_call("list_dir", target_directory=target_directory, show_hidden=show_hidden)

        check = await runner.run(
            directory_exists_command(target_directory), container_id=container_id
        )
        if check.stdout.strip() != FILE_EXISTS_MARKER:
            return f"Error: Directory not found: {target_directory}"

        result = await runner.run(
            list_directory_command(target_directory, show_hidden), container_id=container_id
        )
        if result.exit_code != 0:
            return f"Error listing directory: {result.stderr}"

        return result.stdout.strip() or "Directory is empty."

    return (
        "list_dir",
        "Lists files and directories inside the Docker container. Does not display "
        "dot-files and dot-directories by default.",
        OperationSafety.SAFE,
        True,
        False,
        list_dir,
    )


def create_delete_file_tool(runner: CommandRunner) -> ToolSpec:
    """Create the delete_file tool."""

    @returns_error_text("Error deleting file")
    async def delete_file(
        target_file: Annotated[
            str, Field(description="The path of the file to delete inside the container")
        ],
        explanation: Annotated[
            str,
            Field(
                description="One sentence explanation as to why this tool is being used, "
                "and how it contributes to the goal."
            ),
        ],
        container_id: ContainerIdParam = None,
    ) -> str:
        log_call("delete_file", target_file=target_file, explanation=explanation)

        # test -f is false for directories, so the directory check comes first
        kind = await runner.run(is_directory_command(target_file), container_id=container_id)
        if kind.stdout.strip() == DIRECTORY_MARKER:
            return f"Error: Cannot delete directory with delete_file tool: {target_file}"

        if not await _file_exists(runner, target_file, container_id):
            return f"File does not exist: {target_file}"

        result = await runner.run(remove_file_command(target_file), container_id=container_id)
        if result.exit_code != 0:
            return f"Error deleting file: {result.stderr}"

        logger.info(f"Deleted {target_file} in container")
        return f"Successfully deleted file: {target_file}\nReason: {explanation}"

    return (
        "delete_file",
        "Deletes a file inside the Docker container. The operation will fail gracefully "
        "if the file doesn't exist or cannot be deleted.",
        OperationSafety.DESTRUCTIVE,
        True,
        False,
        delete_file,
    )


def register_file_tools(
    app: Any,
    runner: CommandRunner,
    safety_config: SafetyConfig,
) -> list[str]:
    """Register the file tools with FastMCP."""
    tools = [
        create_read_file_tool(runner),
        create_write_file_tool(runner),
        create_search_replace_tool(runner),
        create_list_dir_tool(runner),
        create_delete_file_tool(runner),
    ]

    return register_tools_with_filtering(app, tools, safety_config)
