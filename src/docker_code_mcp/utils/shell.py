"""Shell command construction for commands run inside the target container.

Every user-supplied value is wrapped with :func:`escape_shell_arg` before it
is spliced into a command string.
"""

from docker_code_mcp.utils.messages import DIRECTORY_MARKER, FILE_EXISTS_MARKER

FIND_TYPES = ("f", "d", "l")


def escape_shell_arg(value: str) -> str:
    """Quote a value for a POSIX shell.

    The value is wrapped in single quotes; each embedded single quote becomes
    ``'\\''`` (close the quote, add an escaped quote, reopen). The shell
    evaluates the result back to exactly ``value``.

    >>> escape_shell_arg("it's")
    "'it'\\\\''s'"
    """
    return "'" + value.replace("'", "'\\''") + "'"


def file_exists_command(path: str) -> str:
    """Print the exists marker when ``path`` is a regular file."""
    return f'test -f {escape_shell_arg(path)} && echo "{FILE_EXISTS_MARKER}" || echo "not found"'


def directory_exists_command(path: str) -> str:
    """Print the exists marker when ``path`` is a directory."""
    return f'test -d {escape_shell_arg(path)} && echo "{FILE_EXISTS_MARKER}" || echo "not found"'


def is_directory_command(path: str) -> str:
    return f'test -d {escape_shell_arg(path)} && echo "{DIRECTORY_MARKER}" || echo "file"'


def cat_command(path: str) -> str:
    return f"cat {escape_shell_arg(path)}"


def write_from_stdin_command(path: str) -> str:
    """Redirect stdin into ``path``, replacing any previous content."""
    return f"cat > {escape_shell_arg(path)}"


def mkdir_command(path: str) -> str:
    return f"mkdir -p {escape_shell_arg(path)}"


def list_directory_command(path: str, show_hidden: bool = False) -> str:
    flags = "-la" if show_hidden else "-l"
    return f"ls {flags} {escape_shell_arg(path)}"


def remove_file_command(path: str) -> str:
    return f"rm {escape_shell_arg(path)}"


def grep_command(  # noqa: PLR0913
    pattern: str,
    path: str = ".",
    file_type: str | None = None,
    case_insensitive: bool = False,
    context_before: int | None = None,
    context_after: int | None = None,
    context: int | None = None,
    head_limit: int | None = None,
) -> str:
    """Build a recursive ``grep`` with line numbers.

    ``context`` takes precedence over ``context_before``/``context_after``.
    ``file_type`` is an extension such as ``py`` and becomes ``--include=*.py``.
    """
    parts = ["grep", "-r"]
    if case_insensitive:
        parts.append("-i")
    parts.append("-n")

    if context is not None:
        parts.append(f"-C {int(context)}")
    else:
        if context_before is not None:
            parts.append(f"-B {int(context_before)}")
        if context_after is not None:
            parts.append(f"-A {int(context_after)}")

    if file_type:
        parts.append(escape_shell_arg(f"--include=*.{file_type}"))

    # -e keeps patterns starting with '-' from being read as options
    parts.extend(["-e", escape_shell_arg(pattern), escape_shell_arg(path)])
    command = " ".join(parts)

    if head_limit:
        command += f" | head -n {int(head_limit)}"
    return command


def find_command(pattern: str, path: str = ".", file_type: str = "f") -> str:
    """Build ``find <path> -type <t> -name <pattern>``."""
    if file_type not in FIND_TYPES:
        raise ValueError(f"Invalid find type: {file_type}. Must be one of {FIND_TYPES}")
    return f"find {escape_shell_arg(path)} -type {file_type} -name {escape_shell_arg(pattern)}"
