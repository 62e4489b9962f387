"""Output limiting for command results.

Keeps very large command output from exhausting memory or the client's
context window.
"""

from humanfriendly import format_size  # type: ignore[import-untyped]

from docker_code_mcp.utils.logger import get_logger

logger = get_logger(__name__)

NOTICE_SEPARATOR = "\n\n"
NOTICE_MARKER = " truncated: showing first "


def truncate_text(
    text: str,
    max_bytes: int,
    truncation_message: str | None = None,
) -> tuple[str, bool]:
    """Truncate text to a maximum number of UTF-8 bytes.

    Args:
        text: Text to truncate
        max_bytes: Maximum bytes allowed (0 = no limit)
        truncation_message: Optional message to append when truncated

    Returns:
        Tuple of (truncated_text, was_truncated)
    """
    encoded = text.encode("utf-8")
    if max_bytes <= 0 or len(encoded) <= max_bytes:
        return text, False

    # A multi-byte character cut in half is dropped
    truncated = encoded[:max_bytes].decode("utf-8", errors="ignore")
    if truncation_message:
        truncated += f"{NOTICE_SEPARATOR}{truncation_message}"

    logger.debug(f"Truncated text from {len(encoded)} bytes to {max_bytes} bytes")
    return truncated, True


def limit_stream_output(text: str, max_bytes: int, stream_name: str) -> tuple[str, bool]:
    """Apply the exec output limit to one stream, appending a human readable notice."""
    original_bytes = len(text.encode("utf-8"))
    message = (
        f"[{stream_name}{NOTICE_MARKER}{format_size(max_bytes)} of "
        f"{format_size(original_bytes)}. Set EXEC_MAX_OUTPUT_BYTES=0 to disable limit.]"
    )
    return truncate_text(text, max_bytes, truncation_message=message)


def split_truncation_notice(text: str) -> tuple[str, str | None]:
    """Separate the notice added by :func:`limit_stream_output` from the kept text."""
    kept, separator, notice = text.rpartition(NOTICE_SEPARATOR)
    if separator and notice.startswith("[") and NOTICE_MARKER in notice:
        return kept, notice
    return text, None
