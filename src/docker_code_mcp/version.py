"""Version information for the Docker code editing MCP server.

The version is declared in pyproject.toml and read at runtime via importlib.metadata.
"""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Get version string from package metadata."""
    try:
        return version("docker-code-mcp")
    except PackageNotFoundError:
        # Source checkout without an install
        return "0.0.0+dev"


__version__ = get_version()
