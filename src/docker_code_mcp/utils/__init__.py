"""Utility modules for the Docker code editing MCP server."""
