"""Docker client wrapper and in-container command execution."""
