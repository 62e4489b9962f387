"""Operation safety levels used for tool annotations."""

from enum import Enum


class OperationSafety(str, Enum):
    """Classification of operation safety levels."""

    SAFE = "safe"  # Read-only (list, inspect, read, search)
    MODERATE = "moderate"  # Changes container state (exec, write, replace)
    DESTRUCTIVE = "destructive"  # Removes data (delete_file)
