"""Message templates shared by the Docker wrapper and the tools."""

ERROR_CONTAINER_NOT_FOUND = "Container not found: {}"
ERROR_CONTAINER_NOT_RUNNING = "Container '{}' is not running"
ERROR_NO_TARGET_CONTAINER = (
    "No target container. Pass container_id or set the DOCKER_CONTAINER_ID environment variable."
)
ERROR_COMMAND_TIMEOUT = "Command timeout"
UNKNOWN_ERROR = "Unknown error"

FILE_EXISTS_MARKER = "exists"
DIRECTORY_MARKER = "directory"
