"""
Exit codes for Get It Done.

Semantic exit codes so scripts wrapping the CLI can tell a rejected task
apart from a crash.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error (empty, too short, too long, duplicate)
ERROR_INVALID_ARGS = 2

# Configuration could not be read or written
ERROR_CONFIG = 3


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_CONFIG: "ERROR_CONFIG",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    descriptions = {
        SUCCESS: "Command executed successfully",
        ERROR_GENERAL: "A general error occurred",
        ERROR_INVALID_ARGS: "Invalid arguments or validation error",
        ERROR_CONFIG: "Configuration error - check config.json",
    }
    return descriptions.get(code, "Unknown error")
