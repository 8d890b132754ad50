"""Decorators for command functions."""

import functools
import time
import traceback
from collections.abc import Callable

import typer

from getitdone.services.config_service import ConfigError
from getitdone.utils import exit_codes
from getitdone.utils.logger import get_logger
from getitdone.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = exit_codes.ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def _log_failure(logger, cmd: str, start: float, code: int, message: str) -> None:
    logger.error(
        "command failed: %s (%.3fs) exit=%s (%s) - %s",
        cmd,
        time.monotonic() - start,
        exit_codes.get_exit_code_name(code),
        exit_codes.get_exit_code_description(code),
        message,
    )


def command_wrapper(func: Callable) -> Callable:
    """Log timing and map failures to exit codes for a command function."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            result = func(*args, **kwargs)
            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except AppError as e:
            _log_failure(logger, cmd, start, e.exit_code, str(e))
            format_error(str(e))
            raise typer.Exit(code=e.exit_code) from e

        except ConfigError as e:
            _log_failure(logger, cmd, start, exit_codes.ERROR_CONFIG, str(e))
            format_error(str(e))
            raise typer.Exit(code=exit_codes.ERROR_CONFIG) from e

        except typer.Exit:
            # Re-raise Typer's own exits (like --help or explicit Exit(0))
            raise

        except Exception as e:
            _log_failure(
                logger,
                cmd,
                start,
                exit_codes.ERROR_GENERAL,
                f"{e}\n{traceback.format_exc()}",
            )
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

    return wrapper
