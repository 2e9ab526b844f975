"""Controller error handling utilities.

Fetch functions are external code and may raise anything. The controller
never lets those exceptions escape into the event loop; it logs them with
these helpers and publishes a ``Failed`` state instead.

Design principles:
1. KeyboardInterrupt, SystemExit and CancelledError are never caught
2. PagesearchError subclasses carry user-friendly messages
3. Unexpected exceptions are logged with a traceback
"""

import logging

logger = logging.getLogger(__name__)


class PagesearchError(Exception):
    """Base exception for errors with user-facing messages.

    Subclass this for specific error types. The error message should be
    user-friendly since it may be displayed directly to users.

    Attributes:
        message: User-friendly error message.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class SourceNotFoundError(PagesearchError):
    """Raised when a data source file does not exist."""

    pass


def format_error_message(exception: BaseException, operation_name: str) -> str:
    """Format an exception into a user-friendly error message.

    - PagesearchError: Uses the error's message directly
    - OSError: Adds context about permissions/disk space
    - ValueError/RuntimeError: Includes exception message with operation context
    - Other exceptions: Returns a generic "internal error" message

    Args:
        exception: The exception that was caught.
        operation_name: Name of the operation for error messages (e.g., "search").

    Returns:
        User-friendly error message string.
    """
    if isinstance(exception, PagesearchError):
        return exception.message
    elif isinstance(exception, OSError):
        return (
            f"I/O error: {exception}. "
            "Check file permissions and filesystem access."
        )
    elif isinstance(exception, (ValueError, RuntimeError)):
        return f"{operation_name.capitalize()} error: {exception}"
    else:
        return f"Internal error during {operation_name}. Check logs for details."


def log_controller_error(exception: BaseException, operation_name: str) -> None:
    """Log an exception raised while fetching, with severity by type.

    - PagesearchError: ERROR level (expected errors)
    - OSError/ValueError/RuntimeError: ERROR level
    - Other exceptions: EXCEPTION level (includes traceback)

    Args:
        exception: The exception that was caught.
        operation_name: Name of the operation for log messages.
    """
    if isinstance(exception, PagesearchError):
        logger.error(str(exception))
    elif isinstance(exception, OSError):
        logger.error(f"I/O error during {operation_name}: {exception}")
    elif isinstance(exception, (ValueError, RuntimeError)):
        logger.error(f"Error during {operation_name}: {exception}")
    else:
        logger.error(
            f"Unexpected error during {operation_name}",
            exc_info=(type(exception), exception, exception.__traceback__),
        )
