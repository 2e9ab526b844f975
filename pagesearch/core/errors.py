"""CLI error handling with actionable hints.

Provides consistent error formatting and common error factory functions
for all pagesearch CLI commands.
"""

from pathlib import Path
from typing import NoReturn

import click


class PagesearchCliError(click.ClickException):
    """CLI error with actionable hint for users.

    Attributes:
        message: The primary error message.
        hint: Optional actionable suggestion for the user.

    Example:
        raise PagesearchCliError(
            "Source file not found: notes.txt",
            hint="Check the path, or run from the directory containing it",
        )
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        """Initialize the error with message and optional hint.

        Args:
            message: The primary error message.
            hint: Optional actionable suggestion for the user.
        """
        super().__init__(message)
        self.hint = hint

    def format_message(self) -> str:
        """Format the error message with hint if present.

        Returns:
            Formatted error message, with hint on a new line if provided.
        """
        msg = self.message
        if self.hint:
            msg += f"\nHint: {self.hint}"
        return msg


def config_exists_error(path: Path) -> NoReturn:
    """Raise error when a config file would be overwritten.

    Args:
        path: The existing config file.

    Raises:
        PagesearchCliError: Always raises with --force hint.
    """
    raise PagesearchCliError(
        f"Config file already exists: {path}",
        hint="Use --force to overwrite it",
    )


def invalid_config_error(path: Path, reason: str) -> NoReturn:
    """Raise error when a config file cannot be used.

    Args:
        path: The offending config file.
        reason: Why it was rejected.

    Raises:
        PagesearchCliError: Always raises with regeneration hint.
    """
    raise PagesearchCliError(
        f"Invalid config file {path}: {reason}",
        hint="Fix the file, or recreate it with 'pagesearch config init --force'",
    )
