"""Domain exceptions for pagesearch.

These exceptions represent business rule violations and domain-level errors.
They should be caught at the application boundary (CLI) and converted
to appropriate user-facing error messages.
"""


class PagesearchDomainError(Exception):
    """Base exception for all domain errors.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class ConflictingOptionsError(PagesearchDomainError):
    """Raised when mutually exclusive options are provided."""

    pass
