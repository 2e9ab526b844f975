"""Domain value objects with validation.

Value objects that provide validation at construction time,
ensuring invalid states are unrepresentable.
"""

import fnmatch
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class PaginationCursor:
    """Current page and end-of-data flag for one search.

    Attributes:
        page: 1-based page number of the most recently requested batch.
        has_no_more_items: True once a fetch returned a short batch.

    Raises:
        ValueError: If page is less than 1.
    """

    page: int = 1
    has_no_more_items: bool = False

    def __post_init__(self) -> None:
        """Validate page number."""
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")

    def advance(self) -> "PaginationCursor":
        """Return the cursor for the next page."""
        return replace(self, page=self.page + 1)

    def rewind(self) -> "PaginationCursor":
        """Return the cursor for the previous page, never below page 1."""
        return replace(self, page=max(1, self.page - 1))

    def with_batch(self, received: int, batch_size: int) -> "PaginationCursor":
        """Return the cursor after a batch of ``received`` items arrived.

        Args:
            received: Number of items the fetch returned.
            batch_size: Expected items per page.

        Returns:
            Cursor with has_no_more_items set when the batch came up short.
        """
        return replace(self, has_no_more_items=received < batch_size)


@dataclass(frozen=True)
class GlobFilter:
    """Validated glob pattern used to filter result lines.

    Attributes:
        pattern: The fnmatch pattern string.

    Raises:
        ValueError: If pattern is empty.
    """

    pattern: str

    def __post_init__(self) -> None:
        """Validate glob pattern."""
        if not self.pattern:
            raise ValueError("GlobFilter pattern cannot be empty")

    def matches(self, text: str, case_sensitive: bool = False) -> bool:
        """Check if text matches this filter pattern.

        Args:
            text: The text to check.
            case_sensitive: Compare without case folding when True.

        Returns:
            True if the text matches the pattern.
        """
        if case_sensitive:
            return fnmatch.fnmatchcase(text, self.pattern)
        return fnmatch.fnmatchcase(text.casefold(), self.pattern.casefold())

    def __str__(self) -> str:
        """Return the pattern string."""
        return self.pattern
