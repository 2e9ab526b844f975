"""File-backed fetch function.

Serves the lines of a text file that contain the query, one page at a time.
"""

import asyncio
import logging
from pathlib import Path

from pagesearch.core.fetch_errors import SourceNotFoundError
from pagesearch.domain.config import SourceConfig
from pagesearch.domain.value_objects import GlobFilter
from pagesearch.ports.fetch import FetchContext

logger = logging.getLogger(__name__)


class LineFileSource:
    """Fetch function over the lines of a text file.

    A line matches when it contains the query and, if the controller's
    filter is a GlobFilter, also matches that pattern. Matches are paged by
    the controller's ``page`` and ``batch_size``.
    """

    def __init__(self, path: Path, config: SourceConfig | None = None) -> None:
        """Initialize the source.

        Args:
            path: Text file to search.
            config: Matching and encoding options. Defaults to SourceConfig().
        """
        self.path = path
        self.config = config or SourceConfig()

    async def __call__(self, context: FetchContext[GlobFilter | None]) -> list[str]:
        """Return the page of matching lines requested by context.

        Raises:
            SourceNotFoundError: If the file does not exist.
        """
        query = context.query
        line_filter = context.current_filter
        page = context.page
        batch_size = context.batch_size

        # File I/O is blocking; keep it off the event loop
        loop = asyncio.get_running_loop()
        matches = await loop.run_in_executor(None, self.matching_lines, query, line_filter)

        start = (page - 1) * batch_size
        batch = matches[start : start + batch_size]
        logger.debug(
            "%s: %d match(es) for %r, page %d -> %d line(s)",
            self.path,
            len(matches),
            query,
            page,
            len(batch),
        )
        return batch

    def matching_lines(
        self, query: str, line_filter: GlobFilter | None = None
    ) -> list[str]:
        """Return every line of the file matching query and filter.

        Args:
            query: Text that must appear in the line.
            line_filter: Optional glob each line must also match.

        Returns:
            Matching lines in file order, without line terminators.

        Raises:
            SourceNotFoundError: If the file does not exist.
        """
        if not self.path.is_file():
            raise SourceNotFoundError(f"Source file not found: {self.path}")

        case_sensitive = self.config.case_sensitive
        needle = query if case_sensitive else query.casefold()

        matches: list[str] = []
        with self.path.open(encoding=self.config.encoding) as f:
            for raw_line in f:
                line = raw_line.rstrip("\r\n")
                haystack = line if case_sensitive else line.casefold()
                if needle not in haystack:
                    continue
                if line_filter is not None and not line_filter.matches(
                    line, case_sensitive=case_sensitive
                ):
                    continue
                matches.append(line)
        return matches
