"""Pytest configuration and shared fixtures."""

from pathlib import Path
from unittest.mock import patch

import pytest

from pagesearch.core.controller import PaginatedSearchController
from pagesearch.core.query import TextQuery
from tests.fixtures import write_sample_file
from tests.helpers import FakeClock, ScriptedFetch

# ============================================================================
# Config isolation
# ============================================================================
# Tests must never read the user's ~/.config/pagesearch/config.toml.


@pytest.fixture(autouse=True)
def isolated_global_config(tmp_path: Path):
    """Point the global config path at a file that does not exist yet."""
    global_path = tmp_path / "global_config" / "config.toml"
    with patch(
        "pagesearch.shared.config_io.get_global_config_path",
        return_value=global_path,
    ), patch(
        "pagesearch.adapters.config.toml_config_provider.get_global_config_path",
        return_value=global_path,
    ):
        yield global_path


# ============================================================================
# Controller fixtures
# ============================================================================


@pytest.fixture
def clock() -> FakeClock:
    """Clock driving the load-more cooldown."""
    return FakeClock(start=100.0)


@pytest.fixture
def query() -> TextQuery:
    """Query source holding a non-empty query."""
    return TextQuery("cat")


@pytest.fixture
def make_controller(query: TextQuery, clock: FakeClock):
    """Factory for controllers with a short debounce, the query and clock fixtures."""

    def factory(
        fetch: ScriptedFetch,
        batch_size: int = 10,
        initial_filter: object = None,
        debounce_ms: int = 10,
        cooldown_ms: int = 1000,
    ) -> PaginatedSearchController:
        return PaginatedSearchController(
            fetch,
            batch_size,
            initial_filter,
            query_source=query,
            debounce_ms=debounce_ms,
            cooldown_ms=cooldown_ms,
            clock=clock,
        )

    return factory


# ============================================================================
# Data files
# ============================================================================


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """Text file with SAMPLE_LINES."""
    return write_sample_file(tmp_path)
