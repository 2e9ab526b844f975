"""Test helper utilities for the pagesearch test suite."""

from tests.helpers.cli_assertions import (
    assert_command_failed,
    assert_command_success,
    assert_output_contains,
)
from tests.helpers.fetch import FakeClock, ScriptedFetch, items, settle, wait_until

__all__ = [
    "assert_command_success",
    "assert_command_failed",
    "assert_output_contains",
    "FakeClock",
    "ScriptedFetch",
    "items",
    "settle",
    "wait_until",
]
