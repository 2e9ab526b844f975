"""Test fixtures module."""

from tests.fixtures.sample_lines import SAMPLE_LINES, write_sample_file

__all__ = ["SAMPLE_LINES", "write_sample_file"]
