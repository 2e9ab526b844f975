"""Configuration provider port.

Defines the interface for loading and accessing application configuration.
"""

from pathlib import Path
from typing import Protocol

from pagesearch.domain.config import PagesearchConfig


class ConfigProvider(Protocol):
    """Protocol for loading and providing configuration."""

    def load(self, config_dir: Path) -> PagesearchConfig:
        """Load configuration from a directory.

        Args:
            config_dir: Directory containing pagesearch.toml

        Returns:
            PagesearchConfig instance with loaded or default values

        Note:
            Implementations should gracefully fall back to defaults
            if config file is missing or invalid.
        """
        ...
