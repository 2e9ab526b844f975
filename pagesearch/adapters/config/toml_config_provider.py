"""TOML-based configuration provider.

Loads configuration from pagesearch.toml with global config fallback.

Config loading priority (highest to lowest):
1. Local: <config_dir>/pagesearch.toml (project-specific)
2. Global: ~/.config/pagesearch/config.toml (user defaults)
3. Built-in defaults
"""

import logging
from pathlib import Path

from pagesearch.domain.config import PagesearchConfig
from pagesearch.shared.config_io import (
    get_global_config_path,
    get_local_config_path,
    load_config_data,
)

logger = logging.getLogger(__name__)


class TomlConfigProvider:
    """Configuration provider that loads from TOML files.

    Implements config cascade:
    1. Load global config if present
    2. Load local config if present
    3. Local values override global values (key-level merge per section)
    4. Missing values fall back to built-in defaults

    Gracefully handles missing or invalid configs with warnings.
    """

    def load(self, config_dir: Path) -> PagesearchConfig:
        """Load configuration with global fallback.

        Args:
            config_dir: Directory containing pagesearch.toml

        Returns:
            PagesearchConfig instance with merged global/local values or defaults
        """
        local_path = get_local_config_path(config_dir)
        global_path = get_global_config_path()

        config = PagesearchConfig.default()

        if global_path.exists():
            try:
                global_data = load_config_data(global_path)
                config = PagesearchConfig.from_partial(config, global_data)
                logger.debug("Loaded global config from %s", global_path)
            except (FileNotFoundError, ValueError, TypeError) as e:
                logger.warning(
                    "Failed to parse global config at %s: %s. Ignoring global config.",
                    global_path,
                    e,
                )

        if local_path.exists():
            try:
                local_data = load_config_data(local_path)
                config = PagesearchConfig.from_partial(config, local_data)
                logger.debug("Loaded local config from %s", local_path)
            except (FileNotFoundError, ValueError, TypeError) as e:
                logger.warning(
                    "Failed to parse %s: %s. Using global/default configuration.",
                    local_path.name,
                    e,
                )

        return config
