"""Configuration I/O utilities for reading and writing TOML config files.

This module handles serialization/deserialization of PagesearchConfig to/from TOML format.
"""

import os
import platform
import tomllib  # Built-in Python 3.11+
from pathlib import Path
from typing import Any

import tomli_w

from pagesearch.domain.config import PagesearchConfig

CONFIG_FILENAME = "pagesearch.toml"


def get_global_config_path() -> Path:
    """Get the path to the global config file.

    The location is platform-dependent:
    - Linux/macOS: $XDG_CONFIG_HOME/pagesearch/config.toml or ~/.config/pagesearch/config.toml
    - Windows: %APPDATA%/pagesearch/config.toml

    Returns:
        Path to the global config file (may not exist)
    """
    if platform.system() == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "pagesearch" / "config.toml"
        return Path.home() / ".config" / "pagesearch" / "config.toml"
    else:
        xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
        if xdg_config:
            return Path(xdg_config) / "pagesearch" / "config.toml"
        return Path.home() / ".config" / "pagesearch" / "config.toml"


def get_local_config_path(config_dir: Path) -> Path:
    """Get the path to the project config file inside config_dir."""
    return config_dir / CONFIG_FILENAME


def load_config_data(path: Path) -> dict[str, Any]:
    """Load raw TOML data from a config file.

    Args:
        path: Path to a TOML config file

    Returns:
        Dictionary with parsed TOML data

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in config file: {e}") from e


def load_config(path: Path) -> PagesearchConfig:
    """Load configuration from a TOML file over built-in defaults.

    Args:
        path: Path to a TOML config file

    Returns:
        Parsed PagesearchConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed or has invalid values
    """
    data = load_config_data(path)
    return PagesearchConfig.from_partial(PagesearchConfig.default(), data)


def config_to_data(config: PagesearchConfig) -> dict[str, Any]:
    """Convert a PagesearchConfig to TOML-ready section dictionaries."""
    return {
        "controller": {
            "debounce_ms": config.controller.debounce_ms,
            "cooldown_ms": config.controller.cooldown_ms,
            "batch_size": config.controller.batch_size,
        },
        "source": {
            "case_sensitive": config.source.case_sensitive,
            "encoding": config.source.encoding,
        },
    }


def dumps_config(config: PagesearchConfig) -> str:
    """Render a PagesearchConfig as a TOML string."""
    return tomli_w.dumps(config_to_data(config))


def save_config(config: PagesearchConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Args:
        config: PagesearchConfig to save
        path: Destination path
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("wb") as f:
        tomli_w.dump(config_to_data(config), f)


def create_default_config_file(path: Path) -> None:
    """Create a default config file with sensible defaults and comments.

    Args:
        path: Destination path for the config file
    """
    # Template string keeps the comments, which tomli_w cannot write
    template = """\
# pagesearch configuration
# Created by: pagesearch config init

[controller]
# Quiet period (ms) after the last query change before searching
debounce_ms = 500

# Minimum interval (ms) between accepted load-more requests
cooldown_ms = 1000

# Items per page; a shorter page means there is nothing more to load
batch_size = 20

[source]
# Match the query exactly instead of ignoring case
case_sensitive = false

# Encoding used to read source files
encoding = "utf-8"
"""

    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as f:
        f.write(template)
