"""Config domain models for pagesearch.

Configuration is stored in pagesearch.toml and represents user preferences
for controller timing, paging, and the file-backed source. This module defines
the domain models that represent validated configuration state.
"""

from dataclasses import dataclass, field, fields
from typing import Any


@dataclass(frozen=True)
class ControllerConfig:
    """Configuration for the paginated search controller.

    Attributes:
        debounce_ms: Quiet period after the last query change before a search
                     is issued (default: 500).
        cooldown_ms: Minimum interval between accepted load-more requests
                     (default: 1000).
        batch_size: Items expected per page. A shorter page means the end of
                    the data was reached.

    Raises:
        ValueError: If batch_size is not positive, or a timing is negative.
    """

    debounce_ms: int = 500
    cooldown_ms: int = 1000
    batch_size: int = 20

    def __post_init__(self) -> None:
        """Validate controller config after initialization."""
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")
        if self.debounce_ms < 0:
            raise ValueError(
                f"debounce_ms cannot be negative, got {self.debounce_ms}"
            )
        if self.cooldown_ms < 0:
            raise ValueError(
                f"cooldown_ms cannot be negative, got {self.cooldown_ms}"
            )

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0

    @property
    def cooldown_seconds(self) -> float:
        return self.cooldown_ms / 1000.0


@dataclass(frozen=True)
class SourceConfig:
    """Configuration for the file-backed line source.

    Attributes:
        case_sensitive: Match the query without case folding.
        encoding: Text encoding used to read source files.

    Raises:
        ValueError: If encoding is empty.
    """

    case_sensitive: bool = False
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        """Validate source config after initialization."""
        if not self.encoding:
            raise ValueError("encoding cannot be empty")


@dataclass(frozen=True)
class PagesearchConfig:
    """Complete pagesearch configuration.

    Typically loaded from pagesearch.toml (local) layered over the global
    config file and built-in defaults.

    Attributes:
        controller: Controller timing and paging configuration
        source: Line source configuration
    """

    controller: ControllerConfig = field(default_factory=ControllerConfig)
    source: SourceConfig = field(default_factory=SourceConfig)

    @staticmethod
    def default() -> "PagesearchConfig":
        """Create a config with all default values."""
        return PagesearchConfig(
            controller=ControllerConfig(),
            source=SourceConfig(),
        )

    @staticmethod
    def from_partial(
        base: "PagesearchConfig", data: dict[str, Any]
    ) -> "PagesearchConfig":
        """Overlay raw config data on top of an existing config.

        Keys missing from ``data`` keep their value from ``base``. Each
        section is rebuilt through its dataclass so validation runs on the
        merged values.

        Args:
            base: Config supplying values for keys not present in data.
            data: Raw section dictionaries, e.g. parsed from TOML.

        Returns:
            New merged PagesearchConfig.

        Raises:
            ValueError: If data has unknown sections or keys, or merged
                values fail validation.
        """
        sections = {f.name for f in fields(PagesearchConfig)}
        unknown_sections = set(data) - sections
        if unknown_sections:
            raise ValueError(
                f"Unknown config section(s): {', '.join(sorted(unknown_sections))}"
            )

        merged: dict[str, Any] = {}
        for name in sections:
            current = getattr(base, name)
            overrides = data.get(name, {})
            if not isinstance(overrides, dict):
                raise ValueError(f"Config section [{name}] must be a table")

            allowed = {f.name for f in fields(current)}
            unknown_keys = set(overrides) - allowed
            if unknown_keys:
                raise ValueError(
                    f"Unknown key(s) in [{name}]: {', '.join(sorted(unknown_keys))}"
                )

            values = {key: getattr(current, key) for key in allowed}
            values.update(overrides)
            merged[name] = type(current)(**values)

        return PagesearchConfig(**merged)
