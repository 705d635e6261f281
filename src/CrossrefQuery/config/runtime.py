"""Runtime domain configuration (logging)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from CrossrefQuery.config.common import (
    expect_bool,
    expect_str,
    get_optional_value,
    get_section,
)

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Store validated logging settings."""

    level: str
    to_file: bool
    dir: str


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    """Load the `log` section.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed runtime configuration.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "log", required=False)
    return RuntimeConfig(
        level=expect_str(get_optional_value(section, "level", "INFO"), "log.level").upper(),
        to_file=expect_bool(get_optional_value(section, "to_file", False), "log.to_file"),
        dir=expect_str(get_optional_value(section, "dir", "log"), "log.dir"),
    )


def check_runtime(config: RuntimeConfig) -> None:
    """Validate runtime domain constraints.

    Raises:
        ValueError: If values violate runtime constraints.
    """
    if config.level not in _ALLOWED_LOG_LEVELS:
        raise ValueError(f"log.level must be one of {sorted(_ALLOWED_LOG_LEVELS)}")
    if not config.dir.strip():
        raise ValueError("log.dir must not be empty")
