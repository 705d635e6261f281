from __future__ import annotations

"""Public configuration API for CrossrefQuery."""

from CrossrefQuery.config.api import ApiConfig
from CrossrefQuery.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from CrossrefQuery.config.query import load_query
from CrossrefQuery.config.runtime import RuntimeConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "RuntimeConfig",
    "ApiConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "load_query",
    "merge_config_dicts",
    "parse_config_dict",
]
