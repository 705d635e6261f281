from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from CrossrefQuery.config.api import ApiConfig, check_api, load_api
from CrossrefQuery.config.query import load_query
from CrossrefQuery.config.runtime import RuntimeConfig, check_runtime, load_runtime
from CrossrefQuery.core.request import CrossrefRequest

DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    api: ApiConfig
    query: CrossrefRequest


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse normalized mapping into AppConfig."""
    runtime = load_runtime(raw)
    api = load_api(raw)
    query = load_query(raw)

    check_runtime(runtime)
    check_api(api)

    return AppConfig(runtime=runtime, api=api, query=query)


def load_config(path: Path, overrides: Mapping[str, Any] | None = None) -> AppConfig:
    """Load one YAML config file, optionally deep-merging overrides on top.

    Args:
        path: YAML config path. A missing file is treated as empty.
        overrides: Mapping merged over the file content (e.g. CLI options).

    Returns:
        Parsed configuration.
    """
    base = parse_yaml(path.read_text(encoding="utf-8")) if path.exists() else {}
    return parse_config_dict(merge_config_dicts(base, overrides or {}))


def load_config_with_defaults(
    config_path: Path,
    default_path: Path = DEFAULT_CONFIG_PATH,
    *,
    _defaults_text: str | None = None,
) -> AppConfig:
    """Load config by merging defaults and an override file."""
    if _defaults_text is not None:
        base = parse_yaml(_defaults_text)
    else:
        base = parse_yaml(default_path.read_text(encoding="utf-8"))
        if config_path == default_path:
            return parse_config_dict(base)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
