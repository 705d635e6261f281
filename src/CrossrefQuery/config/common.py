from __future__ import annotations

"""Shared helpers for configuration loading and validation."""

from typing import Any, Mapping


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return a mapping section from root config.

    Args:
        raw: Root configuration mapping.
        key: Section name.
        required: Whether the section must exist.

    Returns:
        Section mapping, or empty mapping for optional missing sections.

    Raises:
        ValueError: If section is required but missing.
        TypeError: If section is not a mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise ValueError(f"Missing required config: {key}")
        return {}
    if not isinstance(section, Mapping):
        raise TypeError(f"{key} must be an object")
    return section


def get_optional_value(section: Mapping[str, Any], field: str, default: Any) -> Any:
    """Return optional field value, using default for missing or null."""
    value = section.get(field)
    return default if value is None else value


def expect_str(value: Any, config_key: str) -> str:
    """Validate and return string value."""
    if not isinstance(value, str):
        raise TypeError(f"{config_key} must be a string")
    return value


def expect_optional_str(value: Any, config_key: str) -> str | None:
    """Validate a string or null; blank strings become None."""
    if value is None:
        return None
    text = expect_str(value, config_key).strip()
    return text or None


def expect_bool(value: Any, config_key: str) -> bool:
    """Validate and return boolean value."""
    if not isinstance(value, bool):
        raise TypeError(f"{config_key} must be a boolean")
    return value


def expect_optional_int(value: Any, config_key: str) -> int | None:
    """Validate an integer (excluding bool) or null."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{config_key} must be an integer")
    return value


def expect_float(value: Any, config_key: str) -> float:
    """Validate and return float value from numeric input."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{config_key} must be a number")
    return float(value)


def expect_str_list(value: Any, config_key: str) -> list[str]:
    """Validate a list of strings; a single string becomes a one-item list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise TypeError(f"{config_key} must be a list")
    out: list[str] = []
    for idx, item in enumerate(value):
        if not isinstance(item, str):
            raise TypeError(f"{config_key}[{idx}] must be a string")
        out.append(item)
    return out


def expect_str_mapping(value: Any, config_key: str) -> dict[str, str]:
    """Validate a mapping of string keys to string values."""
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"{config_key} must be an object")
    out: dict[str, str] = {}
    for key, item in value.items():
        if not isinstance(key, str):
            raise TypeError(f"{config_key} keys must be strings")
        out[key] = expect_str(item, f"{config_key}.{key}")
    return out
