"""API domain configuration (endpoint, contact, timeout)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from CrossrefQuery.config.common import (
    expect_float,
    expect_optional_str,
    expect_str,
    get_optional_value,
    get_section,
)
from CrossrefQuery.sources.crossref.client import CROSSREF_API_URL, DEFAULT_TIMEOUT

DEFAULT_MAILTO_ENV = "CROSSREF_MAILTO"


@dataclass(frozen=True, slots=True)
class ApiConfig:
    """Store validated API access settings."""

    base_url: str
    timeout: float
    mailto_env: str | None
    mailto: str | None


def load_api(raw: Mapping[str, Any]) -> ApiConfig:
    """Load the `api` section.

    The contact address is never stored in the YAML file; `api.mailto_env`
    names the environment variable (or `.env` entry) holding it.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "api", required=False)
    mailto_env = expect_optional_str(get_optional_value(section, "mailto_env", DEFAULT_MAILTO_ENV), "api.mailto_env")
    return ApiConfig(
        base_url=expect_str(get_optional_value(section, "base_url", CROSSREF_API_URL), "api.base_url").strip().rstrip("/"),
        timeout=expect_float(get_optional_value(section, "timeout", DEFAULT_TIMEOUT), "api.timeout"),
        mailto_env=mailto_env,
        mailto=_load_mailto_from_env(mailto_env),
    )


def check_api(config: ApiConfig) -> None:
    """Validate API domain constraints.

    Raises:
        ValueError: If values violate API constraints.
    """
    if not config.base_url.startswith(("http://", "https://")):
        raise ValueError("api.base_url must be an http(s) URL")
    if config.timeout <= 0:
        raise ValueError("api.timeout must be positive")


def _load_mailto_from_env(env_name: str | None) -> str | None:
    if not env_name:
        return None
    value = os.environ.get(env_name, "").strip()
    return value or None
