"""Crossref payload parser.

Only the date fields of a work are normalized here; everything else is passed
through as plain values.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping, Optional

from dateutil import parser as dt_parser

from CrossrefQuery.core.dates import DateField, DateParts

WORK_DATE_KEYS: tuple[str, ...] = (
    "issued",
    "published",
    "published-print",
    "published-online",
    "created",
    "deposited",
    "indexed",
)


@dataclass(frozen=True, slots=True)
class DateInfo:
    """A Crossref date object.

    Attributes:
        date_parts: Raw `date-parts` value.
        timestamp: Milliseconds since the UNIX epoch, if present.
        date_time: Parsed `date-time`, if present and valid.
    """

    date_parts: DateParts
    timestamp: Optional[int] = None
    date_time: Optional[datetime] = None

    @classmethod
    def from_payload(cls, raw: Any) -> DateInfo | None:
        """Build from a decoded date object; None if `raw` is not a mapping."""
        if not isinstance(raw, Mapping):
            return None
        timestamp = raw.get("timestamp")
        if isinstance(timestamp, bool) or not isinstance(timestamp, int):
            timestamp = None
        return cls(
            date_parts=DateParts.from_payload(raw.get("date-parts")),
            timestamp=timestamp,
            date_time=_parse_iso_datetime(_safe_str(raw.get("date-time"))),
        )

    def as_date_field(self) -> DateField | None:
        return self.date_parts.as_date()


@dataclass(frozen=True, slots=True)
class WorkSummary:
    """Compact view of one work with normalized dates."""

    doi: str
    title: str
    type: str
    is_referenced_by_count: int
    reference_count: int
    dates: Mapping[str, DateField]

    def __post_init__(self) -> None:
        object.__setattr__(self, "dates", MappingProxyType(dict(self.dates)))

    @property
    def issued(self) -> DateField | None:
        return self.dates.get("issued")


@dataclass(frozen=True, slots=True)
class WorkPage:
    """One page of a work list response."""

    total_results: int
    items_per_page: Optional[int]
    next_cursor: Optional[str]
    items: tuple[WorkSummary, ...]


def parse_work(item: Mapping[str, Any]) -> WorkSummary:
    """Parse one work item."""
    return WorkSummary(
        doi=_safe_str(item.get("DOI")).lower(),
        title=_first_non_empty_text(item.get("title")),
        type=_safe_str(item.get("type")),
        is_referenced_by_count=_safe_int(item.get("is-referenced-by-count")),
        reference_count=_safe_int(item.get("reference-count")),
        dates=parse_work_dates(item),
    )


def parse_work_dates(item: Mapping[str, Any]) -> dict[str, DateField]:
    """Normalize every known date field of a work.

    Fields that are missing or do not decode are left out.
    """
    dates: dict[str, DateField] = {}
    for key in WORK_DATE_KEYS:
        info = DateInfo.from_payload(item.get(key))
        if info is None:
            continue
        value = info.as_date_field()
        if value is not None:
            dates[key] = value
    return dates


def parse_work_list(message: Mapping[str, Any]) -> WorkPage:
    """Parse the `message` of a `/works`-style list response."""
    raw_items = message.get("items")
    items = raw_items if isinstance(raw_items, list) else []
    per_page = message.get("items-per-page")
    return WorkPage(
        total_results=_safe_int(message.get("total-results")),
        items_per_page=per_page if isinstance(per_page, int) and not isinstance(per_page, bool) else None,
        next_cursor=_safe_str(message.get("next-cursor")) or None,
        items=tuple(parse_work(item) for item in items if isinstance(item, Mapping)),
    )


def _parse_iso_datetime(raw_value: str) -> datetime | None:
    """Parse ISO datetime text into timezone-aware datetime."""
    if not raw_value:
        return None
    try:
        parsed = dt_parser.isoparse(raw_value)
    except (TypeError, ValueError):
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _first_non_empty_text(value: Any) -> str:
    """Return first non-empty string from value/list value."""
    if isinstance(value, list):
        for item in value:
            text = _safe_str(item)
            if text:
                return text
        return ""
    return _safe_str(value)


def _safe_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value


def _safe_str(value: Any) -> str:
    """Convert scalar value to stripped string."""
    if isinstance(value, str):
        return value.strip()
    return ""
