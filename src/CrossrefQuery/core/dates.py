"""Crossref date-parts normalization.

Crossref encodes dates as a nested array of integers, e.g.::

    {"date-parts": [[2017, 10, 11]]}

Each inner array is one candidate date in (year[, month[, day]]) order. The
number of inner arrays decides what the value means:

- 0 arrays: no date
- 1 array:  a single date
- 2 arrays: a date range (from, to), stored as given
- 3+ arrays: a list of dates

An inner array decodes only if it has 1 to 3 components and none of them is
absent. For lists, one undecodable entry discards the whole value.
Undecodable input yields None; it is an expected outcome, not an error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Sequence, Union

_PARTIAL_DATE_RE = re.compile(r"^(\d{4})(?:-(\d{1,2})(?:-(\d{1,2}))?)?$")


@dataclass(frozen=True, slots=True)
class CalendarDate:
    """Calendar date with optional month and day.

    Attributes:
        year: Year, always present.
        month: Month 1-12, or None for a year-only date.
        day: Day of month, or None. Requires `month`.

    Raises:
        ValueError: If the components do not form a valid calendar date.
    """

    year: int
    month: Optional[int] = None
    day: Optional[int] = None

    def __post_init__(self) -> None:
        if self.day is not None and self.month is None:
            raise ValueError("day requires month")
        # Delegate range checks (month length, leap years) to datetime.date.
        try:
            date(self.year, self.month or 1, self.day or 1)
        except OverflowError as error:
            raise ValueError(f"date out of range: {self.year}-{self.month}-{self.day}") from error

    @property
    def precision(self) -> str:
        """One of "year", "month", "day"."""
        if self.day is not None:
            return "day"
        if self.month is not None:
            return "month"
        return "year"

    def to_date(self) -> date:
        """Return a `datetime.date`, filling missing components with 1."""
        return date(self.year, self.month or 1, self.day or 1)

    @classmethod
    def from_date(cls, value: date) -> CalendarDate:
        return cls(value.year, value.month, value.day)

    @classmethod
    def parse(cls, text: str) -> CalendarDate:
        """Parse `YYYY`, `YYYY-MM` or `YYYY-MM-DD`.

        Raises:
            ValueError: If the text is not one of those forms or is not a
                valid date.
        """
        match = _PARTIAL_DATE_RE.match(text.strip())
        if match is None:
            raise ValueError(f"not a date: {text!r}")
        year, month, day = match.groups()
        return cls(
            int(year),
            int(month) if month is not None else None,
            int(day) if day is not None else None,
        )

    def __str__(self) -> str:
        out = f"{self.year:04d}"
        if self.month is not None:
            out += f"-{self.month:02d}"
        if self.day is not None:
            out += f"-{self.day:02d}"
        return out


@dataclass(frozen=True, slots=True)
class SingleDate:
    """Exactly one date."""

    date: CalendarDate


@dataclass(frozen=True, slots=True)
class DateRange:
    """Two dates read as (from, to). Order is not checked."""

    start: CalendarDate
    end: CalendarDate


@dataclass(frozen=True, slots=True)
class MultiDate:
    """Three or more dates."""

    dates: tuple[CalendarDate, ...]


DateField = Union[SingleDate, DateRange, MultiDate]

DatePartsRow = tuple[Optional[int], ...]


@dataclass(frozen=True, slots=True)
class DateParts:
    """Raw `date-parts` value.

    Attributes:
        parts: Outer tuple of inner tuples of optional integers.
    """

    parts: tuple[DatePartsRow, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "parts", tuple(tuple(row) for row in self.parts))

    @classmethod
    def from_payload(cls, raw: Any) -> DateParts:
        """Build from a decoded JSON value.

        Anything that is not a list of lists becomes an empty value, and
        entries that are not plain integers become absent components, so
        malformed payloads end up as "no date" rather than raising.
        """
        if not isinstance(raw, list):
            return cls(())
        rows: list[DatePartsRow] = []
        for row in raw:
            if not isinstance(row, list):
                rows.append(())
                continue
            rows.append(tuple(_as_component(part) for part in row))
        return cls(tuple(rows))

    def as_date(self) -> DateField | None:
        """Normalize into a `DateField`, or None when there is no usable date."""
        count = len(self.parts)
        if count == 0:
            return None
        if count == 1:
            single = _decode_row(self.parts[0])
            return SingleDate(single) if single is not None else None
        if count == 2:
            start = _decode_row(self.parts[0])
            end = _decode_row(self.parts[1])
            if start is None or end is None:
                return None
            return DateRange(start, end)

        dates: list[CalendarDate] = []
        for row in self.parts:
            decoded = _decode_row(row)
            if decoded is None:
                return None
            dates.append(decoded)
        return MultiDate(tuple(dates))


def normalize_date_parts(raw: Any) -> DateField | None:
    """Normalize a decoded `date-parts` JSON value in one step."""
    return DateParts.from_payload(raw).as_date()


def format_date_field(value: DateField | None) -> str:
    """Render a normalized value for display.

    Returns:
        `none`, `single 2017-10-11`, `range 2020..2021` or
        `multi 2019, 2020, 2021`.
    """
    if value is None:
        return "none"
    if isinstance(value, SingleDate):
        return f"single {value.date}"
    if isinstance(value, DateRange):
        return f"range {value.start}..{value.end}"
    return "multi " + ", ".join(str(d) for d in value.dates)


def _decode_row(row: Sequence[Optional[int]]) -> CalendarDate | None:
    """Decode one inner array into a date, or None."""
    if not 1 <= len(row) <= 3:
        return None
    if any(part is None for part in row):
        return None
    try:
        return CalendarDate(*row)
    except (ValueError, OverflowError):
        return None


def _as_component(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value
