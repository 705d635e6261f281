"""Sort, order, pagination and field-query parameters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from CrossrefQuery.core.errors import InvalidPaginationError
from CrossrefQuery.core.params import format_query
from CrossrefQuery.core.types import parse_member


class Sort(Enum):
    """Sort fields for list responses."""

    SCORE = "score"
    UPDATED = "updated"
    DEPOSITED = "deposited"
    INDEXED = "indexed"
    PUBLISHED = "published"
    PUBLISHED_PRINT = "published-print"
    PUBLISHED_ONLINE = "published-online"
    ISSUED = "issued"
    # Documented API value; older clients sent "is-reference-by-count".
    IS_REFERENCED_BY_COUNT = "is-referenced-by-count"
    REFERENCE_COUNT = "reference-count"

    def param_key(self) -> str:
        return "sort"

    def param_value(self) -> str | None:
        return self.value

    @classmethod
    def parse(cls, text: str) -> Sort:
        return parse_member(cls, text, kind="sort field")


class Order(Enum):
    """Sort direction, independent of the sort field."""

    ASC = "asc"
    DESC = "desc"

    def param_key(self) -> str:
        return "order"

    def param_value(self) -> str | None:
        return self.value

    @classmethod
    def parse(cls, text: str) -> Order:
        return parse_member(cls, text, kind="order")


def _check_count(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidPaginationError(f"{name} must be a non-negative integer, got {value!r}")


@dataclass(frozen=True, slots=True)
class Rows:
    """Limit the number of returned items: `rows=<n>`."""

    rows: int

    def __post_init__(self) -> None:
        _check_count("rows", self.rows)

    def param_key(self) -> str:
        return "rows"

    def param_value(self) -> str | None:
        return str(self.rows)


@dataclass(frozen=True, slots=True)
class Offset:
    """Skip items: `offset=<n>`."""

    offset: int

    def __post_init__(self) -> None:
        _check_count("offset", self.offset)

    def param_key(self) -> str:
        return "offset"

    def param_value(self) -> str | None:
        return str(self.offset)


@dataclass(frozen=True, slots=True)
class RowsOffset:
    """Rows and offset in one parameter.

    The key is `rows=<rows>` and the value `offset=<offset>`, which renders as
    `rows=<rows>=offset=<offset>`. This shape is kept verbatim for wire
    compatibility; it is not two separate parameters.
    """

    rows: int
    offset: int

    def __post_init__(self) -> None:
        _check_count("rows", self.rows)
        _check_count("offset", self.offset)

    def param_key(self) -> str:
        return f"rows={self.rows}"

    def param_value(self) -> str | None:
        return f"offset={self.offset}"


@dataclass(frozen=True, slots=True)
class Sample:
    """Random sample of items. Renders as a bare `sample` key."""

    def param_key(self) -> str:
        return "sample"

    def param_value(self) -> str | None:
        return None


ResultControl = Union[Rows, Offset, RowsOffset, Sample]


def result_control_from(
    *,
    rows: int | None = None,
    offset: int | None = None,
    sample: bool = False,
) -> ResultControl | None:
    """Build a pagination mode from independent inputs.

    Args:
        rows: Row limit.
        offset: Result offset.
        sample: Whether to request a random sample.

    Returns:
        The matching pagination mode, or None if nothing was requested.

    Raises:
        InvalidPaginationError: If `sample` is combined with rows or offset,
            or a count is negative.
    """
    if sample:
        if rows is not None or offset is not None:
            raise InvalidPaginationError("sample cannot be combined with rows or offset")
        return Sample()
    if rows is not None and offset is not None:
        return RowsOffset(rows=rows, offset=offset)
    if rows is not None:
        return Rows(rows)
    if offset is not None:
        return Offset(offset)
    return None


class QueryField(Enum):
    """Fields that accept a free-text `query.<field>` parameter."""

    AFFILIATION = "affiliation"
    AUTHOR = "author"
    BIBLIOGRAPHIC = "bibliographic"
    CHAIR = "chair"
    CONTAINER_TITLE = "container-title"
    CONTRIBUTOR = "contributor"
    DEGREE = "degree"
    DESCRIPTION = "description"
    EDITOR = "editor"
    EVENT_ACRONYM = "event-acronym"
    EVENT_LOCATION = "event-location"
    EVENT_NAME = "event-name"
    EVENT_SPONSOR = "event-sponsor"
    EVENT_THEME = "event-theme"
    FUNDER_NAME = "funder-name"
    PUBLISHER_LOCATION = "publisher-location"
    PUBLISHER_NAME = "publisher-name"
    STANDARDS_BODY_ACRONYM = "standards-body-acronym"
    STANDARDS_BODY_NAME = "standards-body-name"
    TRANSLATOR = "translator"

    @classmethod
    def parse(cls, text: str) -> QueryField:
        return parse_member(cls, text, kind="query field")


@dataclass(frozen=True, slots=True)
class FieldQuery:
    """`query.<field>=<terms>` with whitespace folded to `+`."""

    field: QueryField
    text: str

    def param_key(self) -> str:
        return f"query.{self.field.value}"

    def param_value(self) -> str | None:
        return format_query(self.text)
