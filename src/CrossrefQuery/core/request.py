"""Query composer.

Turns a resource selector plus typed parameters into a canonical URL::

    <base_path><route>[?<param>&<param>...]

Parameters always render in this order, whatever order the caller supplied
them in:

    query, query.<field>..., filter, facet, sort, order, <pagination>, cursor

Absent or empty parameters are left out, and with no parameters at all the
`?` is left out too.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from CrossrefQuery.core.errors import InvalidPaginationError
from CrossrefQuery.core.facets import FacetCount, facet_set
from CrossrefQuery.core.filters import Filter, filter_set
from CrossrefQuery.core.options import FieldQuery, Offset, Order, ResultControl, RowsOffset, Sample, Sort
from CrossrefQuery.core.params import KeyValue, format_queries, param
from CrossrefQuery.core.route import ResourceSelector, Single
from CrossrefQuery.core.types import Component


@dataclass(frozen=True, slots=True)
class CrossrefRequest:
    """A complete, immutable query against one resource.

    Attributes:
        resource: Route selector.
        topics: Free-text topics, rendered as one `query` parameter.
        field_queries: `query.<field>` parameters.
        filters: Filters, rendered in insertion order under `filter`.
        facets: Facet counts, rendered under `facet`.
        sort: Sort field.
        order: Sort direction.
        result_control: Pagination mode.
        cursor: Deep-paging cursor (`*` to start).
    """

    resource: ResourceSelector = field(default_factory=lambda: Single(Component.WORKS))
    topics: Sequence[str] = ()
    field_queries: Sequence[FieldQuery] = ()
    filters: Sequence[Filter] = ()
    facets: Sequence[FacetCount] = ()
    sort: Sort | None = None
    order: Order | None = None
    result_control: ResultControl | None = None
    cursor: str | None = None

    def __post_init__(self) -> None:
        # Freeze caller-provided sequences so the request stays immutable.
        for name in ("topics", "field_queries", "filters", "facets"):
            object.__setattr__(self, name, tuple(getattr(self, name)))
        if self.cursor is not None and isinstance(self.result_control, (Sample, Offset, RowsOffset)):
            raise InvalidPaginationError("cursor can only be combined with rows")

    def params(self) -> list[str]:
        """Render all present parameters in canonical order."""
        out: list[str] = []
        topics = format_queries(self.topics)
        if topics:
            out.append(param(KeyValue("query", topics)))
        out.extend(param(q) for q in self.field_queries)
        filters = filter_set(self.filters)
        if filters:
            out.append(param(filters))
        facets = facet_set(self.facets)
        if facets:
            out.append(param(facets))
        if self.sort is not None:
            out.append(param(self.sort))
        if self.order is not None:
            out.append(param(self.order))
        if self.result_control is not None:
            out.append(param(self.result_control))
        if self.cursor is not None:
            out.append(param(KeyValue("cursor", self.cursor)))
        return out

    def query_string(self) -> str:
        return "&".join(self.params())

    def route(self) -> str:
        """Resource path followed by `?<params>` when there are any."""
        path = self.resource.route()
        query = self.query_string()
        if not query:
            return path
        return f"{path}?{query}"

    def to_url(self, base_path: str) -> str:
        """Prefix the route with `base_path` (e.g. `https://api.crossref.org`)."""
        return f"{base_path}{self.route()}"
