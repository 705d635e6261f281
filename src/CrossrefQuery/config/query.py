"""Query domain configuration.

Parses the `query` section into a `CrossrefRequest`::

    query:
      resource: funders
      identifier: 10.13039/100000001
      topics: ["machine learning"]
      fields: {author: "Ray"}
      filters: ["from-pub-date:2020", "type:journal-article"]
      facets: ["type-name:*"]
      sort: published
      order: desc
      rows: 20
      offset: null
      sample: false
      cursor: null

Structural problems raise `TypeError`; unknown names and invalid values raise
the typed errors from `CrossrefQuery.core.errors`.
"""

from __future__ import annotations

from typing import Any, Mapping

from CrossrefQuery.config.common import (
    expect_bool,
    expect_optional_int,
    expect_optional_str,
    expect_str,
    expect_str_list,
    expect_str_mapping,
    get_optional_value,
    get_section,
)
from CrossrefQuery.core.facets import parse_facet
from CrossrefQuery.core.filters import filters_for, parse_filter
from CrossrefQuery.core.options import FieldQuery, Order, QueryField, Sort, result_control_from
from CrossrefQuery.core.request import CrossrefRequest
from CrossrefQuery.core.route import routed_component, selector_for

_KNOWN_KEYS = frozenset(
    {
        "resource",
        "identifier",
        "topics",
        "fields",
        "filters",
        "facets",
        "sort",
        "order",
        "rows",
        "offset",
        "sample",
        "cursor",
    }
)


def load_query(raw: Mapping[str, Any]) -> CrossrefRequest:
    """Load the `query` section into a request.

    Args:
        raw: Root configuration mapping.

    Returns:
        Composed request. A missing section yields a plain `/works` request.

    Raises:
        TypeError: If config types are invalid.
        ValueError: On unknown keys.
        CrossrefQueryError: On unknown names, bad filter values or an
            invalid pagination combination.
    """
    section = get_section(raw, "query", required=False)
    unknown = {str(k) for k in section.keys()} - _KNOWN_KEYS
    if unknown:
        raise ValueError(f"query has unknown keys: {sorted(unknown)}")

    resource = selector_for(
        expect_str(get_optional_value(section, "resource", "works"), "query.resource"),
        expect_optional_str(section.get("identifier"), "query.identifier"),
    )
    registry = filters_for(routed_component(resource))

    fields = expect_str_mapping(section.get("fields"), "query.fields")
    sort = expect_optional_str(section.get("sort"), "query.sort")
    order = expect_optional_str(section.get("order"), "query.order")

    return CrossrefRequest(
        resource=resource,
        topics=tuple(t for t in expect_str_list(section.get("topics"), "query.topics") if t.strip()),
        field_queries=tuple(FieldQuery(QueryField.parse(name.strip()), text) for name, text in fields.items()),
        filters=tuple(
            parse_filter(text, registry)
            for text in expect_str_list(section.get("filters"), "query.filters")
            if text.strip()
        ),
        facets=tuple(
            parse_facet(text) for text in expect_str_list(section.get("facets"), "query.facets") if text.strip()
        ),
        sort=Sort.parse(sort) if sort else None,
        order=Order.parse(order) if order else None,
        result_control=result_control_from(
            rows=expect_optional_int(section.get("rows"), "query.rows"),
            offset=expect_optional_int(section.get("offset"), "query.offset"),
            sample=expect_bool(get_optional_value(section, "sample", False), "query.sample"),
        ),
        cursor=expect_optional_str(section.get("cursor"), "query.cursor"),
    )
