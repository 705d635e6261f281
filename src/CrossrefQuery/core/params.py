"""Parameter fragments and query parameters.

Two small capabilities are shared by everything that ends up in a Crossref
query string:

- `ParamFragment`: one element inside an aggregate parameter, rendered as
  `key` or `key:value` (filters, facets).
- `QueryParam`: one top-level parameter, rendered as `key` or `key=value`
  (sort, order, pagination, the aggregates themselves).

Callers are responsible for passing characters the API accepts; nothing here
escapes its input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence

FRAGMENT_SEP = ":"
PARAM_SEP = "="


class ParamFragment(Protocol):
    """Anything that renders to a `key[:value]` fragment."""

    def key(self) -> str:
        ...

    def value(self) -> str | None:
        ...


class QueryParam(Protocol):
    """Anything that renders to a `key[=value]` query parameter."""

    def param_key(self) -> str:
        ...

    def param_value(self) -> str | None:
        ...


def render_pair(key: str, value: str | None, *, sep: str) -> str:
    """Render a key with an optional value.

    Args:
        key: Parameter key.
        value: Parameter value, or None for a bare key.
        sep: Separator placed between key and value.

    Returns:
        `key` when value is None, else `key<sep>value`.
    """
    if value is None:
        return key
    return f"{key}{sep}{value}"


def fragment(item: ParamFragment) -> str:
    """Render a filter/facet fragment (`key` or `key:value`)."""
    return render_pair(item.key(), item.value(), sep=FRAGMENT_SEP)


def param(item: QueryParam) -> str:
    """Render a top-level parameter (`key` or `key=value`)."""
    return render_pair(item.param_key(), item.param_value(), sep=PARAM_SEP)


@dataclass(frozen=True, slots=True)
class KeyValue:
    """Literal `key=value` parameter."""

    name: str
    text: str

    def param_key(self) -> str:
        return self.name

    def param_value(self) -> str | None:
        return self.text


@dataclass(frozen=True, slots=True)
class FragmentSet:
    """Aggregate parameter joining fragments with `,` under one key.

    Fragments keep insertion order. An empty set is falsy so the composer can
    leave the parameter out instead of emitting `key=`.
    """

    name: str
    items: Sequence[ParamFragment] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __bool__(self) -> bool:
        return bool(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def param_key(self) -> str:
        return self.name

    def param_value(self) -> str | None:
        return ",".join(fragment(item) for item in self.items)


def format_query(topic: str) -> str:
    """Collapse whitespace runs in a free-text topic into `+`."""
    return "+".join(topic.split())


def format_queries(topics: Iterable[str]) -> str:
    """Format each topic and join the results with `+`.

    Topics that are blank after folding are dropped.
    """
    return "+".join(formatted for formatted in (format_query(t) for t in topics) if formatted)
