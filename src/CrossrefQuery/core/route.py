"""Resource routing.

A selector is built once in its final form and rendered by a pure function:

- `Single(kind)`             -> `/<kind>`
- `Combined(kind, id)`       -> `/<kind>/<id>/works`

Identifiers are inserted as given. Callers must pre-sanitize identifiers that
contain reserved URL characters; DOI slashes are expected and kept.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from CrossrefQuery.core.types import Component


@dataclass(frozen=True, slots=True)
class Single:
    component: Component

    def route(self) -> str:
        return f"/{self.component.value}"


@dataclass(frozen=True, slots=True)
class Combined:
    """Works of one parent resource, e.g. `/funders/<id>/works`."""

    primary: Component
    identifier: str

    def route(self) -> str:
        return f"{Single(self.primary).route()}/{self.identifier}{Single(Component.WORKS).route()}"


ResourceSelector = Union[Single, Combined]


def selector_for(resource: str | Component, identifier: str | None = None) -> ResourceSelector:
    """Build a selector from a resource name and optional identifier.

    Raises:
        UnknownComponentError: If `resource` is not a known resource kind.
    """
    component = resource if isinstance(resource, Component) else Component.parse(resource.strip())
    if identifier is None or not identifier.strip():
        return Single(component)
    return Combined(component, identifier.strip())


def routed_component(selector: ResourceSelector) -> Component:
    """Return the component whose items the selector lists."""
    if isinstance(selector, Combined):
        return Component.WORKS
    return selector.component
