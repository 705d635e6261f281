"""Error types raised while building Crossref queries.

Rendering is total over well-typed input. Only parsing free-form strings into
closed enumerations (and validating flag-style pagination input) can fail, and
it does so with one of the typed errors below.
"""

from __future__ import annotations


class CrossrefQueryError(ValueError):
    """Base class for query construction errors."""


class UnknownNameError(CrossrefQueryError):
    """A string does not name any member of a closed enumeration.

    Attributes:
        kind: Human readable name of the enumeration (e.g. "component").
        name: The offending input string.
    """

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"unknown {kind}: {name!r}")
        self.kind = kind
        self.name = name


class UnknownComponentError(UnknownNameError):
    """Unknown resource kind."""

    def __init__(self, name: str) -> None:
        super().__init__("component", name)


class InvalidTypeNameError(UnknownNameError):
    """Unknown work type identifier."""

    def __init__(self, name: str) -> None:
        super().__init__("work type", name)


class UnknownFilterError(UnknownNameError):
    """Filter key not supported by the addressed route."""

    def __init__(self, name: str) -> None:
        super().__init__("filter", name)


class InvalidFilterValueError(CrossrefQueryError):
    """A filter value does not fit the shape its key requires.

    Attributes:
        key: Filter key.
        value: Raw value text, or None when the value was missing.
    """

    def __init__(self, key: str, value: str | None, reason: str = "") -> None:
        message = f"invalid value for filter {key!r}: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.key = key
        self.value = value


class InvalidPaginationError(CrossrefQueryError):
    """Pagination inputs are negative or combine mutually exclusive modes."""
