"""Closed enumerations of the Crossref REST API.

Each enum's value is its wire string, so rendering is `member.value` and
parsing is the inverse lookup. Parsing never coerces: an unknown string raises
a typed error that carries the input.
"""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from CrossrefQuery.core.errors import InvalidTypeNameError, UnknownComponentError, UnknownNameError

_E = TypeVar("_E", bound=Enum)


def parse_member(enum_cls: type[_E], text: str, error: type[UnknownNameError] | None = None, kind: str = "") -> _E:
    """Look up an enum member by its wire value.

    Args:
        enum_cls: Enum class whose values are wire strings.
        text: Raw input.
        error: Typed error taking the offending name; defaults to
            `UnknownNameError` with `kind`.
        kind: Enumeration name used by the default error.

    Returns:
        The matching member.

    Raises:
        UnknownNameError: If `text` matches no member.
    """
    try:
        return enum_cls(text)
    except ValueError:
        if error is not None:
            raise error(text) from None
        raise UnknownNameError(kind or enum_cls.__name__.lower(), text) from None


class Component(Enum):
    """Top-level resource kinds of the API."""

    WORKS = "works"
    FUNDERS = "funders"
    MEMBERS = "members"
    PREFIXES = "prefixes"
    TYPES = "types"
    JOURNALS = "journals"

    @classmethod
    def parse(cls, text: str) -> Component:
        return parse_member(cls, text, UnknownComponentError)


class Visibility(Enum):
    """Reference visibility of a member's deposits."""

    OPEN = "open"
    LIMITED = "limited"
    CLOSED = "closed"

    @classmethod
    def parse(cls, text: str) -> Visibility:
        return parse_member(cls, text, kind="visibility")


class WorkType(Enum):
    """Work types known to Crossref (`/types`)."""

    BOOK_SECTION = "book-section"
    MONOGRAPH = "monograph"
    REPORT = "report"
    PEER_REVIEW = "peer-review"
    BOOK_TRACK = "book-track"
    JOURNAL_ARTICLE = "journal-article"
    BOOK_PART = "book-part"
    OTHER = "other"
    BOOK = "book"
    JOURNAL_VOLUME = "journal-volume"
    BOOK_SET = "book-set"
    REFERENCE_ENTRY = "reference-entry"
    PROCEEDINGS_ARTICLE = "proceedings-article"
    JOURNAL = "journal"
    COMPONENT = "component"
    BOOK_CHAPTER = "book-chapter"
    PROCEEDINGS_SERIES = "proceedings-series"
    REPORT_SERIES = "report-series"
    PROCEEDINGS = "proceedings"
    STANDARD = "standard"
    REFERENCE_BOOK = "reference-book"
    POSTED_CONTENT = "posted-content"
    JOURNAL_ISSUE = "journal-issue"
    DISSERTATION = "dissertation"
    DATASET = "dataset"
    BOOK_SERIES = "book-series"
    EDITED_BOOK = "edited-book"
    STANDARD_SERIES = "standard-series"

    @property
    def label(self) -> str:
        """Display label, e.g. "Journal Article"."""
        return self.value.replace("-", " ").title()

    def as_dict(self) -> dict[str, str]:
        """Render in the shape of a `/types` item."""
        return {"id": self.value, "label": self.label}

    @classmethod
    def parse(cls, text: str) -> WorkType:
        return parse_member(cls, text, InvalidTypeNameError)

