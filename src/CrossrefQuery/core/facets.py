"""Facet counts (`facet=type-name:*,published:10`)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from CrossrefQuery.core.errors import CrossrefQueryError
from CrossrefQuery.core.params import FragmentSet
from CrossrefQuery.core.types import parse_member

FACET_PARAM = "facet"


class Facet(Enum):
    AFFILIATION = "affiliation"
    PUBLISHED = "published"
    FUNDER_NAME = "funder-name"
    FUNDER_DOI = "funder-doi"
    SOURCE = "source"
    ISSN = "issn"
    ORCID = "orcid"
    CONTAINER_TITLE = "container-title"
    LICENSE = "license"
    TYPE_NAME = "type-name"
    PUBLISHER_NAME = "publisher-name"
    RELATION_TYPE = "relation-type"
    ASSERTION = "assertion"
    ASSERTION_GROUP = "assertion-group"
    ARCHIVE = "archive"
    UPDATE_TYPE = "update-type"
    LINK_APPLICATION = "link-application"
    CATEGORY_NAME = "category-name"
    JOURNAL_ISSUE = "journal-issue"
    JOURNAL_VOLUME = "journal-volume"

    @classmethod
    def parse(cls, text: str) -> Facet:
        return parse_member(cls, text, kind="facet")


@dataclass(frozen=True, slots=True)
class FacetCount:
    """One facet and the maximum number of values to return.

    A count of None asks for all values (`*`).
    """

    facet: Facet
    count: int | None = None

    def __post_init__(self) -> None:
        if self.count is not None and (isinstance(self.count, bool) or not isinstance(self.count, int) or self.count < 1):
            raise CrossrefQueryError(f"facet count must be a positive integer, got {self.count!r}")

    def key(self) -> str:
        return self.facet.value

    def value(self) -> str | None:
        return "*" if self.count is None else str(self.count)


def parse_facet(text: str) -> FacetCount:
    """Parse `name`, `name:*` or `name:<count>`."""
    name, sep, raw = text.strip().partition(":")
    facet = Facet.parse(name.strip())
    raw = raw.strip()
    if not sep or raw in ("", "*"):
        return FacetCount(facet)
    if not (raw.isascii() and raw.isdigit()):
        raise CrossrefQueryError(f"facet count must be a positive integer or '*': {raw!r}")
    return FacetCount(facet, int(raw))


def facet_set(facets: Sequence[FacetCount]) -> FragmentSet:
    return FragmentSet(FACET_PARAM, facets)
