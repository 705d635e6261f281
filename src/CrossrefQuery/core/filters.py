"""Typed Crossref filters.

Every filter is a small frozen dataclass whose class carries the wire key
(`KEY`) and whose instance carries at most one value. Filters implement the
`ParamFragment` capability, so a sequence of them renders as::

    filter=has-funder:true,from-pub-date:2020-01,type:journal-article

in insertion order.

Value shapes:

- flag filters (`has-*`, `is-update`) carry a boolean, rendered `true`/`false`
- text filters carry an opaque string, rendered verbatim
- date filters carry a `CalendarDate` or `datetime.date`, rendered
  `YYYY-MM-DD`, `YYYY-MM` or `YYYY`
- count filters carry a non-negative integer
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Mapping, Sequence, Union

from CrossrefQuery.core.dates import CalendarDate
from CrossrefQuery.core.errors import (
    CrossrefQueryError,
    InvalidFilterValueError,
    UnknownFilterError,
)
from CrossrefQuery.core.params import FragmentSet, ParamFragment
from CrossrefQuery.core.types import Component, Visibility, WorkType

FILTER_PARAM = "filter"


@dataclass(frozen=True, slots=True)
class FlagFilter:
    enabled: bool = True

    KEY: ClassVar[str] = ""

    def key(self) -> str:
        return self.KEY

    def value(self) -> str | None:
        return "true" if self.enabled else "false"

    @classmethod
    def from_text(cls, raw: str | None) -> FlagFilter:
        # A bare key means "true".
        if raw is None or raw == "true":
            return cls(True)
        if raw == "false":
            return cls(False)
        raise InvalidFilterValueError(cls.KEY, raw, "expected true or false")


@dataclass(frozen=True, slots=True)
class TextFilter:
    text: str

    KEY: ClassVar[str] = ""

    def key(self) -> str:
        return self.KEY

    def value(self) -> str | None:
        return self.text

    @classmethod
    def from_text(cls, raw: str | None) -> TextFilter:
        if raw is None or not raw.strip():
            raise InvalidFilterValueError(cls.KEY, raw, "value required")
        return cls(raw.strip())


@dataclass(frozen=True, slots=True)
class DateFilter:
    when: CalendarDate | date

    KEY: ClassVar[str] = ""

    def key(self) -> str:
        return self.KEY

    def value(self) -> str | None:
        if isinstance(self.when, CalendarDate):
            return str(self.when)
        return str(CalendarDate.from_date(self.when))

    @classmethod
    def from_text(cls, raw: str | None) -> DateFilter:
        if raw is None:
            raise InvalidFilterValueError(cls.KEY, raw, "date required")
        try:
            return cls(CalendarDate.parse(raw))
        except ValueError as error:
            raise InvalidFilterValueError(cls.KEY, raw, str(error)) from error


@dataclass(frozen=True, slots=True)
class CountFilter:
    count: int

    KEY: ClassVar[str] = ""

    def __post_init__(self) -> None:
        if isinstance(self.count, bool) or not isinstance(self.count, int) or self.count < 0:
            raise InvalidFilterValueError(self.KEY, repr(self.count), "expected a non-negative integer")

    def key(self) -> str:
        return self.KEY

    def value(self) -> str | None:
        return str(self.count)

    @classmethod
    def from_text(cls, raw: str | None) -> CountFilter:
        if raw is None or not (raw.strip().isascii() and raw.strip().isdigit()):
            raise InvalidFilterValueError(cls.KEY, raw, "expected a non-negative integer")
        return cls(int(raw.strip()))


@dataclass(frozen=True, slots=True)
class Type:
    """Works of one work type."""

    work_type: WorkType

    KEY: ClassVar[str] = "type"

    def key(self) -> str:
        return self.KEY

    def value(self) -> str | None:
        return self.work_type.value

    @classmethod
    def from_text(cls, raw: str | None) -> Type:
        if raw is None:
            raise InvalidFilterValueError(cls.KEY, raw, "work type required")
        return cls(WorkType.parse(raw))


@dataclass(frozen=True, slots=True)
class ReferenceVisibility:
    """Works (or members) whose references have the given visibility."""

    visibility: Visibility

    KEY: ClassVar[str] = "reference-visibility"

    def key(self) -> str:
        return self.KEY

    def value(self) -> str | None:
        return self.visibility.value

    @classmethod
    def from_text(cls, raw: str | None) -> ReferenceVisibility:
        if raw is None:
            raise InvalidFilterValueError(cls.KEY, raw, "visibility required")
        try:
            return cls(Visibility.parse(raw))
        except CrossrefQueryError as error:
            raise InvalidFilterValueError(cls.KEY, raw, "expected open, limited or closed") from error


# --- /works filters -------------------------------------------------------


class HasFunder(FlagFilter):
    """Works with at least one funder."""

    KEY = "has-funder"


class Funder(TextFilter):
    """Works funded by the funder with this Open Funder Registry id."""

    KEY = "funder"


class Prefix(TextFilter):
    """Works whose DOI has this owner prefix, e.g. `10.1016`."""

    KEY = "prefix"


class Member(TextFilter):
    """Works deposited by this member id."""

    KEY = "member"


class FromIndexDate(DateFilter):
    KEY = "from-index-date"


class UntilIndexDate(DateFilter):
    KEY = "until-index-date"


class FromDepositDate(DateFilter):
    KEY = "from-deposit-date"


class UntilDepositDate(DateFilter):
    KEY = "until-deposit-date"


class FromUpdateDate(DateFilter):
    KEY = "from-update-date"


class UntilUpdateDate(DateFilter):
    KEY = "until-update-date"


class FromCreatedDate(DateFilter):
    KEY = "from-created-date"


class UntilCreatedDate(DateFilter):
    KEY = "until-created-date"


class FromPubDate(DateFilter):
    """Works published on or after this date (print or online)."""

    KEY = "from-pub-date"


class UntilPubDate(DateFilter):
    """Works published on or before this date (print or online)."""

    KEY = "until-pub-date"


class FromOnlinePubDate(DateFilter):
    KEY = "from-online-pub-date"


class UntilOnlinePubDate(DateFilter):
    KEY = "until-online-pub-date"


class FromPrintPubDate(DateFilter):
    KEY = "from-print-pub-date"


class UntilPrintPubDate(DateFilter):
    KEY = "until-print-pub-date"


class FromPostedDate(DateFilter):
    KEY = "from-posted-date"


class UntilPostedDate(DateFilter):
    KEY = "until-posted-date"


class FromAcceptedDate(DateFilter):
    KEY = "from-accepted-date"


class UntilAcceptedDate(DateFilter):
    KEY = "until-accepted-date"


class HasLicense(FlagFilter):
    KEY = "has-license"


class LicenseUrl(TextFilter):
    KEY = "license.url"


class LicenseVersion(TextFilter):
    """One of `vor`, `am`, `tdm` or `unspecified`."""

    KEY = "license.version"


class LicenseDelay(CountFilter):
    """Works whose license starts this many days after publication."""

    KEY = "license.delay"


class HasFullText(FlagFilter):
    KEY = "has-full-text"


class FullTextVersion(TextFilter):
    KEY = "full-text.version"


class FullTextType(TextFilter):
    """Full-text MIME type, e.g. `application/pdf`."""

    KEY = "full-text.type"


class FullTextApplication(TextFilter):
    KEY = "full-text.application"


class HasReferences(FlagFilter):
    KEY = "has-references"


class HasArchive(FlagFilter):
    KEY = "has-archive"


class Archive(TextFilter):
    """Archive name, e.g. `Portico` or `CLOCKSS`."""

    KEY = "archive"


class HasOrcid(FlagFilter):
    KEY = "has-orcid"


class HasAuthenticatedOrcid(FlagFilter):
    KEY = "has-authenticated-orcid"


class Orcid(TextFilter):
    KEY = "orcid"


class Issn(TextFilter):
    KEY = "issn"


class Isbn(TextFilter):
    KEY = "isbn"


class Directory(TextFilter):
    KEY = "directory"


class Doi(TextFilter):
    KEY = "doi"


class Updates(TextFilter):
    """Works that are updates to the work with this DOI."""

    KEY = "updates"


class IsUpdate(FlagFilter):
    KEY = "is-update"


class HasUpdatePolicy(FlagFilter):
    KEY = "has-update-policy"


class ContainerTitle(TextFilter):
    KEY = "container-title"


class CategoryName(TextFilter):
    KEY = "category-name"


class TypeName(TextFilter):
    KEY = "type-name"


class AwardNumber(TextFilter):
    KEY = "award.number"


class AwardFunder(TextFilter):
    KEY = "award.funder"


class HasAssertion(FlagFilter):
    KEY = "has-assertion"


class AssertionGroup(TextFilter):
    KEY = "assertion-group"


class Assertion(TextFilter):
    KEY = "assertion"


class HasAffiliation(FlagFilter):
    KEY = "has-affiliation"


class AlternativeId(TextFilter):
    KEY = "alternative-id"


class ArticleNumber(TextFilter):
    KEY = "article-number"


class HasAbstract(FlagFilter):
    KEY = "has-abstract"


class HasClinicalTrialNumber(FlagFilter):
    KEY = "has-clinical-trial-number"


class ContentDomain(TextFilter):
    KEY = "content-domain"


class HasContentDomain(FlagFilter):
    KEY = "has-content-domain"


class HasDomainRestriction(FlagFilter):
    KEY = "has-domain-restriction"


class HasRelation(FlagFilter):
    KEY = "has-relation"


class RelationType(TextFilter):
    KEY = "relation.type"


class RelationObject(TextFilter):
    KEY = "relation.object"


class RelationObjectType(TextFilter):
    KEY = "relation.object-type"


# --- /funders filters -----------------------------------------------------


class Location(TextFilter):
    """Funders located in this country."""

    KEY = "location"


# --- /members filters -----------------------------------------------------


class HasPublicReferences(FlagFilter):
    KEY = "has-public-references"


class BackfileDoiCount(CountFilter):
    KEY = "backfile-doi-count"


class CurrentDoiCount(CountFilter):
    KEY = "current-doi-count"


Filter = Union[FlagFilter, TextFilter, DateFilter, CountFilter, Type, ReferenceVisibility]

FilterClass = Union[
    type[FlagFilter], type[TextFilter], type[DateFilter], type[CountFilter], type[Type], type[ReferenceVisibility]
]


def _registry(*classes: FilterClass) -> Mapping[str, FilterClass]:
    return {cls.KEY: cls for cls in classes}


WORK_FILTERS: Mapping[str, FilterClass] = _registry(
    HasFunder, Funder, Prefix, Member,
    FromIndexDate, UntilIndexDate, FromDepositDate, UntilDepositDate,
    FromUpdateDate, UntilUpdateDate, FromCreatedDate, UntilCreatedDate,
    FromPubDate, UntilPubDate, FromOnlinePubDate, UntilOnlinePubDate,
    FromPrintPubDate, UntilPrintPubDate, FromPostedDate, UntilPostedDate,
    FromAcceptedDate, UntilAcceptedDate,
    HasLicense, LicenseUrl, LicenseVersion, LicenseDelay,
    HasFullText, FullTextVersion, FullTextType, FullTextApplication,
    HasReferences, ReferenceVisibility, HasArchive, Archive,
    HasOrcid, HasAuthenticatedOrcid, Orcid, Issn, Isbn, Type, Directory, Doi,
    Updates, IsUpdate, HasUpdatePolicy, ContainerTitle, CategoryName, TypeName,
    AwardNumber, AwardFunder, HasAssertion, AssertionGroup, Assertion,
    HasAffiliation, AlternativeId, ArticleNumber, HasAbstract, HasClinicalTrialNumber,
    ContentDomain, HasContentDomain, HasDomainRestriction,
    HasRelation, RelationType, RelationObject, RelationObjectType,
)  # fmt: skip

FUNDER_FILTERS: Mapping[str, FilterClass] = _registry(Location)

MEMBER_FILTERS: Mapping[str, FilterClass] = _registry(
    HasPublicReferences,
    ReferenceVisibility,
    BackfileDoiCount,
    CurrentDoiCount,
)


def filters_for(component: Component) -> Mapping[str, FilterClass]:
    """Return the filter registry for a single-component route.

    Combined routes always address `works`, so callers should pass
    `Component.WORKS` for them.
    """
    if component is Component.FUNDERS:
        return FUNDER_FILTERS
    if component is Component.MEMBERS:
        return MEMBER_FILTERS
    return WORK_FILTERS


def parse_filter(text: str, registry: Mapping[str, FilterClass] = WORK_FILTERS) -> Filter:
    """Parse `key` or `key:value` into a typed filter.

    The text is split at the first `:` so values such as DOIs and URLs may
    contain further colons.

    Args:
        text: Filter text.
        registry: Filters accepted by the target route.

    Returns:
        Typed filter instance.

    Raises:
        UnknownFilterError: If the key is not in `registry`.
        InvalidFilterValueError: If the value does not fit the filter.
    """
    key, sep, raw = text.strip().partition(":")
    key = key.strip()
    cls = registry.get(key)
    if cls is None:
        raise UnknownFilterError(key)
    return cls.from_text(raw.strip() if sep else None)


def filter_set(filters: Sequence[ParamFragment]) -> FragmentSet:
    """Aggregate filters under the single `filter` parameter."""
    return FragmentSet(FILTER_PARAM, filters)
