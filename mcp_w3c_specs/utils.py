"""Shared helpers for mapping records and matching names."""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, TypeVar

from .constants import CSSWG_URL_PATTERN, UNKNOWN_SPEC
from .models import SpecDetail, SpecRecord, SpecSummary


# ---- record mapping ----
def spec_status(spec: SpecRecord) -> Optional[str]:
    """Release status when published, otherwise the editor's draft status."""
    if spec.release and spec.release.status:
        return spec.release.status
    return spec.nightly.status if spec.nightly else None


def to_spec_summary(spec: SpecRecord) -> SpecSummary:
    """The one mapping from a record to its summary; every summary goes through here."""
    return SpecSummary(
        shortname=spec.shortname,
        title=spec.title,
        url=spec.url,
        nightly_url=spec.nightly.url if spec.nightly else None,
        organization=spec.organization,
        status=spec_status(spec),
        categories=spec.categories,
    )


def to_spec_summaries(specs: Iterable[SpecRecord]) -> List[SpecSummary]:
    return [to_spec_summary(s) for s in specs]


def to_spec_detail(spec: SpecRecord) -> SpecDetail:
    return SpecDetail(
        **to_spec_summary(spec).model_dump(),
        abstract=spec.abstract,
        repository=spec.repository,
        tests=spec.tests,
        release=spec.release,
        nightly=spec.nightly,
        series=spec.series,
        source=spec.source,
        standing=spec.standing,
    )


# ---- name matching ----
_Named = TypeVar("_Named")


def filter_by_name(items: Sequence[_Named], search_term: str) -> List[_Named]:
    """Case-insensitive exact or substring match on ``item.name``."""
    term = search_term.lower()
    return [i for i in items if term in i.name.lower()]  # type: ignore[attr-defined]


def normalize_element_name(name: str) -> str:
    """'<video>' -> 'video'."""
    name = name.strip().lower()
    if name.startswith("<"):
        name = name[1:]
    if name.endswith(">"):
        name = name[:-1]
    return name


def extract_spec_from_href(href: Optional[str]) -> str:
    """Owning spec from a CSSWG draft URL, e.g. https://drafts.csswg.org/css-grid-2/#propdef-grid."""
    if not href:
        return UNKNOWN_SPEC
    m = CSSWG_URL_PATTERN.search(href)
    return m.group(1) if m else UNKNOWN_SPEC


def name_sort_key(name: str) -> tuple[str, str]:
    return name.casefold(), name
