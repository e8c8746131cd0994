"""Progressive Web App related specifications."""
from __future__ import annotations

from typing import List, Sequence

from .constants import CORE_PWA_SHORTNAMES, PWA_KEYWORDS, PWA_SHORTNAMES
from .loader import DatasetCache
from .models import SpecRecord, SpecSummary
from .utils import to_spec_summaries


def matches_shortnames(spec: SpecRecord, shortnames: Sequence[str]) -> bool:
    series = spec.series_shortname or ""
    return any(name in spec.shortname or name in series for name in shortnames)


def is_exact_match(spec: SpecRecord, shortnames: Sequence[str]) -> bool:
    return spec.shortname in shortnames or (
        spec.series_shortname is not None and spec.series_shortname in shortnames
    )


def _sort(specs: List[SpecRecord], shortnames: Sequence[str]) -> List[SpecRecord]:
    # allow-listed specs first, then by title
    return sorted(specs, key=lambda s: (not is_exact_match(s, shortnames), s.title.casefold()))


async def get_pwa_specs(cache: DatasetCache) -> List[SpecSummary]:
    specs = await cache.load_specifications()
    selected = [
        s
        for s in specs
        if matches_shortnames(s, PWA_SHORTNAMES)
        or any(k in s.title.lower() for k in PWA_KEYWORDS)
    ]
    return to_spec_summaries(_sort(selected, PWA_SHORTNAMES))


async def get_core_pwa_specs(cache: DatasetCache) -> List[SpecSummary]:
    """Service Workers, Web App Manifest, Push API and Notifications."""
    specs = await cache.load_specifications()
    selected = [s for s in specs if matches_shortnames(s, CORE_PWA_SHORTNAMES)]
    return to_spec_summaries(_sort(selected, CORE_PWA_SHORTNAMES))
