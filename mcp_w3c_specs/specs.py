"""Specification listing and detail lookups."""
from __future__ import annotations

from typing import List, Optional

from .constants import DEFAULT_LIST_LIMIT
from .errors import SpecNotFoundError
from .loader import DatasetCache
from .models import DependencyInfo, SpecDetail, SpecSummary
from .resolver import find_spec, generate_spec_suggestions
from .utils import to_spec_detail, to_spec_summaries


async def list_specs(
    cache: DatasetCache,
    organization: Optional[str] = None,
    keyword: Optional[str] = None,
    category: Optional[str] = None,
    limit: int = DEFAULT_LIST_LIMIT,
) -> List[SpecSummary]:
    specs = list(await cache.load_specifications())

    if organization and organization != "all":
        org = organization.upper()
        specs = [s for s in specs if (s.organization or "").upper() == org]

    if keyword:
        kw = keyword.lower()
        specs = [s for s in specs if kw in s.title.lower() or kw in s.shortname.lower()]

    if category:
        cat = category.lower()
        specs = [s for s in specs if any(cat in c.lower() for c in s.categories or [])]

    return to_spec_summaries(specs[: max(limit, 0)])


async def get_spec(cache: DatasetCache, shortname: str) -> SpecDetail:
    spec = await find_spec(cache, shortname)
    if spec is None:
        specs = await cache.load_specifications()
        raise SpecNotFoundError(shortname, generate_spec_suggestions(shortname, specs))
    return to_spec_detail(spec)


async def get_spec_dependencies(cache: DatasetCache, shortname: str) -> DependencyInfo:
    """
    Basic info for ``shortname`` (exact match only).

    The dataset carries no dependency graph, so both lists are always empty.
    """
    spec = (await cache.spec_index()).get(shortname)
    if spec is None:
        specs = await cache.load_specifications()
        raise SpecNotFoundError(shortname, generate_spec_suggestions(shortname, specs))
    return DependencyInfo(shortname=spec.shortname, title=spec.title)
