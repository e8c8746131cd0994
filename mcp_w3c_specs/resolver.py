"""Resolve a user-supplied identifier to a single specification record."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from .constants import MAX_SUGGESTIONS
from .loader import DatasetCache
from .models import SpecRecord


async def find_indexed(cache: DatasetCache, identifier: str) -> Optional[SpecRecord]:
    """Exact shortname, then exact series alias. Both are dict lookups."""
    spec = (await cache.spec_index()).get(identifier)
    if spec is None:
        spec = (await cache.series_index()).get(identifier)
    return spec


async def find_spec(cache: DatasetCache, identifier: str) -> Optional[SpecRecord]:
    """
    Resolve ``identifier`` in three steps, first hit wins:

    1. exact shortname
    2. exact series alias (e.g. "css-grid" -> current css-grid level)
    3. substring containment in either direction

    Step 3 returns the first record in collection order whose shortname
    contains the identifier or is contained in it. It is a first match,
    not a best match.
    """
    if not identifier:
        return None
    spec = await find_indexed(cache, identifier)
    if spec is not None:
        return spec
    for candidate in await cache.load_specifications():
        if identifier in candidate.shortname or candidate.shortname in identifier:
            return candidate
    return None


def _resembles(identifier: str, spec: SpecRecord) -> bool:
    ident = identifier.lower()
    shortname = spec.shortname.lower()
    return ident in shortname or shortname in ident or ident in spec.title.lower()


def generate_spec_suggestions(
    identifier: str,
    specs: Iterable[SpecRecord],
    max_suggestions: int = MAX_SUGGESTIONS,
) -> List[str]:
    """Shortnames that look like ``identifier`` (for "did you mean" messages)."""
    if not identifier:
        return []
    out: List[str] = []
    for spec in specs:
        if len(out) >= max_suggestions:
            break
        if _resembles(identifier, spec):
            out.append(spec.shortname)
    return out


def generate_webidl_suggestions(
    identifier: str,
    specs: Iterable[SpecRecord],
    idl_data: Mapping[str, str],
    max_suggestions: int = MAX_SUGGESTIONS,
) -> List[str]:
    """Like :func:`generate_spec_suggestions`, limited to specs that ship WebIDL."""
    with_idl = (
        s for s in specs if s.shortname in idl_data or s.series_shortname in idl_data
    )
    return generate_spec_suggestions(identifier, with_idl, max_suggestions)
