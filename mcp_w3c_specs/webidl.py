"""WebIDL text lookups."""
from __future__ import annotations

from typing import List

from .errors import WebIDLAmbiguousError, WebIDLNotFoundError
from .loader import DatasetCache
from .resolver import find_spec, generate_webidl_suggestions


async def get_webidl(cache: DatasetCache, shortname: str) -> str:
    """
    Raw IDL for ``shortname``.

    Tries, in order: the IDL key itself, the resolved spec's shortname, that
    spec's series shortname, then keys overlapping ``shortname`` as
    substrings. Several overlapping keys is an ambiguity, not a guess.
    """
    idl_data = await cache.load_webidl()

    if shortname in idl_data:
        return idl_data[shortname]

    spec = await find_spec(cache, shortname)
    if spec is not None:
        if spec.shortname in idl_data:
            return idl_data[spec.shortname]
        if spec.series_shortname and spec.series_shortname in idl_data:
            return idl_data[spec.series_shortname]

    matching = [key for key in idl_data if key in shortname or shortname in key]
    if len(matching) == 1:
        return idl_data[matching[0]]
    if len(matching) > 1:
        raise WebIDLAmbiguousError(shortname, sorted(matching))

    specs = await cache.load_specifications()
    raise WebIDLNotFoundError(shortname, generate_webidl_suggestions(shortname, specs, idl_data))


async def list_webidl_specs(cache: DatasetCache) -> List[str]:
    return sorted(await cache.load_webidl())
