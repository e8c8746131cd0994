"""HTML (and SVG/MathML) element tables."""
from __future__ import annotations

from typing import List, Optional

from .errors import ElementsNotFoundError
from .loader import DatasetCache
from .models import ElementDefinition
from .utils import filter_by_name, name_sort_key, normalize_element_name


async def get_elements(
    cache: DatasetCache, spec_shortname: Optional[str] = None
) -> List[ElementDefinition]:
    data = await cache.load_elements()

    if spec_shortname:
        spec_data = data.get(spec_shortname)
        if spec_data is None:
            raise ElementsNotFoundError(spec_shortname, sorted(data))
        groups = [(spec_shortname, spec_data)]
    else:
        groups = list(data.items())

    elements = [
        ElementDefinition(name=e.name, interface=e.interface, href=e.href, spec=spec)
        for spec, spec_data in groups
        for e in spec_data.elements
    ]
    elements.sort(key=lambda e: name_sort_key(e.name))
    return elements


async def search_element(cache: DatasetCache, element_name: str) -> List[ElementDefinition]:
    """Case-insensitive name match; "<video>" and "video" are the same query."""
    return filter_by_name(await get_elements(cache), normalize_element_name(element_name))


async def list_element_specs(cache: DatasetCache) -> List[str]:
    return sorted(await cache.load_elements())
