"""CSS property, value, at-rule and selector tables."""
from __future__ import annotations

from typing import List, Optional

from .constants import UNKNOWN_SPEC
from .errors import CSSNotFoundError
from .loader import DatasetCache
from .models import CSSAtRule, CSSEntry, CSSProperty, CSSSelector, CSSValue
from .utils import extract_spec_from_href, filter_by_name, name_sort_key


def _keep(spec: str, spec_filter: Optional[str]) -> bool:
    return not spec_filter or spec_filter in spec


async def list_css_specs(cache: DatasetCache) -> List[str]:
    """Distinct owning specs of the known properties (``unknown`` excluded)."""
    css = await cache.load_css()
    specs = {extract_spec_from_href(p.href) for p in css.properties}
    specs.discard(UNKNOWN_SPEC)
    return sorted(specs)


async def get_css_properties(
    cache: DatasetCache, spec_filter: Optional[str] = None
) -> List[CSSProperty]:
    css = await cache.load_css()
    properties: List[CSSProperty] = []
    for prop in css.properties:
        spec = extract_spec_from_href(prop.href)
        if not _keep(spec, spec_filter):
            continue
        properties.append(
            CSSProperty(
                name=prop.name,
                value=prop.syntax,
                initial=prop.initial,
                inherited=prop.inherited,
                animation_type=prop.animation_type,
                spec=spec,
            )
        )
    if spec_filter and not properties:
        raise CSSNotFoundError(spec_filter, await list_css_specs(cache))
    properties.sort(key=lambda p: name_sort_key(p.name))
    return properties


async def search_css_property(cache: DatasetCache, property_name: str) -> List[CSSProperty]:
    return filter_by_name(await get_css_properties(cache), property_name)


def _values(entries: List[CSSEntry], kind: str, spec_filter: Optional[str]) -> List[CSSValue]:
    out = []
    for item in entries:
        spec = extract_spec_from_href(item.href)
        if _keep(spec, spec_filter):
            out.append(CSSValue(name=item.name, value=item.syntax, type=item.type or kind, spec=spec))
    return out


async def get_css_values(
    cache: DatasetCache, spec_filter: Optional[str] = None
) -> List[CSSValue]:
    """Value types and functions together."""
    css = await cache.load_css()
    values = _values(css.types, "type", spec_filter) + _values(css.functions, "function", spec_filter)
    values.sort(key=lambda v: name_sort_key(v.name))
    return values


async def get_css_at_rules(
    cache: DatasetCache, spec_filter: Optional[str] = None
) -> List[CSSAtRule]:
    css = await cache.load_css()
    rules = []
    for rule in css.atrules:
        spec = extract_spec_from_href(rule.href)
        if _keep(spec, spec_filter):
            rules.append(CSSAtRule(name=rule.name, value=rule.syntax, spec=spec))
    rules.sort(key=lambda r: name_sort_key(r.name))
    return rules


async def get_css_selectors(
    cache: DatasetCache, spec_filter: Optional[str] = None
) -> List[CSSSelector]:
    css = await cache.load_css()
    selectors = []
    for sel in css.selectors:
        spec = extract_spec_from_href(sel.href)
        if _keep(spec, spec_filter):
            selectors.append(CSSSelector(name=sel.name, spec=spec))
    selectors.sort(key=lambda s: name_sort_key(s.name))
    return selectors
