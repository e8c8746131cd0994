# mcp_w3c_specs/mcp.py
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional, Type, TypeVar

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import BaseModel
from pydantic_core import to_json

from . import css, elements, pwa, specs, webidl
from .config import ServerConfig
from .errors import format_error_response
from .loader import DatasetCache
from .logger import PerformanceTimer, configure_logging, log_tool_call, log_tool_result, logger
from .models import (
    CSSAtRule,
    CSSProperty,
    CSSSelector,
    CSSValue,
    DependencyInfo,
    ElementDefinition,
    SpecDetail,
    SpecSearchResult,
    SpecSummary,
)
from .schemas import (
    CSSPropertiesArgs,
    CSSSpecFilterArgs,
    ElementsArgs,
    ListSpecsArgs,
    PwaSpecsArgs,
    SearchSpecsArgs,
    ShortnameArgs,
)
from .search import search_specs

A = TypeVar("A", bound=BaseModel)
R = TypeVar("R")

# ---- config & logging ----
CONFIG = ServerConfig.from_env()
configure_logging(CONFIG)

# ---- dataset ----
# Owned here and handed to every lookup; tests swap it for a fixture cache.
CACHE = DatasetCache(CONFIG)


async def _dispatch(
    tool: str,
    schema: Optional[Type[A]],
    args: Dict[str, Any],
    handler: Callable[..., Awaitable[R]],
) -> R:
    """Validate ``args`` against ``schema``, run ``handler``, and turn any failure into a ToolError."""
    timer = PerformanceTimer(f"tool:{tool}")
    log_tool_call(tool, args)
    try:
        if schema is None:
            result = await handler(CACHE)
        else:
            result = await handler(CACHE, schema.model_validate(args))
    except Exception as e:
        timer.end()
        formatted = format_error_response(e)
        if formatted.error_type == "Error":
            logger.error("Tool %s failed: %s", tool, e, exc_info=True)
        else:
            logger.info("Tool %s: %s", tool, formatted.error_type)
        raise ToolError(formatted.text) from e
    timer.end()
    log_tool_result(tool, len(to_json(result, fallback=str)))
    return result


@asynccontextmanager
async def _lifespan(server: FastMCP) -> AsyncIterator[None]:
    logger.info("W3C MCP server: preloading data from %s", CACHE.data_dir)
    await CACHE.preload_all()
    yield


# ---- MCP server ----
mcp = FastMCP("w3c-specs", lifespan=_lifespan)


@mcp.tool(name="health_ping", description="Returns simple pong")
def ping() -> str:
    return "pong"


@mcp.tool(
    name="health_validate",
    description="Load every bundled collection and report whether any of them is missing or degraded.",
)
async def validate() -> dict:
    try:
        await CACHE.preload_all()
    except Exception as e:
        return {"valid": False, "message": format_error_response(e).text, "collections": CACHE.status()}
    status = CACHE.status()
    degraded = [name for name, entry in status.items() if entry["state"] == "degraded"]
    empty = [name for name, entry in status.items() if entry["count"] == 0]
    if degraded:
        message = f"Degraded collections (serving empty data): {', '.join(degraded)}"
    elif empty:
        message = f"Empty collections: {', '.join(empty)}"
    else:
        message = "All collections loaded"
    return {
        "valid": not degraded and not empty,
        "message": message,
        "collections": status,
    }


@mcp.tool(name="w3c_mode", description="Report the data directory, load-failure policy and cache state.")
def t_mode() -> dict:
    return {
        "data_dir": str(CACHE.data_dir),
        "data_dir_exists": CACHE.data_dir.is_dir(),
        "on_load_failure": CACHE.config.on_load_failure,
        "cache_epoch": CACHE.epoch,
        "collections": CACHE.status(),
    }


@mcp.tool(
    name="list_w3c_specs",
    description="List W3C/WHATWG/IETF web specifications with optional filtering by organization, keyword, or category",
)
async def t_list_specs(
    organization: Optional[str] = None,  # "W3C" | "WHATWG" | "IETF" | "all"
    keyword: Optional[str] = None,
    category: Optional[str] = None,
    limit: int = 50,
) -> List[SpecSummary]:
    args = {"organization": organization, "keyword": keyword, "category": category, "limit": limit}

    async def run(cache: DatasetCache, a: ListSpecsArgs) -> List[SpecSummary]:
        return await specs.list_specs(cache, a.organization, a.keyword, a.category, a.limit)

    return await _dispatch("list_w3c_specs", ListSpecsArgs, args, run)


@mcp.tool(
    name="get_w3c_spec",
    description="Get detailed information about a specific web specification including URLs, status, repository, and test info",
)
async def t_get_spec(shortname: str) -> SpecDetail:
    async def run(cache: DatasetCache, a: ShortnameArgs) -> SpecDetail:
        return await specs.get_spec(cache, a.shortname)

    return await _dispatch("get_w3c_spec", ShortnameArgs, {"shortname": shortname}, run)


@mcp.tool(
    name="search_w3c_specs",
    description="Search web specifications by query string, searching in title, shortname, and description",
)
async def t_search(query: str, limit: int = 20) -> List[SpecSearchResult]:
    async def run(cache: DatasetCache, a: SearchSpecsArgs) -> List[SpecSearchResult]:
        return await search_specs(cache, a.query, a.limit)

    return await _dispatch("search_w3c_specs", SearchSpecsArgs, {"query": query, "limit": limit}, run)


@mcp.tool(
    name="get_webidl",
    description="Get WebIDL interface definitions for a specification. WebIDL defines the JavaScript APIs.",
)
async def t_get_webidl(shortname: str) -> str:
    async def run(cache: DatasetCache, a: ShortnameArgs) -> str:
        return await webidl.get_webidl(cache, a.shortname)

    return await _dispatch("get_webidl", ShortnameArgs, {"shortname": shortname}, run)


@mcp.tool(name="list_webidl_specs", description="List all specifications that have WebIDL definitions available")
async def t_list_webidl_specs() -> List[str]:
    return await _dispatch("list_webidl_specs", None, {}, webidl.list_webidl_specs)


@mcp.tool(
    name="get_css_properties",
    description="Get CSS property definitions from a specific spec or all specs. `property` searches by name.",
)
async def t_get_css_properties(spec: Optional[str] = None, property: Optional[str] = None) -> List[CSSProperty]:
    async def run(cache: DatasetCache, a: CSSPropertiesArgs) -> List[CSSProperty]:
        if a.property:
            return await css.search_css_property(cache, a.property)
        return await css.get_css_properties(cache, a.spec)

    return await _dispatch("get_css_properties", CSSPropertiesArgs, {"spec": spec, "property": property}, run)


@mcp.tool(name="get_css_values", description="Get CSS value types and functions, optionally for one spec")
async def t_get_css_values(spec: Optional[str] = None) -> List[CSSValue]:
    async def run(cache: DatasetCache, a: CSSSpecFilterArgs) -> List[CSSValue]:
        return await css.get_css_values(cache, a.spec)

    return await _dispatch("get_css_values", CSSSpecFilterArgs, {"spec": spec}, run)


@mcp.tool(name="get_css_at_rules", description="Get CSS at-rules (@media, @supports, ...), optionally for one spec")
async def t_get_css_at_rules(spec: Optional[str] = None) -> List[CSSAtRule]:
    async def run(cache: DatasetCache, a: CSSSpecFilterArgs) -> List[CSSAtRule]:
        return await css.get_css_at_rules(cache, a.spec)

    return await _dispatch("get_css_at_rules", CSSSpecFilterArgs, {"spec": spec}, run)


@mcp.tool(name="get_css_selectors", description="Get CSS selectors and pseudo-classes, optionally for one spec")
async def t_get_css_selectors(spec: Optional[str] = None) -> List[CSSSelector]:
    async def run(cache: DatasetCache, a: CSSSpecFilterArgs) -> List[CSSSelector]:
        return await css.get_css_selectors(cache, a.spec)

    return await _dispatch("get_css_selectors", CSSSpecFilterArgs, {"spec": spec}, run)


@mcp.tool(name="list_css_specs", description="List all CSS specifications that have property definitions available")
async def t_list_css_specs() -> List[str]:
    return await _dispatch("list_css_specs", None, {}, css.list_css_specs)


@mcp.tool(
    name="get_html_elements",
    description="Get HTML element definitions from a specific spec or all specs. `element` searches by name (e.g. \"video\").",
)
async def t_get_elements(spec: Optional[str] = None, element: Optional[str] = None) -> List[ElementDefinition]:
    async def run(cache: DatasetCache, a: ElementsArgs) -> List[ElementDefinition]:
        if a.element:
            return await elements.search_element(cache, a.element)
        return await elements.get_elements(cache, a.spec)

    return await _dispatch("get_html_elements", ElementsArgs, {"spec": spec, "element": element}, run)


@mcp.tool(name="list_element_specs", description="List all specifications that have HTML element definitions available")
async def t_list_element_specs() -> List[str]:
    return await _dispatch("list_element_specs", None, {}, elements.list_element_specs)


@mcp.tool(
    name="get_pwa_specs",
    description=(
        "Get Progressive Web App related specifications (Service Worker, Web App Manifest, Push API, "
        "Background Sync, ...). core_only=true returns just the four core specs."
    ),
)
async def t_get_pwa_specs(core_only: bool = False) -> List[SpecSummary]:
    async def run(cache: DatasetCache, a: PwaSpecsArgs) -> List[SpecSummary]:
        if a.core_only:
            return await pwa.get_core_pwa_specs(cache)
        return await pwa.get_pwa_specs(cache)

    return await _dispatch("get_pwa_specs", PwaSpecsArgs, {"core_only": core_only}, run)


@mcp.tool(
    name="get_spec_dependencies",
    description=(
        "Get basic information for a specification. Dependency data is not available in the "
        "bundled dataset, so dependencies and dependents are always empty."
    ),
)
async def t_get_spec_dependencies(shortname: str) -> DependencyInfo:
    async def run(cache: DatasetCache, a: ShortnameArgs) -> DependencyInfo:
        return await specs.get_spec_dependencies(cache, a.shortname)

    return await _dispatch("get_spec_dependencies", ShortnameArgs, {"shortname": shortname}, run)


def main() -> None:
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
