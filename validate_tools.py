#!/usr/bin/env python3
"""
Validation script for the W3C specs MCP server.
Calls every tool against the bundled dataset and reports what came back.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Awaitable, Callable

from mcp.server.fastmcp.exceptions import ToolError

from mcp_w3c_specs.mcp import (
    CACHE,
    ping,
    t_get_css_at_rules,
    t_get_css_properties,
    t_get_css_selectors,
    t_get_css_values,
    t_get_elements,
    t_get_pwa_specs,
    t_get_spec,
    t_get_spec_dependencies,
    t_get_webidl,
    t_list_css_specs,
    t_list_element_specs,
    t_list_specs,
    t_list_webidl_specs,
    t_mode,
    t_search,
    validate,
)


class Colors:
    """ANSI color codes for terminal output."""
    GREEN = '\033[92m'
    RED = '\033[91m'
    YELLOW = '\033[93m'
    BLUE = '\033[94m'
    RESET = '\033[0m'
    BOLD = '\033[1m'


def print_header(text: str) -> None:
    """Print a formatted header."""
    print(f"\n{Colors.BOLD}{Colors.BLUE}{'=' * 70}{Colors.RESET}")
    print(f"{Colors.BOLD}{Colors.BLUE}{text:^70}{Colors.RESET}")
    print(f"{Colors.BOLD}{Colors.BLUE}{'=' * 70}{Colors.RESET}\n")


def print_result(name: str, ok: bool, message: str = "") -> None:
    """Print a check result."""
    if ok:
        print(f"{Colors.GREEN}✓{Colors.RESET} {name:.<50} {Colors.GREEN}PASS{Colors.RESET}")
    else:
        print(f"{Colors.RED}✗{Colors.RESET} {name:.<50} {Colors.RED}FAIL{Colors.RESET}")
    if message:
        print(f"   {Colors.YELLOW}{message}{Colors.RESET}")


Check = Callable[[], Awaitable[tuple[bool, str]]]


async def check_health() -> tuple[bool, str]:
    if ping() != "pong":
        return False, "ping did not return 'pong'"
    result = await validate()
    return result["valid"], result["message"]


async def check_mode() -> tuple[bool, str]:
    result = t_mode()
    return result["data_dir_exists"], f"data_dir={result['data_dir']}, policy={result['on_load_failure']}"


async def check_list_specs() -> tuple[bool, str]:
    result = await t_list_specs(organization="WHATWG", limit=5)
    return bool(result), f"{len(result)} WHATWG specs, first: {result[0].shortname if result else 'N/A'}"


async def check_get_spec() -> tuple[bool, str]:
    result = await t_get_spec(shortname="css-grid")
    return result.shortname == "css-grid-2", f"css-grid -> {result.shortname} ({result.status})"


async def check_search() -> tuple[bool, str]:
    result = await t_search(query="service worker", limit=5)
    summary = ", ".join(f"{r.shortname}={r.score:g}" for r in result)
    return bool(result), summary


async def check_webidl() -> tuple[bool, str]:
    idl = await t_get_webidl(shortname="fetch")
    available = await t_list_webidl_specs()
    return "interface Request" in idl, f"{len(idl)} chars of IDL, {len(available)} specs with IDL"


async def check_css() -> tuple[bool, str]:
    props = await t_get_css_properties(spec="css-grid")
    values = await t_get_css_values()
    rules = await t_get_css_at_rules()
    selectors = await t_get_css_selectors()
    specs = await t_list_css_specs()
    return bool(props), (
        f"{len(props)} grid properties, {len(values)} values, {len(rules)} at-rules, "
        f"{len(selectors)} selectors across {len(specs)} specs"
    )


async def check_elements() -> tuple[bool, str]:
    result = await t_get_elements(element="<video>")
    specs = await t_list_element_specs()
    return bool(result), f"video -> {result[0].interface if result else 'N/A'}; specs: {', '.join(specs)}"


async def check_pwa() -> tuple[bool, str]:
    core = await t_get_pwa_specs(core_only=True)
    everything = await t_get_pwa_specs()
    return len(core) == 4, f"{len(core)} core, {len(everything)} total"


async def check_dependencies() -> tuple[bool, str]:
    info = await t_get_spec_dependencies(shortname="fetch")
    return info.dependencies == [], f"{info.shortname}: {info.title}"


async def check_not_found() -> tuple[bool, str]:
    try:
        await t_get_spec(shortname="Manifest")
    except ToolError as e:
        return "SpecNotFoundError" in str(e), "SpecNotFoundError payload returned"
    return False, "expected a ToolError"


async def run_all_checks() -> dict[str, tuple[bool, str]]:
    """Run all validation checks."""
    checks: dict[str, Check] = {
        "health": check_health,
        "w3c_mode": check_mode,
        "list_w3c_specs": check_list_specs,
        "get_w3c_spec": check_get_spec,
        "search_w3c_specs": check_search,
        "get_webidl": check_webidl,
        "css tools": check_css,
        "element tools": check_elements,
        "get_pwa_specs": check_pwa,
        "get_spec_dependencies": check_dependencies,
        "error payload": check_not_found,
    }

    results = {}
    for name, check in checks.items():
        try:
            results[name] = await check()
        except ToolError as e:
            results[name] = (False, f"Tool error: {e}")
    return results


async def main() -> int:
    """Main entry point."""
    print_header("W3C Specs MCP Server Validation")

    await CACHE.preload_all()
    results = await run_all_checks()

    passed = 0
    for name, (ok, message) in results.items():
        print_result(name, ok, message)
        passed += ok

    failed = len(results) - passed
    print_header("Summary")
    print(f"Passed: {Colors.GREEN}{passed}{Colors.RESET}")
    print(f"Failed: {Colors.RED}{failed}{Colors.RESET}\n")
    return 0 if failed == 0 else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
