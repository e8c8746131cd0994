"""Pytest configuration and fixtures for the W3C specs MCP server tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest

from mcp_w3c_specs.config import DEFAULT_DATA_DIR, ServerConfig
from mcp_w3c_specs.loader import DatasetCache

# Configure logging for tests
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s'
)


def _spec(
    shortname: str,
    title: str,
    organization: str = "W3C",
    series: Optional[str] = None,
    current: Optional[str] = None,
    abstract: Optional[str] = None,
    release_status: Optional[str] = None,
) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "url": f"https://example.org/{shortname}/",
        "shortname": shortname,
        "title": title,
        "organization": organization,
        "categories": ["browser"],
        "nightly": {"url": f"https://example.org/{shortname}/ed/", "status": "Editor's Draft"},
        "series": {
            "shortname": series or shortname,
            "currentSpecification": current or shortname,
        },
    }
    if abstract:
        record["abstract"] = abstract
    if release_status:
        record["release"] = {"url": f"https://example.org/TR/{shortname}/", "status": release_status}
    return record


SPECS: List[Dict[str, Any]] = [
    _spec(
        "fetch",
        "Fetch Standard",
        organization="WHATWG",
        abstract="Defines requests, responses, and the process that binds them.",
    ),
    _spec("background-fetch", "Background Fetch", abstract="Large downloads from a service worker."),
    _spec(
        "service-workers",
        "Service Workers",
        abstract="A service worker is an event-driven worker.",
        release_status="Candidate Recommendation Draft",
    ),
    _spec("appmanifest", "Web Application Manifest"),
    _spec("push-api", "Push API", abstract="Push messages delivered to a service worker."),
    _spec("notifications", "Notifications API Standard", organization="WHATWG"),
    _spec("css-grid-1", "CSS Grid Layout Module Level 1", series="css-grid", current="css-grid-2"),
    _spec("css-grid-2", "CSS Grid Layout Module Level 2", series="css-grid", current="css-grid-2"),
    _spec("dom", "DOM Standard", organization="WHATWG"),
    _spec("webauthn-3", "Web Authentication Level 3", series="webauthn", current="webauthn-3"),
    _spec("rfc9110", "HTTP Semantics", organization="IETF"),
    _spec("html", "HTML Standard", organization="WHATWG"),
]

IDL: Dict[str, str] = {
    "fetch": "interface Request {};\ninterface Response {};\n",
    "dom": "interface Node {};\n",
    "service-workers": "interface ServiceWorker {};\n",
    "webauthn": "interface PublicKeyCredential {};\n",
    "gamepad": "interface Gamepad {};\n",
    "gamepad-extensions": "partial interface Gamepad { readonly attribute GamepadPose? pose; };\n",
}

CSS: Dict[str, Any] = {
    "properties": [
        {
            "name": "grid-template-columns",
            "href": "https://drafts.csswg.org/css-grid-2/#propdef-grid-template-columns",
            "syntax": "none | <track-list>",
            "initial": "none",
            "inherited": "no",
            "animationType": "discrete",
        },
        {
            "name": "color",
            "href": "https://drafts.csswg.org/css-color-4/#propdef-color",
            "value": "<color>",
            "initial": "CanvasText",
            "inherited": "yes",
        },
        {
            "name": "Grid-Area",
            "href": "https://drafts.csswg.org/css-grid-2/#propdef-grid-area",
            "syntax": "<grid-line> [ / <grid-line> ]{0,3}",
        },
        {"name": "fill", "href": "https://svgwg.org/svg2-draft/painting.html#FillProperty"},
    ],
    "functions": [
        {"name": "rgb()", "href": "https://drafts.csswg.org/css-color-4/#funcdef-rgb", "type": "function"},
        {"name": "minmax()", "href": "https://drafts.csswg.org/css-grid-2/#funcdef-minmax", "type": "function"},
    ],
    "types": [
        {"name": "<color>", "href": "https://drafts.csswg.org/css-color-4/#typedef-color", "type": "type"},
        {"name": "<flex>", "href": "https://drafts.csswg.org/css-grid-2/#typedef-flex"},
    ],
    "selectors": [
        {"name": ":hover", "href": "https://drafts.csswg.org/selectors-4/#hover-pseudo"},
        {"name": "::after", "href": "https://drafts.csswg.org/css-pseudo-4/#selectordef-after"},
    ],
    "atrules": [
        {"name": "@supports", "href": "https://drafts.csswg.org/css-conditional-3/#at-ruledef-supports"},
        {"name": "@media", "href": "https://drafts.csswg.org/css-conditional-3/#at-ruledef-media"},
    ],
}

ELEMENTS: Dict[str, Any] = {
    "html": {
        "spec": {"title": "HTML Standard", "url": "https://html.spec.whatwg.org/multipage/"},
        "elements": [
            {"name": "video", "href": "https://html.spec.whatwg.org/#the-video-element", "interface": "HTMLVideoElement"},
            {"name": "a", "href": "https://html.spec.whatwg.org/#the-a-element", "interface": "HTMLAnchorElement"},
            {"name": "audio", "href": "https://html.spec.whatwg.org/#the-audio-element", "interface": "HTMLAudioElement"},
        ],
    },
    "SVG2": {
        "spec": {"title": "Scalable Vector Graphics (SVG) 2", "url": "https://svgwg.org/svg2-draft/"},
        "elements": [
            {"name": "svg", "href": "https://svgwg.org/svg2-draft/struct.html#elementdef-svg", "interface": "SVGSVGElement"},
            {"name": "a", "href": "https://svgwg.org/svg2-draft/linking.html#elementdef-a", "interface": "SVGAElement"},
        ],
    },
}


def write_dataset(
    root: Path,
    specs: Optional[List[Dict[str, Any]]] = None,
    idl: Optional[Dict[str, str]] = None,
    css: Optional[Dict[str, Any]] = None,
    elements: Optional[Dict[str, Any]] = None,
) -> Path:
    """Write a dataset in the bundled layout. ``None`` means "leave that collection out"."""
    root.mkdir(parents=True, exist_ok=True)
    if specs is not None:
        (root / "specs.json").write_text(json.dumps(specs), encoding="utf-8")
    if idl is not None:
        (root / "idl").mkdir(exist_ok=True)
        for name, text in idl.items():
            (root / "idl" / f"{name}.idl").write_text(text, encoding="utf-8")
    if css is not None:
        (root / "css.json").write_text(json.dumps(css), encoding="utf-8")
    if elements is not None:
        (root / "elements").mkdir(exist_ok=True)
        for name, payload in elements.items():
            (root / "elements" / f"{name}.json").write_text(json.dumps(payload), encoding="utf-8")
    return root


@pytest.fixture
def dataset_dir(tmp_path: Path) -> Path:
    """A complete synthetic dataset."""
    return write_dataset(tmp_path / "data", specs=SPECS, idl=IDL, css=CSS, elements=ELEMENTS)


@pytest.fixture
def make_cache(tmp_path: Path) -> Callable[..., DatasetCache]:
    """Factory for a cache over a custom dataset: ``make_cache(specs=..., on_load_failure=...)``."""
    counter = iter(range(1000))

    def factory(on_load_failure: str = "degrade", **collections: Any) -> DatasetCache:
        root = write_dataset(tmp_path / f"custom-{next(counter)}", **collections)
        return DatasetCache(ServerConfig(data_dir=root, on_load_failure=on_load_failure))

    return factory


@pytest.fixture
def cache(dataset_dir: Path) -> DatasetCache:
    """A fresh cache over the synthetic dataset."""
    return DatasetCache(ServerConfig(data_dir=dataset_dir))


@pytest.fixture
def server_cache(cache: DatasetCache, monkeypatch: pytest.MonkeyPatch) -> DatasetCache:
    """Point the MCP tools at the synthetic cache."""
    from mcp_w3c_specs import mcp as server

    monkeypatch.setattr(server, "CACHE", cache)
    return cache


@pytest.fixture(scope="session")
def bundled_cache_config() -> ServerConfig:
    return ServerConfig(data_dir=DEFAULT_DATA_DIR, on_load_failure="fail")


@pytest.fixture(params=["synthetic", "bundled"])
def any_cache(request: pytest.FixtureRequest, cache: DatasetCache, bundled_cache_config: ServerConfig) -> DatasetCache:
    """Run a test against both the synthetic and the bundled dataset."""
    if request.param == "bundled":
        return DatasetCache(bundled_cache_config)
    return cache
