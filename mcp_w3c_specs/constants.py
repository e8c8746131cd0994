"""Limits, scoring weights and allow-lists used across the server."""
from __future__ import annotations

import re
from typing import Final

# ---- pagination & limits ----
DEFAULT_LIST_LIMIT: Final[int] = 50
MAX_LIST_LIMIT: Final[int] = 500
DEFAULT_SEARCH_LIMIT: Final[int] = 20
MAX_SEARCH_LIMIT: Final[int] = 100
MAX_SUGGESTIONS: Final[int] = 5
MAX_AVAILABLE_SPECS_DISPLAY: Final[int] = 10

# ---- search scoring ----
SCORE_EXACT_SHORTNAME: Final[float] = 100
SCORE_EXACT_TITLE: Final[float] = 90
SCORE_SHORTNAME_CONTAINS: Final[float] = 80
SCORE_QUERY_CONTAINS_SHORTNAME: Final[float] = 70
SCORE_TITLE_CONTAINS: Final[float] = 60
SCORE_ALL_WORDS_MATCH: Final[float] = 50
SCORE_PARTIAL_WORDS_BASE: Final[float] = 30
SCORE_PARTIAL_WORDS_BONUS: Final[float] = 20
SCORE_ABSTRACT_CONTAINS: Final[float] = 25
SCORE_ABSTRACT_PARTIAL_BASE: Final[float] = 15
SCORE_ABSTRACT_PARTIAL_BONUS: Final[float] = 10

# ---- string matching ----
MIN_SEARCH_WORD_LENGTH: Final[int] = 2  # words must be longer than this
MIN_SHORTNAME_LENGTH_FOR_REVERSE_MATCH: Final[int] = 3
MIN_ABSTRACT_WORD_MATCH_RATIO: Final[float] = 0.5
WORD_SPLIT: Final[re.Pattern[str]] = re.compile(r"\s+")

# ---- URL patterns ----
CSSWG_URL_PATTERN: Final[re.Pattern[str]] = re.compile(r"csswg\.org/([^/]+)")
UNKNOWN_SPEC: Final[str] = "unknown"

# ---- organizations ----
ORGANIZATION_FILTERS: Final[tuple[str, ...]] = ("W3C", "WHATWG", "IETF", "all")

# ---- PWA ----
PWA_SHORTNAMES: Final[tuple[str, ...]] = (
    "service-workers",
    "appmanifest",
    "push-api",
    "notifications",
    "background-fetch",
    "background-sync",
    "periodic-background-sync",
    "badging",
    "web-share",
    "web-share-target",
    "getinstalledrelatedapps",
    "payment-handler",
    "content-index",
    "window-controls-overlay",
    "file-handling",
    "file-system-access",
    "web-app-launch",
    "protocol-handler",
    "shortcuts",
    "scope-extensions",
)

CORE_PWA_SHORTNAMES: Final[tuple[str, ...]] = (
    "service-workers",
    "appmanifest",
    "push-api",
    "notifications",
)

PWA_KEYWORDS: Final[tuple[str, ...]] = (
    "manifest",
    "service worker",
    "offline",
    "install",
    "background",
    "push",
    "notification",
    "cache",
    "storage",
)

# ---- bundled data layout ----
SPECS_FILE: Final[str] = "specs.json"
IDL_DIR: Final[str] = "idl"
CSS_FILE: Final[str] = "css.json"
ELEMENTS_DIR: Final[str] = "elements"
