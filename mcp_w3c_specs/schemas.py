"""Argument schemas checked at the tool boundary before any lookup runs."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    DEFAULT_LIST_LIMIT,
    DEFAULT_SEARCH_LIMIT,
    MAX_LIST_LIMIT,
    MAX_SEARCH_LIMIT,
)


class ToolArgs(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)


class ListSpecsArgs(ToolArgs):
    organization: Optional[Literal["W3C", "WHATWG", "IETF", "all"]] = None
    keyword: Optional[str] = None
    category: Optional[str] = None
    limit: int = Field(default=DEFAULT_LIST_LIMIT, ge=1, le=MAX_LIST_LIMIT)


class ShortnameArgs(ToolArgs):
    shortname: str = Field(min_length=1)


class SearchSpecsArgs(ToolArgs):
    query: str = Field(min_length=1)
    limit: int = Field(default=DEFAULT_SEARCH_LIMIT, ge=1, le=MAX_SEARCH_LIMIT)


class CSSPropertiesArgs(ToolArgs):
    spec: Optional[str] = None
    property: Optional[str] = None


class CSSSpecFilterArgs(ToolArgs):
    spec: Optional[str] = None


class ElementsArgs(ToolArgs):
    spec: Optional[str] = None
    element: Optional[str] = None


class PwaSpecsArgs(ToolArgs):
    core_only: bool = False
