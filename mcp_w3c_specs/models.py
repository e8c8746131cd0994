"""Pydantic models for the bundled web-standards data and the shapes tools return."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MatchType = Literal["shortname", "title", "description"]


class WebrefModel(BaseModel):
    """Base for records read from webref JSON (camelCase keys, unknown keys ignored)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


# ============================================================================
# Specification records
# ============================================================================


class VersionInfo(WebrefModel):
    url: str
    status: Optional[str] = None
    repository: Optional[str] = None


class SeriesInfo(WebrefModel):
    shortname: str
    current_specification: Optional[str] = None
    title: Optional[str] = None


class SpecTestsInfo(WebrefModel):
    repository: Optional[str] = None
    test_paths: Optional[List[str]] = None


class SpecRecord(WebrefModel):
    """One entry of the specification index."""

    shortname: str = Field(min_length=1, description="Unique, stable identifier")
    title: str
    url: str
    short_title: Optional[str] = None
    abstract: Optional[str] = None
    organization: Optional[str] = None
    categories: Optional[List[str]] = None
    standing: Optional[str] = None
    source: Optional[str] = None
    repository: Optional[str] = None
    nightly: Optional[VersionInfo] = None
    release: Optional[VersionInfo] = None
    series: Optional[SeriesInfo] = None
    tests: Optional[SpecTestsInfo] = None

    @property
    def series_shortname(self) -> Optional[str]:
        return self.series.shortname if self.series else None


class SpecSummary(WebrefModel):
    shortname: str
    title: str
    url: str
    nightly_url: Optional[str] = None
    organization: Optional[str] = None
    status: Optional[str] = None
    categories: Optional[List[str]] = None


class SpecDetail(SpecSummary):
    abstract: Optional[str] = None
    repository: Optional[str] = None
    tests: Optional[SpecTestsInfo] = None
    release: Optional[VersionInfo] = None
    nightly: Optional[VersionInfo] = None
    series: Optional[SeriesInfo] = None
    source: Optional[str] = None
    standing: Optional[str] = None


class SpecSearchResult(SpecSummary):
    match_type: MatchType
    score: float


class DependencyInfo(WebrefModel):
    shortname: str
    title: str
    dependencies: List[str] = Field(default_factory=list)
    dependents: List[str] = Field(default_factory=list)


# ============================================================================
# CSS
# ============================================================================


class CSSEntry(WebrefModel):
    """Raw CSS definition (property, function, type, selector or at-rule)."""

    name: str
    href: Optional[str] = None
    # webref renamed "value" to "syntax" for properties; accept either
    syntax: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("syntax", "value")
    )
    initial: Optional[str] = None
    inherited: Optional[str] = None
    applies_to: Optional[str] = None
    percentages: Optional[str] = None
    computed_value: Optional[str] = None
    animation_type: Optional[str] = None
    type: Optional[str] = None


class CSSData(WebrefModel):
    properties: List[CSSEntry] = Field(default_factory=list)
    functions: List[CSSEntry] = Field(default_factory=list)
    types: List[CSSEntry] = Field(default_factory=list)
    selectors: List[CSSEntry] = Field(default_factory=list)
    atrules: List[CSSEntry] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (
            self.properties or self.functions or self.types or self.selectors or self.atrules
        )

    def size(self) -> int:
        return (
            len(self.properties)
            + len(self.functions)
            + len(self.types)
            + len(self.selectors)
            + len(self.atrules)
        )


class CSSProperty(WebrefModel):
    name: str
    value: Optional[str] = None
    initial: Optional[str] = None
    inherited: Optional[str] = None
    animation_type: Optional[str] = None
    spec: str


class CSSValue(WebrefModel):
    name: str
    value: Optional[str] = None
    type: Optional[str] = None
    spec: str


class CSSAtRule(WebrefModel):
    name: str
    value: Optional[str] = None
    spec: str


class CSSSelector(WebrefModel):
    name: str
    spec: str


# ============================================================================
# HTML elements
# ============================================================================


class ElementEntry(WebrefModel):
    name: str
    href: Optional[str] = None
    interface: Optional[str] = None


class ElementSpecInfo(WebrefModel):
    title: str
    url: str


class ElementSpecData(WebrefModel):
    spec: ElementSpecInfo
    elements: List[ElementEntry] = Field(default_factory=list)


class ElementDefinition(WebrefModel):
    name: str
    interface: Optional[str] = None
    href: Optional[str] = None
    spec: str


ElementsData = Dict[str, ElementSpecData]
WebIDLData = Dict[str, str]
