"""Heuristic relevance ranking of specifications against a free-text query."""

from __future__ import annotations

from typing import List, Optional, Tuple

from .constants import (
    DEFAULT_SEARCH_LIMIT,
    MIN_ABSTRACT_WORD_MATCH_RATIO,
    MIN_SEARCH_WORD_LENGTH,
    MIN_SHORTNAME_LENGTH_FOR_REVERSE_MATCH,
    SCORE_ABSTRACT_CONTAINS,
    SCORE_ABSTRACT_PARTIAL_BASE,
    SCORE_ABSTRACT_PARTIAL_BONUS,
    SCORE_ALL_WORDS_MATCH,
    SCORE_EXACT_SHORTNAME,
    SCORE_EXACT_TITLE,
    SCORE_PARTIAL_WORDS_BASE,
    SCORE_PARTIAL_WORDS_BONUS,
    SCORE_QUERY_CONTAINS_SHORTNAME,
    SCORE_SHORTNAME_CONTAINS,
    SCORE_TITLE_CONTAINS,
    WORD_SPLIT,
)
from .loader import DatasetCache
from .models import MatchType, SpecRecord, SpecSearchResult
from .resolver import find_indexed
from .utils import to_spec_summary


def query_words(query: str) -> List[str]:
    """Lower-cased words longer than two characters."""
    return [w for w in WORD_SPLIT.split(query.lower()) if len(w) > MIN_SEARCH_WORD_LENGTH]


def score_spec(spec: SpecRecord, query: str, words: List[str]) -> Tuple[float, MatchType]:
    """
    Score one record. ``query`` must already be lower-cased.

    Shortname and title branches are tried in a fixed order and the first
    one that applies sets the score. The abstract is only consulted when
    none of them did.
    """
    shortname = spec.shortname.lower()
    title = spec.title.lower()

    if shortname == query:
        return SCORE_EXACT_SHORTNAME, "shortname"
    if query in shortname:
        return SCORE_SHORTNAME_CONTAINS, "shortname"
    if len(shortname) > MIN_SHORTNAME_LENGTH_FOR_REVERSE_MATCH and shortname in query:
        return SCORE_QUERY_CONTAINS_SHORTNAME, "shortname"
    if title == query:
        return SCORE_EXACT_TITLE, "title"
    if query in title:
        return SCORE_TITLE_CONTAINS, "title"
    if words:
        matched = sum(1 for w in words if w in title)
        if matched == len(words):
            return SCORE_ALL_WORDS_MATCH, "title"
        if matched:
            return SCORE_PARTIAL_WORDS_BASE + matched / len(words) * SCORE_PARTIAL_WORDS_BONUS, "title"

    if spec.abstract:
        abstract = spec.abstract.lower()
        if query in abstract:
            return SCORE_ABSTRACT_CONTAINS, "description"
        if words:
            matched = sum(1 for w in words if w in abstract)
            if matched and matched >= len(words) * MIN_ABSTRACT_WORD_MATCH_RATIO:
                return (
                    SCORE_ABSTRACT_PARTIAL_BASE
                    + matched / len(words) * SCORE_ABSTRACT_PARTIAL_BONUS,
                    "description",
                )
    return 0, "title"


async def search_specs(
    cache: DatasetCache, query: str, limit: int = DEFAULT_SEARCH_LIMIT
) -> List[SpecSearchResult]:
    """
    Rank every specification against ``query``.

    Matching is case-insensitive. Zero scores are dropped; the rest are
    sorted by descending score with a stable sort, so equal scores keep
    collection order. ``limit`` caps the result (``0`` gives ``[]``).
    """
    specs = await cache.load_specifications()
    q = query.lower()
    words = query_words(query)

    results: List[SpecSearchResult] = []
    for spec in specs:
        score, match_type = score_spec(spec, q, words)
        if score > 0:
            results.append(
                SpecSearchResult(
                    **to_spec_summary(spec).model_dump(),
                    match_type=match_type,
                    score=score,
                )
            )

    results.sort(key=lambda r: r.score, reverse=True)
    return results[: max(limit, 0)]


async def quick_resolve_by_shortname(
    cache: DatasetCache, shortname: str
) -> Optional[SpecSearchResult]:
    """Index-only lookup (exact shortname or series alias), no scoring pass."""
    spec = await find_indexed(cache, shortname)
    if spec is None:
        return None
    return SpecSearchResult(
        **to_spec_summary(spec).model_dump(),
        match_type="shortname",
        score=SCORE_EXACT_SHORTNAME,
    )
