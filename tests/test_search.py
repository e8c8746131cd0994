"""Tests for spec resolution and search ranking."""

from __future__ import annotations

import pytest

from mcp_w3c_specs.models import SpecRecord
from mcp_w3c_specs.resolver import find_spec, generate_spec_suggestions, generate_webidl_suggestions
from mcp_w3c_specs.search import query_words, quick_resolve_by_shortname, score_spec, search_specs

from conftest import _spec


def _record(shortname: str, title: str, abstract: str | None = None) -> SpecRecord:
    return SpecRecord.model_validate(_spec(shortname, title, abstract=abstract))


@pytest.mark.search
class TestResolver:
    """Identifier resolution order: exact, alias, substring."""

    @pytest.mark.asyncio
    async def test_exact_shortname(self, cache):
        spec = await find_spec(cache, "css-grid-1")
        assert spec is not None and spec.shortname == "css-grid-1"

    @pytest.mark.asyncio
    async def test_series_alias(self, cache):
        spec = await find_spec(cache, "css-grid")
        assert spec is not None and spec.shortname == "css-grid-2", "Alias should pick the current level"

    @pytest.mark.asyncio
    async def test_substring_first_match(self, cache):
        spec = await find_spec(cache, "workers")
        assert spec is not None and spec.shortname == "service-workers"

    @pytest.mark.asyncio
    async def test_reverse_substring(self, cache):
        spec = await find_spec(cache, "fetch-api")
        assert spec is not None and spec.shortname == "fetch"

    @pytest.mark.asyncio
    async def test_case_sensitive_lookup(self, cache):
        assert await find_spec(cache, "FETCH") is None

    @pytest.mark.asyncio
    async def test_empty_identifier(self, cache):
        assert await find_spec(cache, "") is None

    @pytest.mark.asyncio
    async def test_unknown_identifier(self, cache):
        assert await find_spec(cache, "xyz-unknown") is None


@pytest.mark.search
class TestSuggestions:
    """Did-you-mean generation."""

    def test_matches_title_case_insensitively(self):
        specs = [_record("appmanifest", "Web Application Manifest"), _record("dom", "DOM Standard")]
        assert generate_spec_suggestions("Application", specs) == ["appmanifest"]

    def test_capped(self):
        specs = [_record(f"css-thing-{i}", f"CSS Thing {i}") for i in range(10)]
        assert len(generate_spec_suggestions("css-thing", specs)) == 5
        assert len(generate_spec_suggestions("css-thing", specs, max_suggestions=2)) == 2

    def test_empty_identifier(self):
        assert generate_spec_suggestions("", [_record("dom", "DOM Standard")]) == []

    def test_webidl_suggestions_only_specs_with_idl(self):
        specs = [_record("gamepad", "Gamepad"), _record("gamepad-ext", "Gamepad Ext")]
        assert generate_webidl_suggestions("gamepad", specs, {"gamepad": ""}) == ["gamepad"]


@pytest.mark.search
class TestScoring:
    """Individual score branches."""

    def test_query_words_drop_short_words(self):
        assert query_words("The  Web of API") == ["the", "web", "api"]

    @pytest.mark.parametrize(
        "shortname,title,query,expected",
        [
            ("fetch", "Fetch Standard", "fetch", (100, "shortname")),
            ("fetch", "Fetch Standard", "fet", (80, "shortname")),
            ("fetch", "Fetch Standard", "use fetch here", (70, "shortname")),
            ("xhr", "XMLHttpRequest Standard", "xmlhttprequest standard", (90, "title")),
            ("xhr", "XMLHttpRequest Standard", "standard", (60, "title")),
        ],
    )
    def test_branches(self, shortname, title, query, expected):
        spec = _record(shortname, title)
        assert score_spec(spec, query, query_words(query)) == expected

    def test_short_shortname_not_reverse_matched(self):
        spec = _record("dom", "Document Object Model")
        assert score_spec(spec, "random words", query_words("random words"))[0] == 0

    def test_all_and_partial_title_words(self):
        spec = _record("xhr", "XMLHttpRequest Living Standard")
        assert score_spec(spec, "standard living", ["standard", "living"]) == (50, "title")
        score, match_type = score_spec(spec, "living thing", ["living", "thing"])
        assert (score, match_type) == (40, "title")

    def test_abstract_fallback(self):
        spec = _record("xhr", "XMLHttpRequest", abstract="Defines an API for client and server transfers.")
        assert score_spec(spec, "server transfers", ["server", "transfers"]) == (25, "description")
        assert score_spec(spec, "client widgets", ["client", "widgets"]) == (20, "description")
        assert score_spec(spec, "widgets gadgets client", ["widgets", "gadgets", "client"])[0] == 0


@pytest.mark.search
class TestSearch:
    """End-to-end ranking over the fixture dataset."""

    @pytest.mark.asyncio
    async def test_exact_shortname_scores_100(self, cache):
        results = await search_specs(cache, "fetch")
        assert results[0].shortname == "fetch"
        assert results[0].score == 100
        assert results[0].match_type == "shortname"
        assert results[1].shortname == "background-fetch"
        assert results[1].score == 80

    @pytest.mark.asyncio
    async def test_service_worker_limit(self, cache):
        results = await search_specs(cache, "service worker", limit=5)
        assert 0 < len(results) <= 5
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True), "Results should be sorted by score"
        assert results[0].shortname == "service-workers"
        assert results[0].score == 60

    @pytest.mark.asyncio
    async def test_query_containing_shortname(self, cache):
        results = await search_specs(cache, "the fetch api specification")
        assert results[0].shortname == "fetch"
        assert results[0].score == 70
        assert results[0].match_type == "shortname"

    @pytest.mark.asyncio
    async def test_case_insensitive(self, cache):
        lower = await search_specs(cache, "fetch")
        upper = await search_specs(cache, "FETCH")
        assert [(r.shortname, r.score) for r in lower] == [(r.shortname, r.score) for r in upper]

    @pytest.mark.asyncio
    async def test_ties_keep_collection_order(self, cache):
        results = await search_specs(cache, "standard")
        tied = [r.shortname for r in results if r.score == 60]
        assert tied == ["fetch", "notifications", "dom", "html"]

    @pytest.mark.asyncio
    async def test_zero_limit(self, cache):
        assert await search_specs(cache, "fetch", limit=0) == []

    @pytest.mark.asyncio
    async def test_no_match(self, cache):
        assert await search_specs(cache, "zzzzqqq") == []

    @pytest.mark.asyncio
    async def test_result_has_summary_fields(self, cache):
        result = (await search_specs(cache, "service-workers"))[0]
        assert result.status == "Candidate Recommendation Draft"
        assert result.nightly_url == "https://example.org/service-workers/ed/"

    @pytest.mark.asyncio
    async def test_quick_resolve(self, cache):
        hit = await quick_resolve_by_shortname(cache, "css-grid")
        assert hit is not None and hit.shortname == "css-grid-2" and hit.score == 100
        assert await quick_resolve_by_shortname(cache, "grid") is None


@pytest.mark.search
class TestResolutionInvariants:
    """Properties that hold for every record of a dataset."""

    @pytest.mark.asyncio
    async def test_own_shortname_resolves_exactly(self, any_cache):
        for record in await any_cache.load_specifications():
            assert await find_spec(any_cache, record.shortname) is record, record.shortname

            hit = await quick_resolve_by_shortname(any_cache, record.shortname)
            assert hit is not None, record.shortname
            assert (hit.shortname, hit.score) == (record.shortname, 100)

            top = (await search_specs(any_cache, record.shortname, limit=1))[0]
            assert (top.shortname, top.score, top.match_type) == (record.shortname, 100, "shortname")

    @pytest.mark.asyncio
    async def test_series_alias_resolves_within_series(self, any_cache):
        records = await any_cache.load_specifications()
        index = await any_cache.spec_index()
        aliased = [r for r in records if r.series_shortname and r.series_shortname != r.shortname]
        assert aliased, "Dataset should contain series aliases"

        for record in aliased:
            alias = record.series_shortname
            found = await find_spec(any_cache, alias)
            assert found is not None, alias
            if alias in index:
                assert found.shortname == alias, "An exact shortname beats the alias"
                continue
            assert found.series_shortname == alias, (alias, found.shortname)
            current = index.get(record.series.current_specification)
            if current is not None and current.series_shortname == alias:
                assert found is current, (alias, found.shortname)
