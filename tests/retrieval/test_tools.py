"""Tests for the agentic retrieval tools.

Tests cover:
- KnowledgeBaseTool availability checks and limit passthrough
- Web tools: Tavily first, Wikipedia fallback, source-kind tagging
- Unavailable backends raising ToolUnavailableError
- Default tool registry
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from claim_verifier.retrieval.tools import (
    SEARCH_KNOWLEDGE_BASE,
    SEARCH_WEB_CURRENT,
    SEARCH_WEB_HISTORICAL,
    KnowledgeBaseTool,
    ToolUnavailableError,
    WebCurrentTool,
    WebHistoricalTool,
    build_default_tools,
)
from claim_verifier.schemas.evidence_schema import EvidenceRecord, SourceKind


def _record(url: str = "https://example.org") -> EvidenceRecord:
    return EvidenceRecord(title="t", url=url, snippet="s", source_kind=SourceKind.WEB)


def _mock_source(available: bool = True, **methods) -> MagicMock:
    source = MagicMock()
    source.available = available
    for name, value in methods.items():
        setattr(source, name, AsyncMock(return_value=value))
    return source


# ── Knowledge base tool ──────────────────────────────────────────────────


class TestKnowledgeBaseTool:
    @pytest.mark.asyncio
    async def test_missing_knowledge_base_raises(self) -> None:
        with pytest.raises(ToolUnavailableError, match="Knowledge base not available"):
            await KnowledgeBaseTool(None).run({"query": "q"})

    @pytest.mark.asyncio
    async def test_unconfigured_knowledge_base_raises(self) -> None:
        kb = _mock_source(available=False, search=[_record()])
        with pytest.raises(ToolUnavailableError):
            await KnowledgeBaseTool(kb).run({"query": "q"})
        kb.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_searches_with_limit(self) -> None:
        kb = _mock_source(search=[_record()])
        records = await KnowledgeBaseTool(kb).run({"query": "q", "limit": 3})
        kb.search.assert_awaited_once_with("q", limit=3)
        assert records[0].source_kind == SourceKind.VECTOR


# ── Web tools ────────────────────────────────────────────────────────────


class TestWebCurrentTool:
    @pytest.mark.asyncio
    async def test_uses_tavily_news_with_entities(self) -> None:
        tavily = _mock_source(search_news=[_record()])
        wikipedia = _mock_source(search=[_record("https://en.wikipedia.org")])
        tool = WebCurrentTool(tavily, wikipedia)

        records = await tool.run({"query": "rates rose", "entities": ["Fed", "ECB"]})

        tavily.search_news.assert_awaited_once_with("rates rose Fed ECB", max_results=5)
        wikipedia.search.assert_not_awaited()
        assert [r.source_kind for r in records] == [SourceKind.WEB_CURRENT]

    @pytest.mark.asyncio
    async def test_falls_back_to_wikipedia_on_empty_results(self) -> None:
        tavily = _mock_source(search_news=[])
        wikipedia = _mock_source(search=[_record("https://en.wikipedia.org")])
        tool = WebCurrentTool(tavily, wikipedia)

        records = await tool.run({"query": "rates rose", "entities": ["Fed"]})

        wikipedia.search.assert_awaited_once_with("rates rose", entities=["Fed"])
        assert records[0].url == "https://en.wikipedia.org"
        assert records[0].source_kind == SourceKind.WEB_CURRENT

    @pytest.mark.asyncio
    async def test_skips_unconfigured_tavily(self) -> None:
        tavily = _mock_source(available=False, search_news=[_record()])
        wikipedia = _mock_source(search=[_record("https://en.wikipedia.org")])

        await WebCurrentTool(tavily, wikipedia).run({"query": "q"})

        tavily.search_news.assert_not_awaited()
        wikipedia.search.assert_awaited_once_with("q", entities=[])

    @pytest.mark.asyncio
    async def test_no_backend_raises(self) -> None:
        with pytest.raises(ToolUnavailableError):
            await WebCurrentTool(None, None).run({"query": "q"})


class TestWebHistoricalTool:
    @pytest.mark.asyncio
    async def test_uses_tavily_historical(self) -> None:
        tavily = _mock_source(search_historical=[_record()])
        records = await WebHistoricalTool(tavily, None).run({"query": "q", "entities": []})
        tavily.search_historical.assert_awaited_once_with("q", max_results=5)
        assert records[0].source_kind == SourceKind.WEB_HISTORICAL

    @pytest.mark.asyncio
    async def test_wikipedia_fallback_is_reference_only(self) -> None:
        tavily = _mock_source(search_historical=[])
        wikipedia = _mock_source(search=[])

        records = await WebHistoricalTool(tavily, wikipedia).run(
            {"query": "q", "entities": ["Marie Curie"]}
        )

        wikipedia.search.assert_awaited_once_with(
            "q", entities=["Marie Curie"], reference_only=True
        )
        assert records == []


class TestDefaultTools:
    def test_registry_keys(self) -> None:
        tools = build_default_tools(None, None, None)
        assert set(tools) == {SEARCH_KNOWLEDGE_BASE, SEARCH_WEB_CURRENT, SEARCH_WEB_HISTORICAL}
        assert all(name == tool.name for name, tool in tools.items())
