"""Retrieval tools used by the agentic evidence loop.

Each tool wraps one or more evidence sources behind a uniform
``run(tool_input) -> List[EvidenceRecord]`` call and tags its output with
the tool's SourceKind. Tools raise ToolUnavailableError when their backend
is not configured; the agentic loop records that as a failed step.

Tools:
- search_knowledge_base: verified-claims vector index
- search_web_current: Tavily news, falling back to Wikipedia
- search_web_historical: Tavily reference search, falling back to Wikipedia
  filtered to reference URLs
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

import structlog

from claim_verifier.retrieval.sources.knowledge_base import KnowledgeBaseSource
from claim_verifier.retrieval.sources.tavily import TavilySource
from claim_verifier.retrieval.sources.wikipedia import WikipediaSource
from claim_verifier.schemas.evidence_schema import EvidenceRecord, SourceKind

SEARCH_KNOWLEDGE_BASE = "search_knowledge_base"
SEARCH_WEB_CURRENT = "search_web_current"
SEARCH_WEB_HISTORICAL = "search_web_historical"

DEFAULT_KB_LIMIT = 5
DEFAULT_WEB_RESULTS = 5


class ToolUnavailableError(RuntimeError):
    """Raised when a tool's backend is not configured."""


def _with_entities(query: str, entities: Sequence[str]) -> str:
    return f"{query} {' '.join(entities)}" if entities else query


class RetrievalTool(ABC):
    """A named evidence-gathering action."""

    name: str
    description: str
    source_kind: SourceKind

    def __init__(self) -> None:
        self._logger = structlog.get_logger().bind(component="RetrievalTool", tool=self.name)

    async def run(self, tool_input: Dict[str, Any]) -> List[EvidenceRecord]:
        """Execute the tool and tag every record with this tool's source kind."""
        records = await self._run(tool_input)
        return [r.model_copy(update={"source_kind": self.source_kind}) for r in records]

    @abstractmethod
    async def _run(self, tool_input: Dict[str, Any]) -> List[EvidenceRecord]:
        ...


class KnowledgeBaseTool(RetrievalTool):
    name = SEARCH_KNOWLEDGE_BASE
    description = (
        "Search the internal knowledge base of verified facts. Best for "
        "well-established facts, historical claims and general knowledge."
    )
    source_kind = SourceKind.VECTOR

    def __init__(self, knowledge_base: Optional[KnowledgeBaseSource]) -> None:
        super().__init__()
        self._kb = knowledge_base

    async def _run(self, tool_input: Dict[str, Any]) -> List[EvidenceRecord]:
        if self._kb is None or not self._kb.available:
            raise ToolUnavailableError("Knowledge base not available")
        return await self._kb.search(
            tool_input["query"], limit=tool_input.get("limit", DEFAULT_KB_LIMIT)
        )


class WebCurrentTool(RetrievalTool):
    name = SEARCH_WEB_CURRENT
    description = (
        "Search the web for information from the last 30 days. Best for "
        "breaking news, current events and time-sensitive claims."
    )
    source_kind = SourceKind.WEB_CURRENT

    def __init__(
        self,
        tavily: Optional[TavilySource] = None,
        wikipedia: Optional[WikipediaSource] = None,
    ) -> None:
        super().__init__()
        self._tavily = tavily
        self._wikipedia = wikipedia

    async def _run(self, tool_input: Dict[str, Any]) -> List[EvidenceRecord]:
        query = tool_input["query"]
        entities = tool_input.get("entities") or []

        records: List[EvidenceRecord] = []
        if self._tavily is not None and self._tavily.available:
            records = await self._tavily.search_news(
                _with_entities(query, entities), max_results=DEFAULT_WEB_RESULTS
            )

        if not records:
            if self._wikipedia is None:
                raise ToolUnavailableError("No web search backend configured")
            self._logger.debug("falling_back_to_wikipedia")
            records = await self._wikipedia.search(query, entities=entities)
        return records


class WebHistoricalTool(RetrievalTool):
    name = SEARCH_WEB_HISTORICAL
    description = (
        "Search encyclopedic and educational sources. Best for historical "
        "events, biographies and scientific facts."
    )
    source_kind = SourceKind.WEB_HISTORICAL

    def __init__(
        self,
        tavily: Optional[TavilySource] = None,
        wikipedia: Optional[WikipediaSource] = None,
    ) -> None:
        super().__init__()
        self._tavily = tavily
        self._wikipedia = wikipedia

    async def _run(self, tool_input: Dict[str, Any]) -> List[EvidenceRecord]:
        query = tool_input["query"]
        entities = tool_input.get("entities") or []

        records: List[EvidenceRecord] = []
        if self._tavily is not None and self._tavily.available:
            records = await self._tavily.search_historical(
                _with_entities(query, entities), max_results=DEFAULT_WEB_RESULTS
            )

        if not records:
            if self._wikipedia is None:
                raise ToolUnavailableError("No web search backend configured")
            self._logger.debug("falling_back_to_wikipedia")
            records = await self._wikipedia.search(
                query, entities=entities, reference_only=True
            )
        return records


def build_default_tools(
    knowledge_base: Optional[KnowledgeBaseSource],
    tavily: Optional[TavilySource],
    wikipedia: Optional[WikipediaSource],
) -> Dict[str, RetrievalTool]:
    """Tool registry keyed by tool name."""
    tools: List[RetrievalTool] = [
        KnowledgeBaseTool(knowledge_base),
        WebCurrentTool(tavily, wikipedia),
        WebHistoricalTool(tavily, wikipedia),
    ]
    return {tool.name: tool for tool in tools}
