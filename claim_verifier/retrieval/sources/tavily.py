"""Tavily search client for current news and reference lookups.

Tavily returns LLM-oriented search results with a relevance score per hit.
Two presets are exposed:
- search_news: basic depth, last 30 days, major news outlets
- search_historical: advanced depth, encyclopedic sources, news excluded

Credibility comes from trusted host patterns, falling back to the score.
"""

from typing import Any, Dict, List, Optional, Sequence

import httpx
from pydantic import ValidationError

from claim_verifier.config.settings import settings
from claim_verifier.config.source_credibility import (
    HISTORICAL_EXCLUDE_DOMAINS,
    HISTORICAL_INCLUDE_DOMAINS,
    NEWS_INCLUDE_DOMAINS,
    credibility_from_score,
)
from claim_verifier.retrieval.sources.base import BaseEvidenceSource
from claim_verifier.schemas.evidence_schema import EvidenceRecord, SourceKind

TAVILY_SEARCH_URL = "https://api.tavily.com/search"
NEWS_WINDOW_DAYS = 30


class TavilySource(BaseEvidenceSource):
    """
    Async client for the Tavily search endpoint.

    Attributes:
        api_key: Tavily API key; the source is unavailable without one
    """

    name = "tavily"

    def __init__(
        self,
        api_key: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(http_client=http_client, timeout=timeout)
        self.api_key = api_key if api_key is not None else settings.tavily_api_key

    @property
    def available(self) -> bool:
        return bool(self.api_key)

    async def search_news(self, query: str, max_results: int = 5) -> List[EvidenceRecord]:
        """Recent coverage from major news outlets."""
        return await self.search(
            query,
            max_results=max_results,
            search_depth="basic",
            topic="news",
            days=NEWS_WINDOW_DAYS,
            include_domains=NEWS_INCLUDE_DOMAINS,
            source_kind=SourceKind.WEB_CURRENT,
        )

    async def search_historical(self, query: str, max_results: int = 5) -> List[EvidenceRecord]:
        """Encyclopedic and educational sources, news sites excluded."""
        return await self.search(
            query,
            max_results=max_results,
            search_depth="advanced",
            include_domains=HISTORICAL_INCLUDE_DOMAINS,
            exclude_domains=HISTORICAL_EXCLUDE_DOMAINS,
            source_kind=SourceKind.WEB_HISTORICAL,
        )

    async def _search(
        self,
        query: str,
        max_results: int = 5,
        search_depth: str = "basic",
        topic: str = "general",
        days: Optional[int] = None,
        include_domains: Optional[List[str]] = None,
        exclude_domains: Optional[List[str]] = None,
        source_kind: SourceKind = SourceKind.WEB,
        entities: Optional[Sequence[str]] = None,
    ) -> List[EvidenceRecord]:
        if entities:
            query = f"{query} {' '.join(entities)}"

        payload: Dict[str, Any] = {
            "api_key": self.api_key,
            "query": query,
            "max_results": max_results,
            "search_depth": search_depth,
            "topic": topic,
            "include_answer": False,
            "include_raw_content": False,
            "include_images": False,
        }
        if days is not None:
            payload["days"] = days
        if include_domains:
            payload["include_domains"] = list(include_domains)
        if exclude_domains:
            payload["exclude_domains"] = list(exclude_domains)

        self.logger.debug(f"Tavily search '{query}' depth={search_depth} topic={topic}")

        async with self._client() as client:
            response = await client.post(TAVILY_SEARCH_URL, json=payload)
            response.raise_for_status()
            data = response.json()

        records: List[EvidenceRecord] = []
        for item in data.get("results", []):
            try:
                records.append(self._to_record(item, source_kind))
            except (ValidationError, TypeError, ValueError) as e:
                self.logger.warning(f"Skipping malformed Tavily result: {e}")
        return records

    @staticmethod
    def _to_record(item: Dict[str, Any], source_kind: SourceKind) -> EvidenceRecord:
        url = item.get("url") or ""
        raw_score = item.get("score")
        score = float(raw_score) if raw_score is not None else None
        return EvidenceRecord(
            title=item.get("title") or "",
            url=url,
            snippet=item.get("content") or item.get("snippet") or "",
            credibility=credibility_from_score(url, score if score is not None else 0.0),
            source_kind=source_kind,
            source="Tavily",
            relevance_score=max(0.0, min(score, 1.0)) if score is not None else None,
            published_date=item.get("published_date"),
        )
