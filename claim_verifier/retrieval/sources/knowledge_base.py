"""Knowledge base search over previously verified claims in Pinecone.

The query text is embedded with the injected embedder (Gemini embeddings)
and sent to the Pinecone data-plane REST endpoint. Each match's metadata
holds the stored claim, its explanation and its verdict.
"""

from typing import Any, Dict, List, Optional, Protocol, Sequence

import httpx

from claim_verifier.config.settings import settings
from claim_verifier.retrieval.sources.base import BaseEvidenceSource
from claim_verifier.schemas.evidence_schema import (
    KNOWLEDGE_BASE_URL,
    Credibility,
    EvidenceRecord,
    SourceKind,
)


class Embedder(Protocol):
    async def embed(self, text: str) -> Sequence[float]:
        ...


class KnowledgeBaseSource(BaseEvidenceSource):
    """
    Vector search against the verified-claims index.

    Attributes:
        api_key: Pinecone API key
        index_host: Pinecone index host URL
        namespace: Namespace holding verified claims
    """

    name = "knowledge_base"

    def __init__(
        self,
        embedder: Optional[Embedder],
        api_key: Optional[str] = None,
        index_host: Optional[str] = None,
        namespace: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(http_client=http_client, timeout=timeout)
        self.embedder = embedder
        self.api_key = api_key if api_key is not None else settings.pinecone_api_key
        host = index_host if index_host is not None else settings.pinecone_index_host
        if host and not host.startswith("http"):
            host = f"https://{host}"
        self.index_host = host.rstrip("/")
        self.namespace = namespace or settings.pinecone_namespace

    @property
    def available(self) -> bool:
        return bool(self.api_key and self.index_host and self.embedder is not None)

    async def _search(self, query: str, limit: int = 5) -> List[EvidenceRecord]:
        vector = list(await self.embedder.embed(query))

        async with self._client() as client:
            response = await client.post(
                f"{self.index_host}/query",
                headers={"Api-Key": self.api_key},
                json={
                    "vector": vector,
                    "topK": limit,
                    "includeMetadata": True,
                    "namespace": self.namespace,
                },
            )
            response.raise_for_status()
            matches = response.json().get("matches", [])

        return [self._to_record(match) for match in matches]

    @staticmethod
    def _to_record(match: Dict[str, Any]) -> EvidenceRecord:
        metadata = match.get("metadata") or {}
        score = match.get("score")
        credibility = str(metadata.get("credibility") or Credibility.HIGH.value).lower()
        if credibility not in Credibility._value2member_map_:
            credibility = Credibility.UNKNOWN.value
        return EvidenceRecord(
            title=f"KB: {metadata.get('claim') or 'Fact'}",
            url=metadata.get("source") or KNOWLEDGE_BASE_URL,
            snippet=metadata.get("explanation") or metadata.get("text") or "",
            credibility=credibility,
            source_kind=SourceKind.VECTOR,
            source="Knowledge Base",
            relevance_score=max(0.0, min(float(score), 1.0)) if score is not None else None,
            related_verdict=metadata.get("verdict"),
        )
