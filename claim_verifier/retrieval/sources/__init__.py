"""Evidence sources: knowledge base, Tavily and Wikipedia."""

from claim_verifier.retrieval.sources.base import BaseEvidenceSource
from claim_verifier.retrieval.sources.knowledge_base import KnowledgeBaseSource
from claim_verifier.retrieval.sources.tavily import TavilySource
from claim_verifier.retrieval.sources.wikipedia import WikipediaSource

__all__ = ["BaseEvidenceSource", "KnowledgeBaseSource", "TavilySource", "WikipediaSource"]
