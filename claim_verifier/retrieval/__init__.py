"""Evidence retrieval: sources, tools, the agentic loop and the orchestrator."""

from claim_verifier.retrieval.agentic_retriever import AgenticRetriever
from claim_verifier.retrieval.orchestrator import (
    EvidenceRetrievalOrchestrator,
    deduplicate_evidence,
    rank_evidence,
)
from claim_verifier.retrieval.tools import RetrievalTool, build_default_tools

__all__ = [
    "AgenticRetriever",
    "EvidenceRetrievalOrchestrator",
    "RetrievalTool",
    "build_default_tools",
    "deduplicate_evidence",
    "rank_evidence",
]
