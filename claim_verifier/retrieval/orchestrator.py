"""Evidence retrieval orchestration per verification strategy.

SIMPLE and HYBRID strategies fan out to the knowledge base and the web
source concurrently; AGENTIC delegates to the AgenticRetriever loop. All
paths then share the same finishing steps:

1. Deduplicate on ``url + "::" + snippet[:100]`` keeping first occurrences
2. Stable sort: knowledge base (vector) records first, then by relevance
   score (or 0.8 for high credibility, 0.5 otherwise) descending
3. Truncate to the strategy's max_sources

Usage:
    from claim_verifier.retrieval.orchestrator import EvidenceRetrievalOrchestrator

    orchestrator = EvidenceRetrievalOrchestrator(knowledge_base=kb, web_source=wiki)
    outcome = await orchestrator.retrieve(claim, analysis, config)
"""

import asyncio
from typing import Awaitable, Iterable, List, Optional

import structlog

from claim_verifier.config.source_credibility import RANK_SCORE_DEFAULT, RANK_SCORE_HIGH
from claim_verifier.retrieval.agentic_retriever import AgenticRetriever
from claim_verifier.retrieval.sources.base import BaseEvidenceSource
from claim_verifier.schemas.claim_schema import ClaimAnalysis
from claim_verifier.schemas.evidence_schema import (
    Credibility,
    EvidenceRecord,
    RetrievalOutcome,
    SourceKind,
)
from claim_verifier.schemas.strategy_schema import StrategyConfig

KB_SEARCH_LIMIT = 5


def deduplicate_evidence(records: Iterable[EvidenceRecord]) -> List[EvidenceRecord]:
    """Drop records whose dedup key was already seen, preserving order."""
    seen = set()
    unique: List[EvidenceRecord] = []
    for record in records:
        key = record.dedup_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique


def rank_score(record: EvidenceRecord) -> float:
    if record.relevance_score is not None:
        return record.relevance_score
    return RANK_SCORE_HIGH if record.credibility == Credibility.HIGH else RANK_SCORE_DEFAULT


def rank_evidence(
    records: Iterable[EvidenceRecord], max_sources: Optional[int] = None
) -> List[EvidenceRecord]:
    """Vector records first, then by rank score descending; ties keep order."""
    ranked = sorted(
        records,
        key=lambda r: (r.source_kind != SourceKind.VECTOR, -rank_score(r)),
    )
    return ranked[:max_sources] if max_sources is not None else ranked


class EvidenceRetrievalOrchestrator:
    """Collect, deduplicate and rank evidence for a claim.

    Every collaborator is optional: a missing knowledge base or web source
    simply contributes no evidence.
    """

    def __init__(
        self,
        knowledge_base: Optional[BaseEvidenceSource] = None,
        web_source: Optional[BaseEvidenceSource] = None,
        agentic_retriever: Optional[AgenticRetriever] = None,
    ) -> None:
        self._knowledge_base = knowledge_base
        self._web_source = web_source
        self._agentic_retriever = agentic_retriever
        self._logger = structlog.get_logger().bind(component="EvidenceRetrievalOrchestrator")

    async def retrieve(
        self,
        claim: str,
        analysis: ClaimAnalysis,
        config: StrategyConfig,
    ) -> RetrievalOutcome:
        """Gather evidence according to the strategy config.

        Args:
            claim: Claim text used as the search query.
            analysis: Claim analysis (entities, temporality).
            config: Strategy config, already narrowed by caller flags.

        Returns:
            RetrievalOutcome with finalized evidence and any agent steps.
        """
        if config.use_agent and self._agentic_retriever is not None:
            outcome = await self._agentic_retriever.run(
                claim,
                analysis,
                max_iterations=config.max_iterations,
                use_vector_search=config.use_vector_search,
                use_web_search=config.use_web_search,
            )
        else:
            outcome = RetrievalOutcome(evidence=await self._fan_out(claim, analysis, config))

        collected = len(outcome.evidence)
        finalized = rank_evidence(deduplicate_evidence(outcome.evidence), config.max_sources)

        self._logger.info(
            "evidence_retrieved",
            strategy=config.name,
            collected=collected,
            returned=len(finalized),
        )
        return outcome.model_copy(update={"evidence": finalized})

    async def _fan_out(
        self,
        claim: str,
        analysis: ClaimAnalysis,
        config: StrategyConfig,
    ) -> List[EvidenceRecord]:
        calls: List[Awaitable[List[EvidenceRecord]]] = []

        if config.use_vector_search and self._knowledge_base is not None:
            calls.append(
                self._guarded(
                    "knowledge_base",
                    self._knowledge_base.search(claim, limit=KB_SEARCH_LIMIT),
                )
            )
        if config.use_web_search and self._web_source is not None:
            calls.append(
                self._guarded(
                    "web",
                    self._web_source.search(claim, entities=list(analysis.entities)),
                )
            )

        results = await asyncio.gather(*calls)
        return [record for batch in results for record in batch]

    async def _guarded(
        self, source_name: str, call: Awaitable[List[EvidenceRecord]]
    ) -> List[EvidenceRecord]:
        try:
            return await call
        except Exception as e:
            self._logger.warning("evidence_source_failed", source=source_name, error=str(e))
            return []
