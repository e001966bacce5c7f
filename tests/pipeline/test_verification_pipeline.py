"""Tests for VerificationPipeline end to end with fake collaborators.

Tests cover:
- Full flow: classify -> route -> retrieve -> assess -> verdict -> critique
- Classifier failure degrading to the default analysis
- force_strategy, caller flag narrowing
- Critique correction applied and flagged, critique disabled
- verify_claim defaults and verify_payload validation
- Fatal errors: verdict generation, unexpected failures, retrieval timeout
"""

import asyncio
from typing import Any, Dict, List, Optional, Type
from unittest.mock import AsyncMock

import pytest
from pydantic import BaseModel

from claim_verifier.agents.claim_classifier import ClaimClassifier
from claim_verifier.agents.critique_agent import SelfCritiqueAuditor
from claim_verifier.agents.verdict_generator import VerdictGenerator
from claim_verifier.exceptions import (
    InvalidClaimError,
    PipelineTimeoutError,
    VerdictGenerationError,
    VerificationFailedError,
)
from claim_verifier.pipeline import VerificationPipeline
from claim_verifier.routing.claim_router import STRATEGY_CONFIGS
from claim_verifier.schemas.claim_schema import (
    ClaimAnalysis,
    ClaimType,
    Complexity,
    Temporality,
)
from claim_verifier.schemas.critique_schema import (
    CritiqueIssue,
    CritiqueResult,
    IssueSeverity,
    IssueType,
)
from claim_verifier.schemas.evidence_schema import (
    AgentStep,
    Credibility,
    EvidenceRecord,
    RetrievalOutcome,
    SourceKind,
)
from claim_verifier.schemas.strategy_schema import Strategy
from claim_verifier.schemas.verdict_schema import CitationDraft, VerdictDraft, VerdictLabel


# ── Fakes ────────────────────────────────────────────────────────────────


class _FakeCompletion:
    """Structured completion returning a canned response per schema."""

    def __init__(self, responses: Dict[Type[BaseModel], Any]) -> None:
        self.responses = responses
        self.calls: List[Type[BaseModel]] = []

    async def complete_structured(self, prompt: str, schema, temperature: float = 0.2):
        self.calls.append(schema)
        response = self.responses[schema]
        if isinstance(response, Exception):
            raise response
        return response


EIFFEL_CLAIM = "The Eiffel Tower was completed in 1889"

EIFFEL_ANALYSIS = ClaimAnalysis(
    type=ClaimType.HISTORICAL,
    entities=["Eiffel Tower"],
    keywords=["Eiffel Tower", "1889"],
    temporality=Temporality.HISTORICAL,
    complexity=Complexity.SIMPLE,
)

EIFFEL_EVIDENCE = [
    EvidenceRecord(
        title="KB: The Eiffel Tower was completed in 1889",
        url="internal://knowledge-base",
        snippet="Construction of the Eiffel Tower finished in March 1889." * 2,
        credibility=Credibility.HIGH,
        source_kind=SourceKind.VECTOR,
        relevance_score=0.93,
        related_verdict="TRUE",
    )
]

EIFFEL_DRAFT = VerdictDraft(
    verdict=VerdictLabel.TRUE,
    confidence=0.95,
    reasoning="The tower was finished in March 1889 [1].",
    citations=[
        CitationDraft(
            index=1,
            title="KB: The Eiffel Tower was completed in 1889",
            url="internal://knowledge-base",
            relevance="States the completion date",
        )
    ],
)

VALID_CRITIQUE = CritiqueResult(is_valid=True, confidence=0.9, overall_assessment="Sound")


def _make_retrieval(outcome: Optional[RetrievalOutcome] = None) -> AsyncMock:
    retrieval = AsyncMock()
    retrieval.retrieve = AsyncMock(
        return_value=outcome or RetrievalOutcome(evidence=list(EIFFEL_EVIDENCE))
    )
    return retrieval


def _make_pipeline(
    analysis: Any = EIFFEL_ANALYSIS,
    draft: Any = EIFFEL_DRAFT,
    critique: Any = VALID_CRITIQUE,
    retrieval: Optional[AsyncMock] = None,
    enforce_timeout: bool = False,
):
    completion = _FakeCompletion(
        {ClaimAnalysis: analysis, VerdictDraft: draft, CritiqueResult: critique}
    )
    pipeline = VerificationPipeline(
        classifier=ClaimClassifier(completion),
        retrieval=retrieval or _make_retrieval(),
        verdict_generator=VerdictGenerator(completion),
        critique_auditor=SelfCritiqueAuditor(completion),
        completion=completion,
        enforce_timeout=enforce_timeout,
    )
    return pipeline, completion


# ── Happy path ───────────────────────────────────────────────────────────


class TestFullFlow:
    @pytest.mark.asyncio
    async def test_simple_historical_claim(self) -> None:
        retrieval = _make_retrieval()
        pipeline, completion = _make_pipeline(retrieval=retrieval)

        result = await pipeline.verify_payload({"claim": EIFFEL_CLAIM})

        assert result.verdict == VerdictLabel.TRUE
        assert result.confidence == 0.95
        assert result.claim == EIFFEL_CLAIM
        assert result.claim_analysis == EIFFEL_ANALYSIS
        assert result.strategy.strategy == Strategy.SIMPLE
        assert result.strategy.estimated_time == "5s"
        assert result.citations[0].snippet == EIFFEL_EVIDENCE[0].snippet
        assert result.evidence == EIFFEL_EVIDENCE
        assert result.critique is not None
        assert result.critique.summary == "Valid (confidence: 90%)"
        assert result.corrected is False
        assert result.agent_steps == []
        assert result.processing_time_ms >= 0
        assert completion.calls == [ClaimAnalysis, VerdictDraft, CritiqueResult]

        config = retrieval.retrieve.call_args[0][2]
        assert config.name == "Simple"
        assert config.prioritize_knowledge_base is True

    @pytest.mark.asyncio
    async def test_sufficiency_summary_attached(self) -> None:
        pipeline, _ = _make_pipeline()
        result = await pipeline.verify_payload({"claim": EIFFEL_CLAIM})
        assert result.evidence_sufficiency.summary.startswith("Sources: 1/3")
        assert result.evidence_sufficiency.is_sufficient is False

    @pytest.mark.asyncio
    async def test_agent_steps_surface_in_result(self) -> None:
        steps = [AgentStep(step=1, tool="search_knowledge_base", success=True, result_count=1)]
        retrieval = _make_retrieval(
            RetrievalOutcome(evidence=list(EIFFEL_EVIDENCE), agent_steps=steps)
        )
        pipeline, _ = _make_pipeline(retrieval=retrieval)

        result = await pipeline.verify_payload(
            {"claim": EIFFEL_CLAIM, "force_strategy": "agentic"}
        )

        assert result.strategy.strategy == Strategy.AGENTIC
        assert result.agent_steps == steps
        assert retrieval.retrieve.call_args[0][2].use_agent is True


# ── Degradation ──────────────────────────────────────────────────────────


class TestDegradation:
    @pytest.mark.asyncio
    async def test_classifier_failure_uses_default_analysis(self) -> None:
        pipeline, _ = _make_pipeline(analysis=RuntimeError("quota"))

        result = await pipeline.verify_payload({"claim": EIFFEL_CLAIM})

        assert result.claim_analysis == ClaimAnalysis.default_for(EIFFEL_CLAIM)
        assert result.strategy.strategy == Strategy.SIMPLE

    @pytest.mark.asyncio
    async def test_critique_failure_fails_open(self) -> None:
        pipeline, _ = _make_pipeline(critique=RuntimeError("timeout"))

        result = await pipeline.verify_payload({"claim": EIFFEL_CLAIM})

        assert result.verdict == VerdictLabel.TRUE
        assert result.critique.is_valid is True
        assert result.corrected is False

    @pytest.mark.asyncio
    async def test_empty_evidence_still_produces_verdict(self) -> None:
        draft = VerdictDraft(
            verdict=VerdictLabel.NOT_ENOUGH_EVIDENCE,
            confidence=0.1,
            reasoning="No sources.",
        )
        pipeline, _ = _make_pipeline(
            draft=draft, retrieval=_make_retrieval(RetrievalOutcome())
        )

        result = await pipeline.verify_payload({"claim": EIFFEL_CLAIM})

        assert result.verdict == VerdictLabel.NOT_ENOUGH_EVIDENCE
        assert result.evidence_sufficiency.score == 0.0


# ── Options ──────────────────────────────────────────────────────────────


class TestOptions:
    @pytest.mark.asyncio
    async def test_force_strategy_overrides_router(self) -> None:
        retrieval = _make_retrieval()
        pipeline, _ = _make_pipeline(retrieval=retrieval)

        result = await pipeline.verify_payload({"claim": EIFFEL_CLAIM, "force_strategy": "hybrid"})

        assert result.strategy.strategy == Strategy.HYBRID
        assert retrieval.retrieve.call_args[0][2].max_sources == 8

    @pytest.mark.asyncio
    async def test_caller_flags_only_disable(self) -> None:
        retrieval = _make_retrieval()
        pipeline, _ = _make_pipeline(retrieval=retrieval)

        await pipeline.verify_payload(
            {"claim": EIFFEL_CLAIM, "force_strategy": "hybrid", "use_web_search": False}
        )
        config = retrieval.retrieve.call_args[0][2]
        assert config.use_web_search is False
        assert config.use_vector_search is True

        await pipeline.verify_payload({"claim": EIFFEL_CLAIM, "use_web_search": True})
        assert retrieval.retrieve.call_args[0][2].use_web_search is False

    @pytest.mark.asyncio
    async def test_critique_disabled(self) -> None:
        pipeline, completion = _make_pipeline()

        result = await pipeline.verify_payload({"claim": EIFFEL_CLAIM, "enable_critique": False})

        assert result.critique is None
        assert CritiqueResult not in completion.calls

    @pytest.mark.asyncio
    async def test_verify_claim_defaults_to_no_critique(self) -> None:
        pipeline, completion = _make_pipeline()

        result = await pipeline.verify_claim(EIFFEL_CLAIM)

        assert result.critique is None
        assert completion.calls == [ClaimAnalysis, VerdictDraft]

    @pytest.mark.asyncio
    async def test_verify_claim_can_enable_critique(self) -> None:
        pipeline, _ = _make_pipeline()
        result = await pipeline.verify_claim(EIFFEL_CLAIM, enable_critique=True)
        assert result.critique is not None

    @pytest.mark.asyncio
    async def test_context_reaches_classifier_prompt(self) -> None:
        classifier = AsyncMock()
        classifier.classify = AsyncMock(return_value=EIFFEL_ANALYSIS)
        pipeline, _ = _make_pipeline()
        pipeline._classifier = classifier

        await pipeline.verify_payload({"claim": EIFFEL_CLAIM, "context": "From a tour guide"})

        classifier.classify.assert_awaited_once_with(EIFFEL_CLAIM, "From a tour guide")


# ── Correction ───────────────────────────────────────────────────────────


class TestCorrection:
    @pytest.mark.asyncio
    async def test_critical_issue_applies_correction(self) -> None:
        critique = CritiqueResult(
            is_valid=False,
            confidence=0.8,
            issues=[
                CritiqueIssue(
                    type=IssueType.CONFIDENCE_MISCALIBRATED,
                    severity=IssueSeverity.CRITICAL,
                    description="Confidence too high given a single source",
                )
            ],
            overall_assessment="Overconfident",
        )
        pipeline, _ = _make_pipeline(critique=critique)

        result = await pipeline.verify_payload({"claim": EIFFEL_CLAIM})

        assert result.corrected is True
        assert result.confidence == pytest.approx(0.75)
        assert result.critique.summary == "Issues: 1 critical | Overconfident"
        assert result.critique.issues[0].type == IssueType.CONFIDENCE_MISCALIBRATED


# ── Errors ───────────────────────────────────────────────────────────────


class TestErrors:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{"claim": ""}, {"claim": "   "}, {}])
    async def test_missing_claim(self, payload: Dict[str, Any]) -> None:
        pipeline, completion = _make_pipeline()

        with pytest.raises(InvalidClaimError) as exc_info:
            await pipeline.verify_payload(payload)

        assert exc_info.value.message == "Claim is required"
        assert exc_info.value.category == "invalid_input"
        assert completion.calls == []

    @pytest.mark.asyncio
    async def test_invalid_strategy(self) -> None:
        pipeline, _ = _make_pipeline()
        with pytest.raises(InvalidClaimError, match="Invalid verification request"):
            await pipeline.verify_payload({"claim": EIFFEL_CLAIM, "force_strategy": "exhaustive"})

    @pytest.mark.asyncio
    async def test_verdict_failure_is_fatal(self) -> None:
        pipeline, _ = _make_pipeline(draft=ValueError("unparseable"))

        with pytest.raises(VerdictGenerationError) as exc_info:
            await pipeline.verify_payload({"claim": EIFFEL_CLAIM})

        assert exc_info.value.to_dict()["error"] == "Verification failed"
        assert exc_info.value.to_dict()["details"] == "unparseable"

    @pytest.mark.asyncio
    async def test_unexpected_error_wrapped(self) -> None:
        retrieval = AsyncMock()
        retrieval.retrieve = AsyncMock(side_effect=KeyError("boom"))
        pipeline, _ = _make_pipeline(retrieval=retrieval)

        with pytest.raises(VerificationFailedError) as exc_info:
            await pipeline.verify_payload({"claim": EIFFEL_CLAIM})

        assert exc_info.value.category == "verification_failed"

    @pytest.mark.asyncio
    async def test_retrieval_timeout(self, monkeypatch) -> None:
        monkeypatch.setitem(
            STRATEGY_CONFIGS,
            Strategy.SIMPLE,
            STRATEGY_CONFIGS[Strategy.SIMPLE].model_copy(update={"timeout_ms": 10}),
        )

        async def _slow_retrieve(*args, **kwargs):
            await asyncio.sleep(1.0)
            return RetrievalOutcome()

        retrieval = AsyncMock()
        retrieval.retrieve = _slow_retrieve
        pipeline, _ = _make_pipeline(retrieval=retrieval, enforce_timeout=True)

        with pytest.raises(PipelineTimeoutError) as exc_info:
            await pipeline.verify_payload({"claim": EIFFEL_CLAIM})

        assert exc_info.value.category == "timeout"
