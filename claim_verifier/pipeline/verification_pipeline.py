"""End-to-end claim verification pipeline.

Stages run strictly in order, once each, for every request:

    classify -> route -> retrieve -> assess -> generate verdict -> critique/correct

Degradation policy:
- Classifier failure: continue with ClaimAnalysis.default_for(claim)
- Evidence source failure: that source contributes no evidence
- Critique failure: fail open, verdict returned uncorrected
- Verdict generation failure: fatal, VerdictGenerationError
- Retrieval over the strategy budget (when enforced): fatal, PipelineTimeoutError

Collaborators are injected; any left as None is built lazily from settings
on first use and reused for later requests.

Usage:
    from claim_verifier.pipeline import VerificationPipeline

    pipeline = VerificationPipeline()
    result = await pipeline.verify_payload({"claim": "The Eiffel Tower was completed in 1889"})
    print(result.verdict, result.confidence)
"""

import asyncio
import time
from typing import Any, Dict, Optional

import structlog
from pydantic import ValidationError

from claim_verifier.agents.claim_classifier import ClaimClassifier
from claim_verifier.agents.critique_agent import SelfCritiqueAuditor
from claim_verifier.agents.verdict_generator import VerdictGenerator
from claim_verifier.assessment.sufficiency_assessor import EvidenceSufficiencyAssessor
from claim_verifier.config.settings import settings
from claim_verifier.exceptions import (
    ClaimVerifierError,
    InvalidClaimError,
    PipelineTimeoutError,
    VerificationFailedError,
)
from claim_verifier.llm.gemini_client import GeminiClient, StructuredCompletion
from claim_verifier.retrieval.agentic_retriever import AgenticRetriever
from claim_verifier.retrieval.orchestrator import EvidenceRetrievalOrchestrator
from claim_verifier.retrieval.sources import KnowledgeBaseSource, TavilySource, WikipediaSource
from claim_verifier.retrieval.tools import build_default_tools
from claim_verifier.routing.claim_router import ClaimRouter
from claim_verifier.schemas.claim_schema import ClaimAnalysis
from claim_verifier.schemas.evidence_schema import RetrievalOutcome
from claim_verifier.schemas.result_schema import (
    CritiqueSummary,
    SufficiencySummary,
    VerificationRequest,
    VerificationResult,
)
from claim_verifier.schemas.strategy_schema import StrategyConfig
from claim_verifier.utils.logging import bind_request_context


class VerificationPipeline:
    """Single public entry point for verifying a claim."""

    def __init__(
        self,
        classifier: Optional[ClaimClassifier] = None,
        router: Optional[ClaimRouter] = None,
        retrieval: Optional[EvidenceRetrievalOrchestrator] = None,
        assessor: Optional[EvidenceSufficiencyAssessor] = None,
        verdict_generator: Optional[VerdictGenerator] = None,
        critique_auditor: Optional[SelfCritiqueAuditor] = None,
        completion: Optional[StructuredCompletion] = None,
        enforce_timeout: Optional[bool] = None,
    ) -> None:
        """Initialize VerificationPipeline.

        Args:
            classifier: Claim classifier. Lazy-initialized if None.
            router: Strategy router.
            retrieval: Evidence retrieval orchestrator. Lazy-initialized if None.
            assessor: Sufficiency assessor.
            verdict_generator: Verdict generator. Lazy-initialized if None.
            critique_auditor: Self-critique auditor. Lazy-initialized if None.
            completion: Shared structured-completion client for lazily built
                components. A GeminiClient is created if needed and omitted.
            enforce_timeout: Fail requests whose retrieval exceeds the
                strategy's timeout_ms. Defaults to settings.
        """
        self._classifier = classifier
        self._router = router or ClaimRouter()
        self._retrieval = retrieval
        self._assessor = assessor or EvidenceSufficiencyAssessor()
        self._verdict_generator = verdict_generator
        self._critique_auditor = critique_auditor
        self._completion = completion
        self._enforce_timeout = (
            settings.enforce_strategy_timeout if enforce_timeout is None else enforce_timeout
        )
        self._logger = structlog.get_logger().bind(component="VerificationPipeline")

    # ── Lazy collaborators ────────────────────────────────────────────

    def _get_completion(self) -> StructuredCompletion:
        if self._completion is None:
            self._completion = GeminiClient()
        return self._completion

    def _get_classifier(self) -> ClaimClassifier:
        if self._classifier is None:
            self._classifier = ClaimClassifier(self._get_completion())
        return self._classifier

    def _get_verdict_generator(self) -> VerdictGenerator:
        if self._verdict_generator is None:
            self._verdict_generator = VerdictGenerator(self._get_completion())
        return self._verdict_generator

    def _get_critique_auditor(self) -> SelfCritiqueAuditor:
        if self._critique_auditor is None:
            self._critique_auditor = SelfCritiqueAuditor(self._get_completion())
        return self._critique_auditor

    def _get_retrieval(self) -> EvidenceRetrievalOrchestrator:
        """Build sources from settings. Unconfigured sources stay inert."""
        if self._retrieval is None:
            knowledge_base = None
            if settings.pinecone_api_key and settings.pinecone_index_host:
                knowledge_base = KnowledgeBaseSource(embedder=self._get_completion())
            tavily = TavilySource()
            wikipedia = WikipediaSource()

            self._retrieval = EvidenceRetrievalOrchestrator(
                knowledge_base=knowledge_base,
                web_source=wikipedia,
                agentic_retriever=AgenticRetriever(
                    tools=build_default_tools(knowledge_base, tavily, wikipedia)
                ),
            )
        return self._retrieval

    # ── Entry points ──────────────────────────────────────────────────

    async def verify_payload(self, payload: Dict[str, Any]) -> VerificationResult:
        """Validate a raw request dict and verify it.

        Raises:
            InvalidClaimError: If the claim is missing/empty or a field is invalid.
        """
        try:
            request = VerificationRequest.model_validate(payload)
        except ValidationError as e:
            if any(err["loc"][:1] == ("claim",) for err in e.errors()):
                raise InvalidClaimError("Claim is required", detail=str(e)) from e
            raise InvalidClaimError("Invalid verification request", detail=str(e)) from e
        return await self.verify(request)

    async def verify_claim(self, claim: str, **options: Any) -> VerificationResult:
        """Convenience wrapper; critique is off unless enable_critique=True is passed."""
        options.setdefault("enable_critique", False)
        return await self.verify_payload({"claim": claim, **options})

    async def verify(self, request: VerificationRequest) -> VerificationResult:
        """Run the full pipeline for one claim.

        Args:
            request: Validated verification request.

        Returns:
            VerificationResult: the (possibly corrected) verdict plus metadata.

        Raises:
            ClaimVerifierError: On verdict-generation failure or timeout.
        """
        correlation_id = bind_request_context()
        started = time.perf_counter()
        claim = request.claim

        self._logger.info(
            "verification_started",
            correlation_id=correlation_id,
            claim=claim,
            force_strategy=request.force_strategy.value if request.force_strategy else None,
            enable_critique=request.enable_critique,
        )

        try:
            # 1. Classify
            analysis = await self._classify(claim, request.context)

            # 2. Route
            strategy = request.force_strategy or self._router.route(analysis)
            config = self._narrow_config(
                self._router.get_strategy_config(strategy, analysis), request
            )
            strategy_metadata = self._router.get_strategy_metadata(strategy, analysis)

            # 3. Retrieve
            outcome = await self._retrieve(claim, analysis, config, strategy.value)
            evidence = outcome.evidence

            # 4. Assess (advisory)
            assessment = self._assessor.assess(evidence, analysis)
            if not assessment.is_sufficient:
                self._logger.warning(
                    "evidence_may_be_insufficient",
                    score=round(assessment.score, 3),
                    missing=assessment.missing_aspects,
                )

            # 5. Verdict
            verdict = await self._get_verdict_generator().generate(claim, evidence)

            # 6. Critique and correct
            critique = None
            corrected = False
            if request.enable_critique:
                auditor = self._get_critique_auditor()
                critique = await auditor.critique(claim, verdict, evidence)
                verdict, corrected = auditor.apply_if_needed(verdict, critique)
        except ClaimVerifierError:
            raise
        except Exception as e:
            self._logger.error("verification_failed", error=str(e), exc_info=True)
            raise VerificationFailedError("Verification failed", detail=str(e)) from e

        processing_time_ms = int((time.perf_counter() - started) * 1000)
        self._logger.info(
            "verification_complete",
            verdict=verdict.verdict.value,
            confidence=verdict.confidence,
            strategy=strategy.value,
            evidence_count=len(evidence),
            corrected=corrected,
            processing_time_ms=processing_time_ms,
        )

        return VerificationResult(
            **verdict.model_dump(),
            claim=claim,
            claim_analysis=analysis,
            strategy=strategy_metadata,
            evidence=evidence,
            evidence_sufficiency=SufficiencySummary(
                is_sufficient=assessment.is_sufficient,
                score=assessment.score,
                summary=assessment.summary(),
            ),
            critique=(
                CritiqueSummary(
                    is_valid=critique.is_valid,
                    confidence=critique.confidence,
                    summary=critique.summary(),
                    issues=critique.issues,
                )
                if critique is not None
                else None
            ),
            corrected=corrected,
            agent_steps=outcome.agent_steps,
            processing_time_ms=processing_time_ms,
        )

    # ── Stages ────────────────────────────────────────────────────────

    async def _classify(self, claim: str, context: Optional[str]) -> ClaimAnalysis:
        try:
            return await self._get_classifier().classify(claim, context)
        except Exception as e:
            self._logger.warning("classification_failed_using_default", error=str(e))
            return ClaimAnalysis.default_for(claim)

    @staticmethod
    def _narrow_config(config: StrategyConfig, request: VerificationRequest) -> StrategyConfig:
        """Caller flags can only switch retrieval paths off, never on."""
        return config.model_copy(
            update={
                "use_web_search": config.use_web_search and request.use_web_search,
                "use_vector_search": config.use_vector_search and request.use_vector_search,
            }
        )

    async def _retrieve(
        self,
        claim: str,
        analysis: ClaimAnalysis,
        config: StrategyConfig,
        strategy_name: str,
    ) -> RetrievalOutcome:
        retrieval = self._get_retrieval().retrieve(claim, analysis, config)
        if not self._enforce_timeout:
            return await retrieval
        try:
            return await asyncio.wait_for(retrieval, timeout=config.timeout_ms / 1000)
        except asyncio.TimeoutError as e:
            self._logger.error(
                "retrieval_timed_out", strategy=strategy_name, timeout_ms=config.timeout_ms
            )
            raise PipelineTimeoutError(strategy_name, config.timeout_ms) from e
