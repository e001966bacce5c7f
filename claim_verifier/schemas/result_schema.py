"""Request and result schemas for the verification pipeline's outward contract."""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from claim_verifier.schemas.claim_schema import ClaimAnalysis
from claim_verifier.schemas.critique_schema import CritiqueIssue
from claim_verifier.schemas.evidence_schema import AgentStep, EvidenceRecord
from claim_verifier.schemas.strategy_schema import Strategy, StrategyMetadata
from claim_verifier.schemas.verdict_schema import Verdict


class VerificationRequest(BaseModel):
    """Caller input for a single verification."""

    claim: str = Field(..., description="Claim to verify")
    context: Optional[str] = Field(default=None, description="Extra context for classification")
    use_web_search: bool = True
    use_vector_search: bool = True
    force_strategy: Optional[Strategy] = Field(
        default=None, description="Bypass routing and use this strategy"
    )
    enable_critique: bool = True

    @field_validator("claim")
    @classmethod
    def claim_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Claim is required")
        return v


class SufficiencySummary(BaseModel):
    is_sufficient: bool
    score: float
    summary: str


class CritiqueSummary(BaseModel):
    is_valid: bool
    confidence: float
    summary: str
    issues: List[CritiqueIssue] = Field(default_factory=list)


class VerificationResult(Verdict):
    """Final verdict merged with the metadata that produced it."""

    claim: str
    claim_analysis: ClaimAnalysis
    strategy: StrategyMetadata
    evidence: List[EvidenceRecord] = Field(default_factory=list)
    evidence_sufficiency: SufficiencySummary
    critique: Optional[CritiqueSummary] = None
    corrected: bool = Field(
        default=False, description="Whether the critique correction pass changed the verdict"
    )
    agent_steps: List[AgentStep] = Field(default_factory=list)
    processing_time_ms: int = Field(default=0, ge=0)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
