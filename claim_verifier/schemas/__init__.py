"""Pydantic schemas for claims, evidence, strategies, verdicts and critiques."""

from claim_verifier.schemas.assessment_schema import SufficiencyAssessment
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
    KNOWLEDGE_BASE_URL,
    AgentState,
    AgentStep,
    Credibility,
    EvidenceRecord,
    RetrievalOutcome,
    SourceKind,
)
from claim_verifier.schemas.result_schema import (
    CritiqueSummary,
    SufficiencySummary,
    VerificationRequest,
    VerificationResult,
)
from claim_verifier.schemas.strategy_schema import (
    Strategy,
    StrategyConfig,
    StrategyMetadata,
)
from claim_verifier.schemas.verdict_schema import (
    Citation,
    CitationDraft,
    Verdict,
    VerdictDraft,
    VerdictLabel,
)

__all__ = [
    "AgentState",
    "AgentStep",
    "Citation",
    "CitationDraft",
    "ClaimAnalysis",
    "ClaimType",
    "Complexity",
    "Credibility",
    "CritiqueIssue",
    "CritiqueResult",
    "CritiqueSummary",
    "EvidenceRecord",
    "IssueSeverity",
    "IssueType",
    "KNOWLEDGE_BASE_URL",
    "RetrievalOutcome",
    "SourceKind",
    "Strategy",
    "StrategyConfig",
    "StrategyMetadata",
    "SufficiencyAssessment",
    "SufficiencySummary",
    "Temporality",
    "VerificationRequest",
    "VerificationResult",
    "Verdict",
    "VerdictDraft",
    "VerdictLabel",
]
