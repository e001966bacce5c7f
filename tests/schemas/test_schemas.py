"""Tests for the pipeline's pydantic schemas.

Tests cover:
- Unknown enum values rejected at construction
- ClaimAnalysis default and immutability
- VerificationRequest claim validation and defaults
- EvidenceRecord score bounds
- SufficiencyAssessment summary format
"""

import pytest
from pydantic import ValidationError

from claim_verifier.schemas import (
    ClaimAnalysis,
    ClaimType,
    Complexity,
    EvidenceRecord,
    SourceKind,
    Strategy,
    SufficiencyAssessment,
    Temporality,
    VerificationRequest,
)


class TestClaimAnalysis:
    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ClaimAnalysis(
                type="rumor",
                entities=[],
                keywords=[],
                temporality="historical",
                complexity="simple",
            )

    def test_string_values_coerced(self) -> None:
        analysis = ClaimAnalysis(
            type="scientific",
            entities=["Water"],
            keywords=["boils"],
            temporality="timeless",
            complexity="simple",
        )
        assert analysis.type == ClaimType.SCIENTIFIC
        assert analysis.is_recent is False

    def test_default_for(self) -> None:
        analysis = ClaimAnalysis.default_for("Water boils at 100C")
        assert analysis.type == ClaimType.FACT
        assert analysis.keywords == ["Water boils at 100C"]
        assert analysis.temporality == Temporality.TIMELESS
        assert analysis.complexity == Complexity.SIMPLE
        assert analysis.entities == []

    def test_frozen(self) -> None:
        analysis = ClaimAnalysis.default_for("claim")
        with pytest.raises(ValidationError):
            analysis.type = ClaimType.OPINION


class TestVerificationRequest:
    def test_defaults(self) -> None:
        request = VerificationRequest(claim="  Water boils at 100C  ")
        assert request.claim == "Water boils at 100C"
        assert request.use_web_search is True
        assert request.use_vector_search is True
        assert request.enable_critique is True
        assert request.force_strategy is None
        assert request.context is None

    def test_blank_claim(self) -> None:
        with pytest.raises(ValidationError, match="Claim is required"):
            VerificationRequest(claim=" \n ")

    def test_force_strategy(self) -> None:
        request = VerificationRequest(claim="c", force_strategy="agentic")
        assert request.force_strategy == Strategy.AGENTIC


class TestEvidenceRecord:
    def test_score_bounds(self) -> None:
        with pytest.raises(ValidationError):
            EvidenceRecord(title="t", url="u", source_kind=SourceKind.WEB, relevance_score=1.2)

    def test_unknown_source_kind(self) -> None:
        with pytest.raises(ValidationError):
            EvidenceRecord(title="t", url="u", source_kind="satellite")


class TestSufficiencySummary:
    def test_summary_with_issues(self) -> None:
        assessment = SufficiencyAssessment(
            is_sufficient=False,
            score=0.42,
            quantity=1 / 3,
            quality=0.5,
            missing_aspects=["Only 1 source(s)", "No high-credibility sources"],
            recommendation="MORE_SOURCES_NEEDED",
        )
        assert assessment.summary() == (
            "Sources: 1/3 (33%) | Quality: 50% | Overall: 42% | MORE_SOURCES_NEEDED"
            "\nIssues: Only 1 source(s); No high-credibility sources"
        )
