"""Evidence sufficiency assessment before verdict generation.

Scores a retrieved evidence set on four dimensions and combines them:

    quality = 0.4*credibility + 0.3*relevance + 0.15*diversity + 0.15*coverage
    score   = 0.3*quantity + 0.7*quality

Evidence is sufficient when there are at least two sources and both score
and quality reach 0.6. The assessment is advisory: the pipeline logs and
surfaces it, but verdict generation runs regardless.

Usage:
    from claim_verifier.assessment.sufficiency_assessor import EvidenceSufficiencyAssessor

    assessor = EvidenceSufficiencyAssessor()
    assessment = assessor.assess(evidence, analysis)
    print(assessment.summary())
"""

from statistics import mean
from typing import List, Sequence

import structlog

from claim_verifier.config.source_credibility import CREDIBILITY_WEIGHTS
from claim_verifier.schemas.assessment_schema import SufficiencyAssessment
from claim_verifier.schemas.claim_schema import ClaimAnalysis, Complexity, Temporality
from claim_verifier.schemas.evidence_schema import Credibility, EvidenceRecord, SourceKind

TARGET_SOURCE_COUNT = 3
MIN_SOURCE_COUNT = 2
SUFFICIENCY_THRESHOLD = 0.6
QUALITY_THRESHOLD = 0.6
DETAILED_SNIPPET_LENGTH = 200
BRIEF_SNIPPET_LENGTH = 50
TARGET_SOURCE_KINDS = 2
MIN_ENTITY_COVERAGE = 0.5

QUALITY_WEIGHTS = {
    "credibility": 0.4,
    "relevance": 0.3,
    "diversity": 0.15,
    "coverage": 0.15,
}
QUANTITY_WEIGHT = 0.3
QUALITY_WEIGHT = 0.7

RECOMMEND_SUFFICIENT = "SUFFICIENT - Proceed with verification"
RECOMMEND_MORE_SOURCES = "INSUFFICIENT - Need more sources"
RECOMMEND_LOW_QUALITY = "INSUFFICIENT - Evidence quality too low"
RECOMMEND_MARGINAL = "MARGINAL - Verification possible but uncertain"
RECOMMEND_NO_EVIDENCE = "NOT_ENOUGH_EVIDENCE — No sources available"

TIME_SENSITIVE = frozenset({Temporality.CURRENT, Temporality.RECENT})
RECENT_WEB_KINDS = frozenset({SourceKind.WEB, SourceKind.WEB_CURRENT})


def _clamp(value: float) -> float:
    return max(0.0, min(value, 1.0))


class EvidenceSufficiencyAssessor:
    """Decide whether evidence supports a confident verdict.

    Stateless; assess() is a pure function of its arguments.
    """

    def __init__(self) -> None:
        self._logger = structlog.get_logger().bind(component="EvidenceSufficiencyAssessor")

    def assess(
        self,
        evidence: Sequence[EvidenceRecord],
        analysis: ClaimAnalysis,
    ) -> SufficiencyAssessment:
        """Score an evidence set against a claim's analysis.

        Args:
            evidence: Ranked evidence records.
            analysis: Classifier metadata for the claim.

        Returns:
            SufficiencyAssessment with sub-scores, missing aspects and a
            recommendation string.
        """
        count = len(evidence)
        if count == 0:
            self._logger.info("evidence_assessed", source_count=0, is_sufficient=False)
            return SufficiencyAssessment(
                is_sufficient=False,
                score=0.0,
                missing_aspects=["No evidence sources found"],
                recommendation=RECOMMEND_NO_EVIDENCE,
            )

        quantity = _clamp(count / TARGET_SOURCE_COUNT)
        credibility = _clamp(self.credibility_score(evidence))
        average_length = mean(len(e.snippet) for e in evidence)
        relevance = _clamp(average_length / DETAILED_SNIPPET_LENGTH)
        source_kinds = {e.source_kind for e in evidence}
        diversity = _clamp(len(source_kinds) / TARGET_SOURCE_KINDS)
        coverage = self.entity_coverage(evidence, analysis)

        quality = _clamp(
            QUALITY_WEIGHTS["credibility"] * credibility
            + QUALITY_WEIGHTS["relevance"] * relevance
            + QUALITY_WEIGHTS["diversity"] * diversity
            + QUALITY_WEIGHTS["coverage"] * coverage
        )
        score = _clamp(QUANTITY_WEIGHT * quantity + QUALITY_WEIGHT * quality)

        is_sufficient = (
            count >= MIN_SOURCE_COUNT
            and score >= SUFFICIENCY_THRESHOLD
            and quality >= QUALITY_THRESHOLD
        )

        missing: List[str] = []
        if count < TARGET_SOURCE_COUNT:
            missing.append(f"Only {count} source(s) found, recommend {TARGET_SOURCE_COUNT}+")
        if not any(e.credibility == Credibility.HIGH for e in evidence):
            missing.append("No high-credibility sources found")
        if average_length < BRIEF_SNIPPET_LENGTH:
            missing.append("Evidence snippets are too brief/vague")
        if len(source_kinds) == 1:
            missing.append("Evidence from only one source type - consider diversifying")
        if coverage < MIN_ENTITY_COVERAGE:
            missing.append("Evidence does not cover all key entities in the claim")
        if analysis.temporality in TIME_SENSITIVE and not any(
            e.source_kind in RECENT_WEB_KINDS for e in evidence
        ):
            missing.append("No recent web sources for time-sensitive claim")

        if is_sufficient:
            recommendation = RECOMMEND_SUFFICIENT
        elif count < MIN_SOURCE_COUNT:
            recommendation = RECOMMEND_MORE_SOURCES
        elif quality < QUALITY_THRESHOLD:
            recommendation = RECOMMEND_LOW_QUALITY
        else:
            recommendation = RECOMMEND_MARGINAL

        self._logger.info(
            "evidence_assessed",
            source_count=count,
            score=round(score, 3),
            quality=round(quality, 3),
            is_sufficient=is_sufficient,
        )

        return SufficiencyAssessment(
            is_sufficient=is_sufficient,
            score=score,
            quantity=quantity,
            quality=quality,
            relevance=relevance,
            credibility=credibility,
            missing_aspects=missing,
            recommendation=recommendation,
        )

    @staticmethod
    def credibility_score(evidence: Sequence[EvidenceRecord]) -> float:
        """Mean credibility weight; 0.0 for an empty set."""
        if not evidence:
            return 0.0
        return mean(
            CREDIBILITY_WEIGHTS.get(e.credibility.value, CREDIBILITY_WEIGHTS["unknown"])
            for e in evidence
        )

    @staticmethod
    def entity_coverage(
        evidence: Sequence[EvidenceRecord], analysis: ClaimAnalysis
    ) -> float:
        """Fraction of entities mentioned in any snippet or title.

        Only complex claims are checked; everything else covers fully.
        """
        if analysis.complexity != Complexity.COMPLEX or not analysis.entities:
            return 1.0

        haystacks = [f"{e.snippet}\n{e.title}".lower() for e in evidence]
        covered = sum(
            1
            for entity in analysis.entities
            if any(entity.lower() in text for text in haystacks)
        )
        return covered / len(analysis.entities)
