"""Self-critique auditor for generated verdicts.

A second, low-temperature completion reviews the verdict against the
evidence for citation validity, reasoning coherence, verdict support,
confidence calibration and hallucinated sources.

The auditor fails open: if the critique call itself fails, it returns a
permissive CritiqueResult so its own infrastructure never blocks a
verification.

Correction is a single deterministic local pass, applied only when the
critique is invalid AND reports at least one critical issue:
- confidence_miscalibrated: "too high" lowers confidence by 0.2 (floor 0.3),
  "too low" raises it by 0.2 (cap 0.9), both from the original confidence
- verdict_unsupported: verdict becomes NOT_ENOUGH_EVIDENCE, reasoning gets a note
- hallucination: citations whose title appears in the description are dropped
Only critical issues are acted on. Citation indices are never renumbered.

Usage:
    from claim_verifier.agents.critique_agent import SelfCritiqueAuditor

    auditor = SelfCritiqueAuditor(completion=gemini_client)
    critique = await auditor.critique(claim, verdict, evidence)
    verdict, corrected = auditor.apply_if_needed(verdict, critique)
"""

import json
from typing import Sequence, Tuple

import structlog

from claim_verifier.config.prompts import CRITIQUE_PROMPT, NO_CRITIQUE_EVIDENCE_TEXT
from claim_verifier.llm.gemini_client import StructuredCompletion
from claim_verifier.schemas.critique_schema import (
    CritiqueResult,
    IssueSeverity,
    IssueType,
)
from claim_verifier.schemas.evidence_schema import EvidenceRecord
from claim_verifier.schemas.verdict_schema import Verdict, VerdictLabel

CRITIQUE_TEMPERATURE = 0.1

CONFIDENCE_STEP = 0.2
CONFIDENCE_FLOOR = 0.3
CONFIDENCE_CAP = 0.9

UNSUPPORTED_NOTE = " [Note: Verdict adjusted due to insufficient evidence support]"
FAIL_OPEN_SUGGESTION = "Critique agent failed — proceeding with original result"
FAIL_OPEN_ASSESSMENT = "Unable to perform critique due to error"


def fail_open_critique() -> CritiqueResult:
    """Permissive result used when the critique call fails."""
    return CritiqueResult(
        is_valid=True,
        confidence=0.5,
        issues=[],
        suggestions=[FAIL_OPEN_SUGGESTION],
        overall_assessment=FAIL_OPEN_ASSESSMENT,
    )


def mentions_citation_title(description: str, title: str) -> bool:
    """True if an issue description names the citation's title.

    Plain substring match; empty titles never match.
    """
    return bool(title) and title in description


def format_evidence_for_critique(evidence: Sequence[EvidenceRecord]) -> str:
    if not evidence:
        return NO_CRITIQUE_EVIDENCE_TEXT

    blocks = []
    for position, record in enumerate(evidence, start=1):
        blocks.append(
            f"[{position}] {record.title or 'Untitled'}\n"
            f"    URL: {record.url or 'No URL'}\n"
            f"    Snippet: {record.snippet or 'No snippet'}\n"
            f"    Credibility: {record.credibility.value}\n"
            f"    Source: {record.source or record.source_kind.value}"
        )
    return "\n\n".join(blocks)


class SelfCritiqueAuditor:
    """Audit a verdict and apply at most one bounded correction."""

    def __init__(
        self,
        completion: StructuredCompletion,
        temperature: float = CRITIQUE_TEMPERATURE,
    ) -> None:
        self._completion = completion
        self._temperature = temperature
        self._logger = structlog.get_logger().bind(component="SelfCritiqueAuditor")

    def build_prompt(
        self, claim: str, verdict: Verdict, evidence: Sequence[EvidenceRecord]
    ) -> str:
        citations = json.dumps(
            [c.model_dump(mode="json") for c in verdict.citations], indent=2
        )
        return CRITIQUE_PROMPT.format(
            claim=claim,
            verdict=verdict.verdict.value,
            confidence=verdict.confidence,
            reasoning=verdict.reasoning,
            citations=citations,
            evidence=format_evidence_for_critique(evidence),
        )

    async def critique(
        self,
        claim: str,
        verdict: Verdict,
        evidence: Sequence[EvidenceRecord],
    ) -> CritiqueResult:
        """Audit a verdict against its evidence.

        Args:
            claim: Claim text.
            verdict: Verdict under review.
            evidence: The exact evidence list the verdict was generated from.

        Returns:
            CritiqueResult from the model, or the fail-open default on error.
        """
        try:
            result = await self._completion.complete_structured(
                self.build_prompt(claim, verdict, evidence),
                CritiqueResult,
                temperature=self._temperature,
            )
        except Exception as e:
            self._logger.warning("critique_failed_open", error=str(e))
            return fail_open_critique()

        if result.is_valid:
            self._logger.info("critique_passed", confidence=result.confidence)
        else:
            self._logger.info(
                "critique_found_issues",
                issues=[f"{i.severity.value}:{i.type.value}" for i in result.issues],
            )
        return result

    @staticmethod
    def should_regenerate(critique: CritiqueResult) -> bool:
        """True iff the critique is invalid and reports a critical issue."""
        return not critique.is_valid and critique.has_critical_issues()

    def correct(self, verdict: Verdict, critique: CritiqueResult) -> Verdict:
        """Apply deterministic fixes for critical issues.

        Args:
            verdict: Original verdict (left unchanged).
            critique: Critique driving the fixes.

        Returns:
            A corrected copy of the verdict.
        """
        original_confidence = verdict.confidence
        confidence = verdict.confidence
        label = verdict.verdict
        reasoning = verdict.reasoning
        citations = list(verdict.citations)

        for issue in critique.issues:
            if issue.severity != IssueSeverity.CRITICAL:
                continue

            if issue.type == IssueType.CONFIDENCE_MISCALIBRATED:
                description = issue.description.lower()
                if "too high" in description:
                    confidence = round(
                        max(CONFIDENCE_FLOOR, original_confidence - CONFIDENCE_STEP), 4
                    )
                elif "too low" in description:
                    confidence = round(
                        min(CONFIDENCE_CAP, original_confidence + CONFIDENCE_STEP), 4
                    )

            elif issue.type == IssueType.VERDICT_UNSUPPORTED:
                label = VerdictLabel.NOT_ENOUGH_EVIDENCE
                if not reasoning.endswith(UNSUPPORTED_NOTE):
                    reasoning += UNSUPPORTED_NOTE

            elif issue.type == IssueType.HALLUCINATION:
                citations = [
                    c for c in citations
                    if not mentions_citation_title(issue.description, c.title)
                ]

        corrected = verdict.model_copy(
            update={
                "verdict": label,
                "confidence": confidence,
                "reasoning": reasoning,
                "citations": citations,
            }
        )
        self._logger.info(
            "verdict_corrected",
            verdict_before=verdict.verdict.value,
            verdict_after=corrected.verdict.value,
            confidence_before=original_confidence,
            confidence_after=corrected.confidence,
            citations_dropped=len(verdict.citations) - len(citations),
        )
        return corrected

    def apply_if_needed(
        self, verdict: Verdict, critique: CritiqueResult
    ) -> Tuple[Verdict, bool]:
        """Correct the verdict when should_regenerate() says so.

        Returns:
            (verdict to use, whether a correction was applied)
        """
        if not self.should_regenerate(critique):
            return verdict, False
        return self.correct(verdict, critique), True
