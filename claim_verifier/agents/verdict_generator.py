"""Verdict generation from a claim and its ranked evidence.

Evidence is rendered as a numbered list; the numbers are the binding
contract for citations. After the completion returns, every citation is
back-filled with the snippet and credibility of ``evidence[index - 1]``.
Out-of-range citations are left without content so the critique stage can
flag them; they are never repaired here.

Usage:
    from claim_verifier.agents.verdict_generator import VerdictGenerator

    generator = VerdictGenerator(completion=gemini_client)
    verdict = await generator.generate(claim, evidence)
"""

from typing import List, Sequence

import structlog

from claim_verifier.config.prompts import (
    NO_EVIDENCE_TEXT,
    VERIFICATION_SYSTEM_PROMPT,
    VERIFICATION_USER_PROMPT,
)
from claim_verifier.exceptions import VerdictGenerationError
from claim_verifier.llm.gemini_client import StructuredCompletion
from claim_verifier.schemas.evidence_schema import EvidenceRecord
from claim_verifier.schemas.verdict_schema import Citation, Verdict, VerdictDraft

VERDICT_TEMPERATURE = 0.2


def format_evidence_for_prompt(evidence: Sequence[EvidenceRecord]) -> str:
    """Render evidence as 1-based numbered blocks separated by blank lines."""
    if not evidence:
        return NO_EVIDENCE_TEXT

    blocks: List[str] = []
    for position, record in enumerate(evidence, start=1):
        lines = [
            f"[{position}] {record.title}",
            f"Source: {record.url}",
            f"Content: {record.snippet}",
            f"Credibility: {record.credibility.value}",
        ]
        if record.related_verdict:
            lines.append(f"Related Verdict: {record.related_verdict}")
        if record.relevance_score is not None:
            lines.append(f"Relevance Score: {record.relevance_score:.3f}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def attach_citation_evidence(
    draft: VerdictDraft, evidence: Sequence[EvidenceRecord]
) -> Verdict:
    """Copy snippet/credibility from the evidence each citation points at."""
    citations: List[Citation] = []
    for draft_citation in draft.citations:
        citation = Citation(**draft_citation.model_dump())
        if 1 <= citation.index <= len(evidence):
            source = evidence[citation.index - 1]
            citation.snippet = source.snippet
            citation.credibility = source.credibility
        citations.append(citation)

    return Verdict(
        verdict=draft.verdict,
        confidence=draft.confidence,
        reasoning=draft.reasoning,
        citations=citations,
        contradictions=list(draft.contradictions),
    )


class VerdictGenerator:
    """Turn (claim, evidence) into a cited Verdict with one completion call."""

    def __init__(
        self,
        completion: StructuredCompletion,
        temperature: float = VERDICT_TEMPERATURE,
    ) -> None:
        self._completion = completion
        self._temperature = temperature
        self._logger = structlog.get_logger().bind(component="VerdictGenerator")

    def build_prompt(self, claim: str, evidence: Sequence[EvidenceRecord]) -> str:
        user_prompt = VERIFICATION_USER_PROMPT.format(
            claim=claim, evidence=format_evidence_for_prompt(evidence)
        )
        return f"{VERIFICATION_SYSTEM_PROMPT}\n\n{user_prompt}"

    async def generate(self, claim: str, evidence: Sequence[EvidenceRecord]) -> Verdict:
        """Generate a verdict.

        Args:
            claim: Claim text.
            evidence: Ranked, truncated evidence. Positions define citation indices.

        Returns:
            Verdict with back-filled citations.

        Raises:
            VerdictGenerationError: If the completion call fails for any reason.
        """
        try:
            draft = await self._completion.complete_structured(
                self.build_prompt(claim, evidence),
                VerdictDraft,
                temperature=self._temperature,
            )
        except Exception as e:
            self._logger.error("verdict_generation_failed", error=str(e))
            raise VerdictGenerationError(str(e)) from e

        verdict = attach_citation_evidence(draft, evidence)
        out_of_range = [
            c.index for c in verdict.citations if not 1 <= c.index <= len(evidence)
        ]

        self._logger.info(
            "verdict_generated",
            verdict=verdict.verdict.value,
            confidence=verdict.confidence,
            citation_count=len(verdict.citations),
            out_of_range_citations=out_of_range,
        )
        return verdict
