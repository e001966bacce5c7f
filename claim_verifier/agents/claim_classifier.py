"""Claim classifier producing the ClaimAnalysis used for routing.

One structured completion per claim at temperature 0.3. Failures propagate;
the pipeline decides how to degrade (it substitutes the default analysis).
"""

from typing import Optional

import structlog

from claim_verifier.config.prompts import (
    CLAIM_ANALYSIS_SYSTEM_PROMPT,
    CLAIM_ANALYSIS_USER_PROMPT,
    CONTEXT_BLOCK,
)
from claim_verifier.llm.gemini_client import StructuredCompletion
from claim_verifier.schemas.claim_schema import ClaimAnalysis

CLASSIFIER_TEMPERATURE = 0.3


class ClaimClassifier:
    """Extract type, entities, keywords, temporality and complexity from a claim."""

    def __init__(
        self,
        completion: StructuredCompletion,
        temperature: float = CLASSIFIER_TEMPERATURE,
    ) -> None:
        self._completion = completion
        self._temperature = temperature
        self._logger = structlog.get_logger().bind(component="ClaimClassifier")

    def build_prompt(self, claim: str, context: Optional[str] = None) -> str:
        context_block = CONTEXT_BLOCK.format(context=context) if context else ""
        user_prompt = CLAIM_ANALYSIS_USER_PROMPT.format(claim=claim, context_block=context_block)
        return f"{CLAIM_ANALYSIS_SYSTEM_PROMPT}\n\n{user_prompt}"

    async def classify(self, claim: str, context: Optional[str] = None) -> ClaimAnalysis:
        """Classify a claim.

        Args:
            claim: Claim text.
            context: Optional caller-supplied context.

        Returns:
            ClaimAnalysis from the completion model.
        """
        analysis = await self._completion.complete_structured(
            self.build_prompt(claim, context),
            ClaimAnalysis,
            temperature=self._temperature,
        )
        self._logger.info(
            "claim_classified",
            claim_type=analysis.type.value,
            temporality=analysis.temporality.value,
            complexity=analysis.complexity.value,
            entities=list(analysis.entities),
        )
        return analysis
