"""Tests for ClaimClassifier.

Tests cover:
- Prompt construction with and without caller context
- Structured completion call (schema, temperature)
- Failures propagating to the caller
"""

from unittest.mock import AsyncMock

import pytest

from claim_verifier.agents.claim_classifier import ClaimClassifier
from claim_verifier.schemas.claim_schema import (
    ClaimAnalysis,
    ClaimType,
    Complexity,
    Temporality,
)


def _make_completion(result=None, error=None) -> AsyncMock:
    completion = AsyncMock()
    completion.complete_structured = AsyncMock(return_value=result, side_effect=error)
    return completion


EIFFEL_ANALYSIS = ClaimAnalysis(
    type=ClaimType.HISTORICAL,
    entities=["Eiffel Tower", "1889"],
    keywords=["Eiffel Tower", "completed", "1889"],
    temporality=Temporality.HISTORICAL,
    complexity=Complexity.SIMPLE,
    is_recent=False,
)


class TestPrompt:
    def test_prompt_contains_claim(self) -> None:
        classifier = ClaimClassifier(completion=_make_completion())
        prompt = classifier.build_prompt("The Eiffel Tower was completed in 1889")
        assert 'Analyze this claim: "The Eiffel Tower was completed in 1889"' in prompt
        assert "Additional context" not in prompt

    def test_prompt_includes_context(self) -> None:
        classifier = ClaimClassifier(completion=_make_completion())
        prompt = classifier.build_prompt("claim", context="Quoted in a 2024 speech")
        assert "Additional context supplied with the claim:\nQuoted in a 2024 speech" in prompt


class TestClassify:
    @pytest.mark.asyncio
    async def test_returns_model_analysis(self) -> None:
        completion = _make_completion(EIFFEL_ANALYSIS)
        classifier = ClaimClassifier(completion=completion)

        analysis = await classifier.classify("The Eiffel Tower was completed in 1889")

        assert analysis == EIFFEL_ANALYSIS
        args, kwargs = completion.complete_structured.call_args
        assert args[1] is ClaimAnalysis
        assert kwargs["temperature"] == 0.3

    @pytest.mark.asyncio
    async def test_failure_propagates(self) -> None:
        classifier = ClaimClassifier(completion=_make_completion(error=RuntimeError("quota")))
        with pytest.raises(RuntimeError, match="quota"):
            await classifier.classify("claim")
