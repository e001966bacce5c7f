"""Tests for the Gemini client helpers and rate limiter.

Tests cover:
- JSON extraction from fenced and bare responses
- Schema instructions appended to prompts
- Missing API key raising ConfigurationError
- Structured completion validation against the requested schema
- Blocked prompts not retried
- Token bucket refill and waiting
"""

import asyncio
import time
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.generativeai.types.generation_types import BlockedPromptException

from claim_verifier.config.settings import settings
from claim_verifier.exceptions import ConfigurationError
from claim_verifier.llm.gemini_client import GeminiClient, extract_json, with_schema_instructions
from claim_verifier.llm.rate_limiter import RateLimiter, TokenBucket
from claim_verifier.schemas.claim_schema import ClaimAnalysis, ClaimType


def _make_client(response_text: str = "{}", error: Optional[Exception] = None) -> GeminiClient:
    client = GeminiClient(api_key="test-key", rate_limiter=RateLimiter(max_rpm=600))
    response = MagicMock()
    response.text = response_text
    client.model = MagicMock()
    client.model.generate_content_async = AsyncMock(return_value=response, side_effect=error)
    return client


ANALYSIS_JSON = """{
  "type": "statistical",
  "entities": ["Federal Reserve"],
  "keywords": ["interest rates"],
  "temporality": "current",
  "complexity": "moderate",
  "is_recent": true
}"""


class TestHelpers:
    def test_extract_json_from_fence(self) -> None:
        text = 'Here you go:\n```json\n{"a": 1}\n```\n'
        assert extract_json(text) == '{"a": 1}'

    def test_extract_json_bare(self) -> None:
        assert extract_json('  {"a": 1}\n') == '{"a": 1}'

    def test_schema_instructions(self) -> None:
        prompt = with_schema_instructions("Classify this.", ClaimAnalysis)
        assert prompt.startswith("Classify this.\n\n")
        assert '"temporality"' in prompt


class TestGeminiClient:
    def test_missing_key_raises(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "gemini_api_key", "")
        with pytest.raises(ConfigurationError) as exc_info:
            GeminiClient()
        assert exc_info.value.category == "configuration"

    @pytest.mark.asyncio
    async def test_complete_structured_validates(self) -> None:
        client = _make_client("```json\n" + ANALYSIS_JSON + "\n```")

        analysis = await client.complete_structured("Classify", ClaimAnalysis, temperature=0.3)

        assert analysis.type == ClaimType.STATISTICAL
        assert analysis.entities == ["Federal Reserve"]
        kwargs = client.model.generate_content_async.call_args.kwargs
        assert kwargs["generation_config"].temperature == 0.3
        assert kwargs["generation_config"].response_mime_type == "application/json"

    @pytest.mark.asyncio
    async def test_blocked_prompt_not_retried(self) -> None:
        client = _make_client(error=BlockedPromptException("blocked"))

        with pytest.raises(BlockedPromptException):
            await client.complete_structured("Classify", ClaimAnalysis)

        assert client.model.generate_content_async.await_count == 1


class TestTokenBucket:
    def test_try_acquire_until_empty(self) -> None:
        bucket = TokenBucket(capacity=2, refill_rate=0.001)
        assert bucket.try_acquire() is True
        assert bucket.try_acquire() is True
        assert bucket.try_acquire() is False

    @pytest.mark.asyncio
    async def test_acquire_waits_for_refill(self) -> None:
        bucket = TokenBucket(capacity=1, refill_rate=50.0)
        await bucket.acquire()

        started = time.monotonic()
        await asyncio.wait_for(bucket.acquire(), timeout=1.0)

        assert time.monotonic() - started >= 0.01
