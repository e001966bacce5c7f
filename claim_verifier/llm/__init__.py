"""LLM access: Gemini client and request throttling."""

from claim_verifier.llm.gemini_client import GeminiClient, StructuredCompletion
from claim_verifier.llm.rate_limiter import RateLimiter

__all__ = ["GeminiClient", "RateLimiter", "StructuredCompletion"]
