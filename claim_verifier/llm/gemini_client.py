"""Gemini API client providing structured completions and embeddings.

The pipeline depends on two capabilities:
- StructuredCompletion: prompt + pydantic schema -> validated model instance
- embed: text -> vector, used by the knowledge base search

GeminiClient implements both. It is constructed explicitly and injected
into the components that need it; there is no module-level instance.

Usage:
    from claim_verifier.llm.gemini_client import GeminiClient

    client = GeminiClient()
    verdict = await client.complete_structured(prompt, VerdictDraft, temperature=0.2)
"""

import json
import re
from typing import List, Optional, Protocol, Type, TypeVar

import google.generativeai as genai
from google.generativeai.types.generation_types import BlockedPromptException
from pydantic import BaseModel
from tenacity import retry, retry_if_not_exception_type, stop_after_attempt, wait_exponential

from claim_verifier.config.logging import get_logger
from claim_verifier.config.settings import settings
from claim_verifier.exceptions import ConfigurationError
from claim_verifier.llm.rate_limiter import RateLimiter

T = TypeVar("T", bound=BaseModel)

_CODE_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")

logger = get_logger("llm.gemini")


class StructuredCompletion(Protocol):
    """Anything that turns a prompt into an instance of a pydantic schema."""

    async def complete_structured(
        self, prompt: str, schema: Type[T], temperature: float = 0.2
    ) -> T:
        ...


def extract_json(text: str) -> str:
    """Strip a markdown code fence around a JSON payload, if present."""
    match = _CODE_FENCE.search(text)
    return match.group(1).strip() if match else text.strip()


def with_schema_instructions(prompt: str, schema: Type[BaseModel]) -> str:
    """Append the JSON schema the response must satisfy."""
    return (
        f"{prompt}\n\n"
        "Respond with a single JSON object that conforms to this JSON schema:\n"
        f"{json.dumps(schema.model_json_schema(), indent=2)}"
    )


class GeminiClient:
    """
    Google Gemini client with rate limiting and retries.

    Attributes:
        model_name: Generative model identifier
        embedding_model: Embedding model identifier
        model: Configured GenerativeModel instance
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        embedding_model: Optional[str] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: API key override (defaults to settings.gemini_api_key)
            model_name: Model override (defaults to settings.gemini_model)
            embedding_model: Embedding model override
            rate_limiter: Shared limiter; one is created from settings if omitted

        Raises:
            ConfigurationError: If no API key is configured
        """
        api_key = api_key or settings.gemini_api_key
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY not configured in environment")

        genai.configure(api_key=api_key)

        self.model_name = model_name or settings.gemini_model
        self.embedding_model = embedding_model or settings.gemini_embedding_model
        self.model = genai.GenerativeModel(self.model_name)
        self._rate_limiter = rate_limiter or RateLimiter()

        logger.info(f"Gemini client initialized with model {self.model_name}")

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_not_exception_type(BlockedPromptException),
        reraise=True,
    )
    async def complete_structured(
        self, prompt: str, schema: Type[T], temperature: float = 0.2
    ) -> T:
        """
        Generate a JSON response and validate it against a schema.

        Args:
            prompt: Full instruction text
            schema: Pydantic model the response must satisfy
            temperature: Sampling temperature. Lower = more deterministic

        Returns:
            Validated schema instance

        Raises:
            BlockedPromptException: If the prompt violates safety policies
            pydantic.ValidationError: If the response never matches the schema
            Exception: For other API errors after retries are exhausted
        """
        await self._rate_limiter.acquire()

        response = await self.model.generate_content_async(
            with_schema_instructions(prompt, schema),
            generation_config=genai.types.GenerationConfig(
                temperature=temperature,
                response_mime_type="application/json",
            ),
        )
        return schema.model_validate_json(extract_json(response.text))

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def embed(self, text: str) -> List[float]:
        """Embed a search query with the configured embedding model."""
        await self._rate_limiter.acquire()
        result = await genai.embed_content_async(
            model=self.embedding_model,
            content=text,
            task_type="retrieval_query",
        )
        return list(result["embedding"])
