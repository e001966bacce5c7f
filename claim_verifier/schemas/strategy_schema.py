"""Verification strategy schemas."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Strategy(str, Enum):
    """Verification intensity level."""

    SIMPLE = "simple"
    HYBRID = "hybrid"
    AGENTIC = "agentic"


class StrategyConfig(BaseModel):
    """Retrieval parameters for a strategy.

    The numeric fields depend only on the strategy. The prioritize_* flags
    are advisory hints derived from claim temporality.
    """

    name: str
    description: str
    use_vector_search: bool
    use_web_search: bool
    use_agent: bool
    max_sources: int = Field(..., ge=1)
    max_iterations: Optional[int] = Field(
        default=None, description="Tool-call bound, agentic strategy only"
    )
    timeout_ms: int = Field(..., ge=0)
    prioritize_web_search: bool = False
    prioritize_knowledge_base: bool = False


class StrategyMetadata(BaseModel):
    """Caller-facing description of the chosen strategy."""

    strategy: Strategy
    name: str
    description: str
    explanation: str
    estimated_time: str
