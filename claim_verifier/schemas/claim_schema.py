"""Claim analysis schema produced by the classifier and consumed by routing.

ClaimAnalysis is derived once per claim and never mutated. The enum fields
reject unknown values at construction, so a malformed classifier response
fails validation instead of leaking an unexpected label into the router.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class ClaimType(str, Enum):
    """Kind of assertion a claim makes."""

    FACT = "fact"
    OPINION = "opinion"
    PREDICTION = "prediction"
    NEWS = "news"
    STATISTICAL = "statistical"
    NUMERICAL = "numerical"
    HISTORICAL = "historical"
    BIOGRAPHICAL = "biographical"
    SCIENTIFIC = "scientific"


class Temporality(str, Enum):
    """How time-sensitive a claim is."""

    TIMELESS = "timeless"
    HISTORICAL = "historical"
    RECENT = "recent"
    CURRENT = "current"


class Complexity(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


class ClaimAnalysis(BaseModel):
    """Classifier metadata for a single claim.

    Entity and keyword order is the classifier's insertion order and is
    preserved as-is.
    """

    type: ClaimType = Field(..., description="Kind of claim")
    entities: List[str] = Field(
        default_factory=list,
        description="Key entities mentioned (people, places, organizations)",
    )
    keywords: List[str] = Field(
        default_factory=list, description="Important keywords for search"
    )
    temporality: Temporality = Field(..., description="Time sensitivity of the claim")
    complexity: Complexity = Field(..., description="Verification complexity")
    is_recent: bool = Field(
        default=False, description="Whether the claim concerns recent events"
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "type": "fact",
                    "entities": ["Eiffel Tower"],
                    "keywords": ["Eiffel Tower", "completed", "1889"],
                    "temporality": "historical",
                    "complexity": "simple",
                    "is_recent": False,
                }
            ]
        },
    }

    @classmethod
    def default_for(cls, claim: str) -> "ClaimAnalysis":
        """Safe analysis used when classification fails."""
        return cls(
            type=ClaimType.FACT,
            entities=[],
            keywords=[claim],
            temporality=Temporality.TIMELESS,
            complexity=Complexity.SIMPLE,
            is_recent=False,
        )
