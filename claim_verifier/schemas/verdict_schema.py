"""Verdict schemas.

VerdictDraft is what the completion model is asked to produce. Verdict is
the externally visible result after citations are back-filled with the
snippet and credibility of the evidence they point at.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from claim_verifier.schemas.evidence_schema import Credibility


class VerdictLabel(str, Enum):
    TRUE = "TRUE"
    FALSE = "FALSE"
    PARTIALLY_TRUE = "PARTIALLY_TRUE"
    NOT_ENOUGH_EVIDENCE = "NOT_ENOUGH_EVIDENCE"


class CitationDraft(BaseModel):
    """Citation as emitted by the model: a pointer plus a rationale."""

    index: int = Field(..., description="1-based evidence number, matches [n] in reasoning")
    title: str = Field(..., description="Title of the cited source")
    url: str = Field(..., description="URL of the cited source")
    relevance: str = Field(..., description="Why this source supports the verdict")


class Citation(CitationDraft):
    """Citation with evidence content copied from evidence[index - 1].

    snippet and credibility stay None when the index is out of range.
    """

    snippet: Optional[str] = None
    credibility: Optional[Credibility] = None


class VerdictDraft(BaseModel):
    verdict: VerdictLabel = Field(..., description="Verification result")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Confidence score 0-1")
    reasoning: str = Field(
        ..., description="Detailed explanation with inline citations like [1], [2]"
    )
    citations: List[CitationDraft] = Field(default_factory=list)
    contradictions: List[str] = Field(
        default_factory=list, description="Contradictory evidence found, if any"
    )


class Verdict(BaseModel):
    """Structured verification outcome."""

    verdict: VerdictLabel
    confidence: float = Field(..., ge=0.0, le=1.0)
    reasoning: str
    citations: List[Citation] = Field(default_factory=list)
    contradictions: List[str] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "verdict": "TRUE",
                    "confidence": 0.92,
                    "reasoning": "The tower was finished in March 1889 [1].",
                    "citations": [
                        {
                            "index": 1,
                            "title": "KB: The Eiffel Tower was completed in 1889",
                            "url": "internal://knowledge-base",
                            "relevance": "States the completion date directly",
                            "snippet": "Construction finished in March 1889.",
                            "credibility": "high",
                        }
                    ],
                    "contradictions": [],
                }
            ]
        }
    }
