"""Evidence sufficiency assessment schema."""

from typing import List

from pydantic import BaseModel, Field


class SufficiencyAssessment(BaseModel):
    """Scores describing whether retrieved evidence supports a confident verdict.

    Attributes:
        is_sufficient: Threshold decision over score, source count and quality
        score: 0.3 * quantity + 0.7 * quality
        quantity: Source count against a target of three
        quality: Weighted blend of credibility, relevance, diversity and coverage
        relevance: Snippet-length proxy for evidentiary detail
        credibility: Mean credibility weight of the sources
        missing_aspects: Human-readable notes for each failed sub-check
        recommendation: One of the fixed recommendation strings
    """

    is_sufficient: bool
    score: float = Field(..., ge=0.0, le=1.0)
    quantity: float = Field(default=0.0, ge=0.0, le=1.0)
    quality: float = Field(default=0.0, ge=0.0, le=1.0)
    relevance: float = Field(default=0.0, ge=0.0, le=1.0)
    credibility: float = Field(default=0.0, ge=0.0, le=1.0)
    missing_aspects: List[str] = Field(default_factory=list)
    recommendation: str

    model_config = {"frozen": True}

    def summary(self) -> str:
        """Compact one-line summary, followed by an Issues line when any exist."""
        text = (
            f"Sources: {round(self.quantity * 3)}/3 ({self.quantity * 100:.0f}%) | "
            f"Quality: {self.quality * 100:.0f}% | "
            f"Overall: {self.score * 100:.0f}% | "
            f"{self.recommendation}"
        )
        if self.missing_aspects:
            text += f"\nIssues: {'; '.join(self.missing_aspects)}"
        return text
