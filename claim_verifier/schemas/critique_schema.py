"""Self-critique schemas."""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class IssueType(str, Enum):
    CITATION_MISSING = "citation_missing"
    CITATION_INVALID = "citation_invalid"
    REASONING_INCOHERENT = "reasoning_incoherent"
    CONFIDENCE_MISCALIBRATED = "confidence_miscalibrated"
    VERDICT_UNSUPPORTED = "verdict_unsupported"
    HALLUCINATION = "hallucination"
    OTHER = "other"


class IssueSeverity(str, Enum):
    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"


class CritiqueIssue(BaseModel):
    type: IssueType = Field(..., description="Type of issue found")
    severity: IssueSeverity = Field(..., description="Severity of the issue")
    description: str = Field(..., description="Detailed description of the issue")


class CritiqueResult(BaseModel):
    """Quality audit of a verdict against its evidence.

    confidence is the auditor's confidence in its own critique, not the
    verdict's confidence.
    """

    is_valid: bool = Field(..., description="Whether the verification result is valid")
    confidence: float = Field(..., ge=0.0, le=1.0)
    issues: List[CritiqueIssue] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    overall_assessment: str = Field(default="", description="Brief overall assessment")

    def count_by_severity(self, severity: IssueSeverity) -> int:
        return sum(1 for issue in self.issues if issue.severity == severity)

    def has_critical_issues(self) -> bool:
        return self.count_by_severity(IssueSeverity.CRITICAL) > 0

    def summary(self) -> str:
        """One-line human-readable summary."""
        if self.is_valid:
            return f"Valid (confidence: {self.confidence * 100:.0f}%)"

        parts = []
        for severity in IssueSeverity:
            count = self.count_by_severity(severity)
            if count:
                parts.append(f"{count} {severity.value}")
        return f"Issues: {', '.join(parts)} | {self.overall_assessment}"
