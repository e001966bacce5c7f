"""Evidence schemas shared by sources, retrieval and the verdict stage.

EvidenceRecord is the normalized shape for one retrieved source regardless
of origin (knowledge base, Tavily, Wikipedia). AgentStep records one tool
call in the agentic retrieval trace.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

DEDUP_SNIPPET_PREFIX = 100


class Credibility(str, Enum):
    """Coarse trust tier assigned to a source."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    VERY_LOW = "very_low"
    UNKNOWN = "unknown"


class SourceKind(str, Enum):
    """Origin tag of an evidence record."""

    VECTOR = "vector"
    WEB = "web"
    WEB_CURRENT = "web_current"
    WEB_HISTORICAL = "web_historical"
    AGENT = "agent"
    MOCK = "mock"


KNOWLEDGE_BASE_URL = "internal://knowledge-base"


class EvidenceRecord(BaseModel):
    """Single retrieved source bearing on a claim."""

    title: str = Field(..., description="Source title")
    url: str = Field(..., description="Source URL or internal sentinel")
    snippet: str = Field(default="", description="Relevant excerpt")
    credibility: Credibility = Field(
        default=Credibility.MEDIUM, description="Trust tier of the source"
    )
    source_kind: SourceKind = Field(..., description="Which retrieval path produced it")
    source: Optional[str] = Field(
        default=None, description="Publisher label, e.g. 'Wikipedia' or a domain"
    )
    relevance_score: Optional[float] = Field(
        default=None, ge=0.0, le=1.0, description="Search/similarity score"
    )
    related_verdict: Optional[str] = Field(
        default=None, description="Prior verdict stored with a knowledge base claim"
    )
    published_date: Optional[str] = Field(default=None)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "KB: The Eiffel Tower was completed in 1889",
                    "url": "internal://knowledge-base",
                    "snippet": "Construction of the Eiffel Tower finished in March 1889.",
                    "credibility": "high",
                    "source_kind": "vector",
                    "relevance_score": 0.93,
                    "related_verdict": "TRUE",
                }
            ]
        }
    }

    @property
    def dedup_key(self) -> str:
        """URL plus snippet prefix; equal keys are treated as the same source."""
        return f"{self.url}::{self.snippet[:DEDUP_SNIPPET_PREFIX]}"


class AgentStep(BaseModel):
    """One tool invocation in the agentic retrieval loop."""

    step: int = Field(..., ge=1)
    tool: str
    input: Dict[str, Any] = Field(default_factory=dict)
    success: bool
    result_count: int = Field(default=0, ge=0)
    source_kind: Optional[SourceKind] = None
    error: Optional[str] = None


class AgentState(str, Enum):
    """States of the agentic retrieval loop."""

    PLANNING = "planning"
    EXECUTING = "executing"
    EARLY_STOP = "early_stop"
    DONE = "done"


class RetrievalOutcome(BaseModel):
    """Evidence collected for a claim plus the agentic step trace, if any."""

    evidence: List[EvidenceRecord] = Field(default_factory=list)
    agent_steps: List[AgentStep] = Field(default_factory=list)
    final_state: Optional[AgentState] = None
