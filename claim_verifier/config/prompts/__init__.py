"""Prompt templates for LLM-backed components.

Modules:
    classification_prompts: Claim analysis prompts
    verdict_prompts: Verdict generation prompts and calibration guidance
    critique_prompts: Self-critique audit prompt
"""

from claim_verifier.config.prompts.classification_prompts import (
    CLAIM_ANALYSIS_SYSTEM_PROMPT,
    CLAIM_ANALYSIS_USER_PROMPT,
    CONTEXT_BLOCK,
)
from claim_verifier.config.prompts.critique_prompts import (
    CRITIQUE_PROMPT,
    NO_CRITIQUE_EVIDENCE_TEXT,
)
from claim_verifier.config.prompts.verdict_prompts import (
    NO_EVIDENCE_TEXT,
    VERIFICATION_SYSTEM_PROMPT,
    VERIFICATION_USER_PROMPT,
)

__all__ = [
    "CLAIM_ANALYSIS_SYSTEM_PROMPT",
    "CLAIM_ANALYSIS_USER_PROMPT",
    "CONTEXT_BLOCK",
    "CRITIQUE_PROMPT",
    "NO_CRITIQUE_EVIDENCE_TEXT",
    "NO_EVIDENCE_TEXT",
    "VERIFICATION_SYSTEM_PROMPT",
    "VERIFICATION_USER_PROMPT",
]
