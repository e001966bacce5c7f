"""LLM-backed agents: claim classification, verdict generation and self-critique."""

from claim_verifier.agents.claim_classifier import ClaimClassifier
from claim_verifier.agents.critique_agent import SelfCritiqueAuditor
from claim_verifier.agents.verdict_generator import VerdictGenerator

__all__ = ["ClaimClassifier", "SelfCritiqueAuditor", "VerdictGenerator"]
