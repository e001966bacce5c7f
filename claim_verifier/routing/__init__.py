"""Claim routing."""

from claim_verifier.routing.claim_router import (
    STRATEGY_CONFIGS,
    ClaimRouter,
    has_contentious_language,
)

__all__ = ["ClaimRouter", "STRATEGY_CONFIGS", "has_contentious_language"]
