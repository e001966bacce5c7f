"""Verification pipeline controller.

Usage:
    from claim_verifier.pipeline import VerificationPipeline

    pipeline = VerificationPipeline()
    result = await pipeline.verify_payload({"claim": "..."})
"""

from claim_verifier.pipeline.verification_pipeline import VerificationPipeline

__all__ = ["VerificationPipeline"]
