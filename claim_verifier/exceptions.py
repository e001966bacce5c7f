"""Error taxonomy for the claim verification pipeline.

Every error that escapes ``VerificationPipeline.verify`` is a
``ClaimVerifierError`` carrying a short machine-checkable ``category`` and a
human-readable ``detail``. Collaborator degradation (classifier, evidence
sources, critique) is absorbed inside the pipeline and never surfaces here.

Usage:
    from claim_verifier.exceptions import ClaimVerifierError

    try:
        result = await pipeline.verify(request)
    except ClaimVerifierError as e:
        return e.to_dict()
"""

from typing import Any, Dict, Optional


class ClaimVerifierError(Exception):
    """Base error for all fatal verification failures."""

    category: str = "error"

    def __init__(
        self,
        message: str,
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.detail = detail or message
        self.context = context or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "category": self.category,
            "details": self.detail,
            "context": self.context,
        }


class InvalidClaimError(ClaimVerifierError):
    """Request rejected before any pipeline work (missing/empty claim)."""

    category = "invalid_input"


class VerificationFailedError(ClaimVerifierError):
    """Verification could not produce a verdict."""

    category = "verification_failed"


class VerdictGenerationError(VerificationFailedError):
    """The verdict completion call failed; no fallback verdict exists."""

    def __init__(self, reason: str) -> None:
        super().__init__("Verification failed", detail=reason)


class PipelineTimeoutError(ClaimVerifierError):
    """Strategy time budget exceeded."""

    category = "timeout"

    def __init__(self, strategy: str, timeout_ms: int) -> None:
        super().__init__(
            f"Verification timed out after {timeout_ms}ms",
            detail=f"Strategy '{strategy}' exceeded its {timeout_ms}ms budget",
            context={"strategy": strategy, "timeout_ms": timeout_ms},
        )


class ConfigurationError(ClaimVerifierError):
    """A client was constructed without its required credentials."""

    category = "configuration"
