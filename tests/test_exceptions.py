"""Tests for the error taxonomy and request logging context.

Tests cover:
- Category per error class and to_dict() shape
- Timeout context payload
- Correlation ID binding
"""

from structlog.contextvars import get_contextvars

from claim_verifier.exceptions import (
    ClaimVerifierError,
    ConfigurationError,
    InvalidClaimError,
    PipelineTimeoutError,
    VerdictGenerationError,
    VerificationFailedError,
)
from claim_verifier.utils.logging import bind_request_context


class TestErrorTaxonomy:
    def test_categories(self) -> None:
        assert InvalidClaimError("Claim is required").category == "invalid_input"
        assert VerificationFailedError("x").category == "verification_failed"
        assert VerdictGenerationError("x").category == "verification_failed"
        assert PipelineTimeoutError("agentic", 30000).category == "timeout"
        assert ConfigurationError("x").category == "configuration"

    def test_all_derive_from_base(self) -> None:
        for error in (
            InvalidClaimError("x"),
            VerdictGenerationError("x"),
            PipelineTimeoutError("simple", 5000),
            ConfigurationError("x"),
        ):
            assert isinstance(error, ClaimVerifierError)

    def test_to_dict_defaults_detail_to_message(self) -> None:
        assert InvalidClaimError("Claim is required").to_dict() == {
            "error": "Claim is required",
            "category": "invalid_input",
            "details": "Claim is required",
            "context": {},
        }

    def test_timeout_context(self) -> None:
        error = PipelineTimeoutError("hybrid", 10000)
        assert str(error) == "Verification timed out after 10000ms"
        assert error.context == {"strategy": "hybrid", "timeout_ms": 10000}


class TestRequestContext:
    def test_generates_and_binds_id(self) -> None:
        correlation_id = bind_request_context()
        assert get_contextvars()["correlation_id"] == correlation_id

    def test_reuses_given_id(self) -> None:
        assert bind_request_context("req-123") == "req-123"
        assert get_contextvars() == {"correlation_id": "req-123"}
