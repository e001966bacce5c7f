#!/usr/bin/env python3
"""Example script verifying a single claim end to end.

Requires GEMINI_API_KEY. TAVILY_API_KEY and the PINECONE_* settings are
optional; without them the web tools fall back to Wikipedia and the
knowledge base contributes no evidence.

Usage:
    python examples/run_verification.py "The Eiffel Tower was completed in 1889"
    python examples/run_verification.py "Inflation fell to 2% last month" --strategy agentic
    python examples/run_verification.py "Water boils at 100C" --no-web --no-critique
"""

import argparse
import asyncio
import sys

import structlog

from claim_verifier.exceptions import ClaimVerifierError
from claim_verifier.pipeline import VerificationPipeline

logger = structlog.get_logger()


async def run(args: argparse.Namespace) -> int:
    pipeline = VerificationPipeline()
    payload = {
        "claim": args.claim,
        "context": args.context,
        "use_web_search": not args.no_web,
        "use_vector_search": not args.no_kb,
        "force_strategy": args.strategy,
        "enable_critique": not args.no_critique,
    }

    try:
        result = await pipeline.verify_payload(payload)
    except ClaimVerifierError as e:
        logger.error("verification_error", **e.to_dict())
        return 1

    print(f"\nClaim:      {result.claim}")
    print(f"Verdict:    {result.verdict.value} ({result.confidence:.0%})")
    print(f"Strategy:   {result.strategy.name} - {result.strategy.explanation}")
    print(f"Evidence:   {result.evidence_sufficiency.summary}")
    if result.critique:
        print(f"Critique:   {result.critique.summary}")
    if result.corrected:
        print("            (verdict corrected after critique)")
    print(f"\n{result.reasoning}\n")

    for citation in result.citations:
        print(f"  [{citation.index}] {citation.title}\n      {citation.url}")
    for step in result.agent_steps:
        status = f"{step.result_count} results" if step.success else f"failed: {step.error}"
        print(f"  step {step.step}: {step.tool} -> {status}")

    print(f"\nDone in {result.processing_time_ms}ms")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Verify a factual claim")
    parser.add_argument("claim", help="Claim text to verify")
    parser.add_argument("--context", default=None, help="Extra context for classification")
    parser.add_argument(
        "--strategy",
        choices=["simple", "hybrid", "agentic"],
        default=None,
        help="Skip routing and force a strategy",
    )
    parser.add_argument("--no-web", action="store_true", help="Disable web search")
    parser.add_argument("--no-kb", action="store_true", help="Disable knowledge base search")
    parser.add_argument("--no-critique", action="store_true", help="Skip the self-critique pass")
    sys.exit(asyncio.run(run(parser.parse_args())))


if __name__ == "__main__":
    main()
