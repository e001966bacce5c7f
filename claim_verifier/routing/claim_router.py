"""Claim router selecting a verification strategy from claim metadata.

Strategies trade cost for depth:
- SIMPLE: knowledge base lookup only, for low-ambiguity historical/timeless facts
- HYBRID: knowledge base plus web search, the default
- AGENTIC: iterative multi-tool investigation for complex, breaking or
  contentious claims

Rules are evaluated in priority order (AGENTIC, then SIMPLE, then HYBRID),
so a claim matching both the AGENTIC and SIMPLE predicates is AGENTIC.

Usage:
    from claim_verifier.routing.claim_router import ClaimRouter

    router = ClaimRouter()
    strategy = router.route(analysis)
    config = router.get_strategy_config(strategy, analysis)
"""

from typing import Dict, FrozenSet, Iterable, List, Optional

import structlog

from claim_verifier.schemas.claim_schema import (
    ClaimAnalysis,
    ClaimType,
    Complexity,
    Temporality,
)
from claim_verifier.schemas.strategy_schema import (
    Strategy,
    StrategyConfig,
    StrategyMetadata,
)

CONTENTIOUS_KEYWORDS: FrozenSet[str] = frozenset(
    {"controversial", "disputed", "alleged", "reportedly", "claims"}
)

AGENTIC_CLAIM_TYPES: FrozenSet[ClaimType] = frozenset(
    {ClaimType.STATISTICAL, ClaimType.NUMERICAL}
)

SIMPLE_CLAIM_TYPES: FrozenSet[ClaimType] = frozenset(
    {ClaimType.FACT, ClaimType.HISTORICAL, ClaimType.BIOGRAPHICAL, ClaimType.SCIENTIFIC}
)

SETTLED_TEMPORALITIES: FrozenSet[Temporality] = frozenset(
    {Temporality.TIMELESS, Temporality.HISTORICAL}
)

AGENTIC_ENTITY_THRESHOLD = 3
SIMPLE_MAX_ENTITIES = 1

STRATEGY_CONFIGS: Dict[Strategy, StrategyConfig] = {
    Strategy.SIMPLE: StrategyConfig(
        name="Simple",
        description="Quick knowledge base lookup",
        use_vector_search=True,
        use_web_search=False,
        use_agent=False,
        max_sources=3,
        timeout_ms=5000,
    ),
    Strategy.HYBRID: StrategyConfig(
        name="Hybrid",
        description="Knowledge base + web search",
        use_vector_search=True,
        use_web_search=True,
        use_agent=False,
        max_sources=8,
        timeout_ms=10000,
    ),
    Strategy.AGENTIC: StrategyConfig(
        name="Agentic",
        description="Iterative multi-source investigation",
        use_vector_search=True,
        use_web_search=True,
        use_agent=True,
        max_sources=10,
        max_iterations=5,
        timeout_ms=30000,
    ),
}


def has_contentious_language(keywords: Iterable[str]) -> bool:
    """True if any keyword marks the claim as contested.

    Exact, case-insensitive match against CONTENTIOUS_KEYWORDS.
    """
    return any(keyword.lower() in CONTENTIOUS_KEYWORDS for keyword in keywords)


class ClaimRouter:
    """Route claims to SIMPLE, HYBRID or AGENTIC verification.

    Routing is a pure function of the ClaimAnalysis; the router holds no
    per-request state and a single instance can serve concurrent requests.
    """

    def __init__(self) -> None:
        self._logger = structlog.get_logger().bind(component="ClaimRouter")

    def route(self, analysis: ClaimAnalysis) -> Strategy:
        """Choose a strategy. First matching rule wins."""
        if self._needs_agentic(analysis):
            strategy = Strategy.AGENTIC
        elif self._is_simple(analysis):
            strategy = Strategy.SIMPLE
        else:
            strategy = Strategy.HYBRID

        self._logger.info(
            "claim_routed",
            strategy=strategy.value,
            claim_type=analysis.type.value,
            complexity=analysis.complexity.value,
            temporality=analysis.temporality.value,
            entity_count=len(analysis.entities),
        )
        return strategy

    def _needs_agentic(self, analysis: ClaimAnalysis) -> bool:
        return (
            analysis.complexity == Complexity.COMPLEX
            or len(analysis.entities) > AGENTIC_ENTITY_THRESHOLD
            or (analysis.temporality == Temporality.CURRENT and analysis.is_recent)
            or analysis.type in AGENTIC_CLAIM_TYPES
            or has_contentious_language(analysis.keywords)
        )

    def _is_simple(self, analysis: ClaimAnalysis) -> bool:
        return (
            analysis.temporality in SETTLED_TEMPORALITIES
            and analysis.complexity == Complexity.SIMPLE
            and len(analysis.entities) <= SIMPLE_MAX_ENTITIES
            and analysis.type in SIMPLE_CLAIM_TYPES
        )

    def get_strategy_config(
        self,
        strategy: Strategy,
        analysis: Optional[ClaimAnalysis] = None,
    ) -> StrategyConfig:
        """Return a fresh copy of the strategy's config.

        Args:
            strategy: Chosen strategy.
            analysis: When given, sets the advisory prioritize_* flags from
                temporality. Numeric fields are never changed.

        Returns:
            StrategyConfig owned by the caller.
        """
        config = STRATEGY_CONFIGS[strategy].model_copy()
        if analysis is not None:
            config.prioritize_web_search = analysis.temporality == Temporality.CURRENT
            config.prioritize_knowledge_base = analysis.temporality in SETTLED_TEMPORALITIES
        return config

    def get_routing_explanation(self, strategy: Strategy, analysis: ClaimAnalysis) -> str:
        """Human-readable sentence explaining a routing decision."""
        if strategy == Strategy.AGENTIC:
            reasons: List[str] = []
            if analysis.complexity == Complexity.COMPLEX:
                reasons.append("claim is complex")
            if len(analysis.entities) > AGENTIC_ENTITY_THRESHOLD:
                reasons.append(f"involves {len(analysis.entities)} entities")
            if analysis.temporality == Temporality.CURRENT:
                reasons.append("requires current information")
            if analysis.type in AGENTIC_CLAIM_TYPES:
                reasons.append("involves numerical/statistical data")
            if has_contentious_language(analysis.keywords):
                reasons.append("uses contested language")
            return (
                f"Using agentic verification because {', '.join(reasons) or 'it was requested'}. "
                "Agent will iteratively gather and evaluate evidence."
            )

        if strategy == Strategy.SIMPLE:
            return (
                f"Using simple verification because claim is {analysis.complexity.value} "
                f"and {analysis.temporality.value}. Knowledge base lookup should suffice."
            )

        return "Using hybrid verification (KB + web search) for balanced coverage."

    def get_strategy_metadata(
        self, strategy: Strategy, analysis: ClaimAnalysis
    ) -> StrategyMetadata:
        """Strategy description surfaced to callers."""
        config = STRATEGY_CONFIGS[strategy]
        return StrategyMetadata(
            strategy=strategy,
            name=config.name,
            description=config.description,
            explanation=self.get_routing_explanation(strategy, analysis),
            estimated_time=f"{config.timeout_ms / 1000:g}s",
        )
