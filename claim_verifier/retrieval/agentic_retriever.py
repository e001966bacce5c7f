"""Bounded agentic evidence retrieval.

A fixed tool plan is computed up front from the claim analysis and then
executed one tool at a time:

    PLANNING -> EXECUTING(tool_1) -> EXECUTING(tool_2) -> ... -> DONE
                                  \\-> EARLY_STOP (enough evidence)

The loop never re-plans and never exceeds max_iterations tool calls.
Tool failures are recorded in the step trace and the loop moves on.

Usage:
    from claim_verifier.retrieval.agentic_retriever import AgenticRetriever

    retriever = AgenticRetriever(tools=build_default_tools(kb, tavily, wiki))
    outcome = await retriever.run(claim, analysis)
    print(outcome.final_state, len(outcome.evidence))
"""

from typing import Any, Dict, List, Optional

import structlog

from claim_verifier.retrieval.tools import (
    SEARCH_KNOWLEDGE_BASE,
    SEARCH_WEB_CURRENT,
    SEARCH_WEB_HISTORICAL,
    RetrievalTool,
)
from claim_verifier.schemas.claim_schema import ClaimAnalysis, Complexity, Temporality
from claim_verifier.schemas.evidence_schema import (
    AgentState,
    AgentStep,
    EvidenceRecord,
    RetrievalOutcome,
)

DEFAULT_MAX_ITERATIONS = 5
EARLY_STOP_EVIDENCE_COUNT = 5
KB_TOOL_LIMIT = 5

WEB_TOOLS = (SEARCH_WEB_CURRENT, SEARCH_WEB_HISTORICAL)


class AgenticRetriever:
    """Execute a planned sequence of retrieval tools with early stopping.

    Args:
        tools: Tool registry keyed by tool name.
        max_iterations: Default bound on tool calls per run.
        early_stop_threshold: Stop once this many records are collected.
    """

    def __init__(
        self,
        tools: Dict[str, RetrievalTool],
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        early_stop_threshold: int = EARLY_STOP_EVIDENCE_COUNT,
    ) -> None:
        self._tools = tools
        self._max_iterations = max_iterations
        self._early_stop_threshold = early_stop_threshold
        self._logger = structlog.get_logger().bind(component="AgenticRetriever")

    def plan(
        self,
        analysis: ClaimAnalysis,
        use_vector_search: bool = True,
        use_web_search: bool = True,
    ) -> List[str]:
        """Tool sequence for a claim.

        Always starts with the knowledge base. Current/recent claims add the
        current-web tool, historical/timeless claims the historical-web tool.
        Complex claims get both web tools. Tools disabled by the flags or
        missing from the registry are dropped.
        """
        sequence = [SEARCH_KNOWLEDGE_BASE]

        if analysis.temporality in (Temporality.CURRENT, Temporality.RECENT):
            sequence.append(SEARCH_WEB_CURRENT)
        elif analysis.temporality in (Temporality.HISTORICAL, Temporality.TIMELESS):
            sequence.append(SEARCH_WEB_HISTORICAL)
        else:
            sequence.extend(WEB_TOOLS)

        if analysis.complexity == Complexity.COMPLEX:
            for tool_name in WEB_TOOLS:
                if tool_name not in sequence:
                    sequence.append(tool_name)

        if not use_vector_search:
            sequence = [t for t in sequence if t != SEARCH_KNOWLEDGE_BASE]
        if not use_web_search:
            sequence = [t for t in sequence if t not in WEB_TOOLS]

        return [t for t in sequence if t in self._tools]

    @staticmethod
    def build_tool_input(
        tool_name: str, claim: str, analysis: ClaimAnalysis
    ) -> Dict[str, Any]:
        if tool_name == SEARCH_KNOWLEDGE_BASE:
            return {"query": claim, "limit": KB_TOOL_LIMIT}
        return {"query": claim, "entities": list(analysis.entities)}

    async def run(
        self,
        claim: str,
        analysis: ClaimAnalysis,
        max_iterations: Optional[int] = None,
        use_vector_search: bool = True,
        use_web_search: bool = True,
    ) -> RetrievalOutcome:
        """Run the loop to a terminal state.

        Args:
            claim: Claim text, used as the query for every tool.
            analysis: Claim analysis driving the plan.
            max_iterations: Per-run override of the tool-call bound.
            use_vector_search: Allow the knowledge base tool.
            use_web_search: Allow the web tools.

        Returns:
            RetrievalOutcome with accumulated (unranked) evidence, the step
            trace and the terminal state (DONE or EARLY_STOP).
        """
        state = AgentState.PLANNING
        sequence = self.plan(analysis, use_vector_search, use_web_search)
        bound = min(len(sequence), max_iterations or self._max_iterations)

        self._logger.info(
            "agent_plan_ready",
            tools=sequence,
            iteration_bound=bound,
        )

        evidence: List[EvidenceRecord] = []
        steps: List[AgentStep] = []
        state = AgentState.EXECUTING

        for step_number, tool_name in enumerate(sequence[:bound], start=1):
            tool = self._tools[tool_name]
            tool_input = self.build_tool_input(tool_name, claim, analysis)

            try:
                records = await tool.run(tool_input)
            except Exception as e:
                self._logger.warning(
                    "agent_tool_failed",
                    step=step_number,
                    tool=tool_name,
                    error=str(e),
                )
                steps.append(
                    AgentStep(
                        step=step_number,
                        tool=tool_name,
                        input=tool_input,
                        success=False,
                        source_kind=tool.source_kind,
                        error=str(e),
                    )
                )
                continue

            evidence.extend(records)
            steps.append(
                AgentStep(
                    step=step_number,
                    tool=tool_name,
                    input=tool_input,
                    success=True,
                    result_count=len(records),
                    source_kind=tool.source_kind,
                )
            )
            self._logger.debug(
                "agent_tool_completed",
                step=step_number,
                tool=tool_name,
                result_count=len(records),
                total_evidence=len(evidence),
            )

            if len(evidence) >= self._early_stop_threshold:
                state = AgentState.EARLY_STOP
                break

        if state == AgentState.EXECUTING:
            state = AgentState.DONE

        self._logger.info(
            "agent_finished",
            final_state=state.value,
            tool_calls=len(steps),
            evidence_count=len(evidence),
        )
        return RetrievalOutcome(evidence=evidence, agent_steps=steps, final_state=state)
