"""Prompt templates for claim classification.

The classifier's output drives routing, so the label definitions here must
stay aligned with ClaimType, Temporality and Complexity.
"""

CLAIM_ANALYSIS_SYSTEM_PROMPT = """You are a claim analyzer. Your job is to extract key information from claims to help with fact-checking.

Analyze the claim and extract:
- type: one of
  - "fact" (verifiable general statement)
  - "opinion" (subjective belief)
  - "prediction" (future event)
  - "news" (current event)
  - "statistical" (rates, percentages, survey or census figures)
  - "numerical" (specific counts, amounts, measurements)
  - "historical" (past events)
  - "biographical" (facts about a person's life or role)
  - "scientific" (established scientific knowledge)
- entities: key entities like people, places, organizations, dates, events
- is_recent: true if about events in the last 30 days, false for historical facts
- keywords: effective search terms for finding evidence
- temporality: "timeless" (universal facts), "historical" (past events), "recent" (last 6 months), "current" (last 30 days)
- complexity: "simple" (single verifiable fact), "moderate" (2-3 related facts), "complex" (multiple interconnected claims)

Keep entity and keyword lists in the order they appear in the claim.
Be precise and thorough in your analysis."""

CLAIM_ANALYSIS_USER_PROMPT = """Analyze this claim: "{claim}"
{context_block}"""

CONTEXT_BLOCK = """
Additional context supplied with the claim:
{context}"""
