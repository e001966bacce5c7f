"""Source credibility configuration for evidence scoring and web search.

Credibility is a coarse tier (high/medium/low) rather than a continuous
score. Tiers come from three places:
1. Knowledge base records: stored tier, default high (curated claims)
2. Tavily results: trusted host patterns, otherwise the search score
3. Wikipedia results: always high

The sufficiency assessor converts tiers back to weights via
CREDIBILITY_WEIGHTS.
"""

from typing import Dict, List, Tuple

# Tier -> weight used by the sufficiency assessor
CREDIBILITY_WEIGHTS: Dict[str, float] = {
    "high": 1.0,
    "medium": 0.7,
    "low": 0.4,
    "very_low": 0.2,
    "unknown": 0.5,
}

# Ranking fallback when a record carries no relevance score
RANK_SCORE_HIGH = 0.8
RANK_SCORE_DEFAULT = 0.5

# Host substrings that always map to high credibility
TRUSTED_HOST_PATTERNS: Tuple[str, ...] = (
    "wikipedia.org",
    ".gov",
    ".edu",
    "reuters.com",
    "apnews.com",
    "bbc.com",
    "bbc.co.uk",
)

# Tavily score thresholds for untrusted hosts
HIGH_SCORE_THRESHOLD = 0.7
MEDIUM_SCORE_THRESHOLD = 0.5

# Domains searched for current events
NEWS_INCLUDE_DOMAINS: List[str] = [
    "reuters.com",
    "apnews.com",
    "bbc.com",
    "cnn.com",
    "theguardian.com",
    "nytimes.com",
    "washingtonpost.com",
    "npr.org",
    "bloomberg.com",
    "wsj.com",
]

# Domains searched for historical/reference facts
HISTORICAL_INCLUDE_DOMAINS: List[str] = [
    "wikipedia.org",
    "britannica.com",
    ".edu",
    "history.com",
    "smithsonianmag.com",
]

HISTORICAL_EXCLUDE_DOMAINS: List[str] = [
    "cnn.com",
    "foxnews.com",
    "msnbc.com",
]

# URL markers accepted by the historical Wikipedia fallback
REFERENCE_URL_MARKERS: Tuple[str, ...] = (
    "wikipedia.org",
    ".edu",
    "britannica.com",
)


def credibility_from_score(url: str, score: float) -> str:
    """Map a web result to a credibility tier.

    Args:
        url: Result URL.
        score: Search engine relevance score (0.0-1.0).

    Returns:
        "high", "medium" or "low".
    """
    lowered = url.lower()
    if any(pattern in lowered for pattern in TRUSTED_HOST_PATTERNS):
        return "high"
    if score > HIGH_SCORE_THRESHOLD:
        return "high"
    if score > MEDIUM_SCORE_THRESHOLD:
        return "medium"
    return "low"
