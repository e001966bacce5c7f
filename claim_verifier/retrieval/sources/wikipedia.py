"""Wikipedia search used as the keyless web evidence fallback.

Search term selection: the first claim entity with honorifics stripped, or
the first meaningful keyword of the claim when there are no entities.
Each opensearch hit is expanded with the page's plain-text intro extract.
"""

import re
from typing import Any, Dict, List, Optional, Sequence

from claim_verifier.config.source_credibility import REFERENCE_URL_MARKERS
from claim_verifier.retrieval.sources.base import BaseEvidenceSource
from claim_verifier.schemas.evidence_schema import Credibility, EvidenceRecord, SourceKind

WIKIPEDIA_API_URL = "https://en.wikipedia.org/w/api.php"
OPENSEARCH_LIMIT = 3
EXTRACT_LENGTH = 500
NO_EXTRACT = "No description available."

HONORIFIC_PATTERN = re.compile(
    r"^(Shri|Shrimati|Mr\.|Mrs\.|Ms\.|Dr\.|Prof\.|Sir|Dame|Lord|Lady)\s+",
    re.IGNORECASE,
)

STOPWORDS = frozenset(
    {"the", "is", "are", "was", "were", "a", "an", "and", "or", "but", "in", "on", "at", "to", "of"}
)


def clean_entity_name(name: str) -> str:
    """Strip a leading title or honorific ("Dr. Jane Doe" -> "Jane Doe")."""
    return HONORIFIC_PATTERN.sub("", name).strip()


def extract_search_terms(claim: str, limit: int = 3) -> List[str]:
    """Fallback terms: words longer than three characters that are not stopwords."""
    words = [
        word for word in claim.split()
        if len(word) > 3 and word.lower() not in STOPWORDS
    ]
    return words[:limit]


def is_reference_url(url: str) -> bool:
    """True for encyclopedic/educational URLs and anything that is not a news site."""
    lowered = url.lower()
    return any(marker in lowered for marker in REFERENCE_URL_MARKERS) or "news" not in lowered


class WikipediaSource(BaseEvidenceSource):
    """Keyless Wikipedia opensearch + extract client."""

    name = "wikipedia"

    async def _search(
        self,
        query: str,
        entities: Optional[Sequence[str]] = None,
        source_kind: SourceKind = SourceKind.WEB,
        reference_only: bool = False,
    ) -> List[EvidenceRecord]:
        terms = [clean_entity_name(e) for e in entities] if entities else extract_search_terms(query)
        search_term = terms[0] if terms and terms[0] else query

        async with self._client() as client:
            response = await client.get(
                WIKIPEDIA_API_URL,
                params={
                    "action": "opensearch",
                    "search": search_term,
                    "limit": OPENSEARCH_LIMIT,
                    "format": "json",
                },
            )
            response.raise_for_status()
            # [query, [titles], [descriptions], [urls]]
            data = response.json()
            titles: List[str] = data[1] if len(data) > 1 else []
            urls: List[str] = data[3] if len(data) > 3 else []

            records: List[EvidenceRecord] = []
            for title, url in zip(titles, urls):
                if reference_only and not is_reference_url(url):
                    continue
                extract = await self._fetch_extract(client, title)
                records.append(
                    EvidenceRecord(
                        title=title,
                        url=url,
                        snippet=extract or NO_EXTRACT,
                        credibility=Credibility.HIGH,
                        source_kind=source_kind,
                        source="Wikipedia",
                    )
                )

        return records

    async def _fetch_extract(self, client, title: str) -> Optional[str]:
        """First EXTRACT_LENGTH characters of a page intro, or None."""
        try:
            response = await client.get(
                WIKIPEDIA_API_URL,
                params={
                    "action": "query",
                    "format": "json",
                    "prop": "extracts",
                    "exintro": "true",
                    "explaintext": "true",
                    "titles": title,
                },
            )
            response.raise_for_status()
            pages: Dict[str, Any] = response.json().get("query", {}).get("pages", {})
        except Exception as e:
            self.logger.warning(f"Failed to fetch extract for '{title}': {e}")
            return None

        for page in pages.values():
            extract = page.get("extract")
            if extract:
                return extract[:EXTRACT_LENGTH] + "..."
        return None
