"""Base class for evidence sources.

An evidence source wraps one external search backend and converts its
results to EvidenceRecord objects. Sources never raise past search():
a failing or unconfigured backend yields an empty list and a log line,
so one bad source cannot fail a verification.
"""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

import httpx

from claim_verifier.config.logging import get_logger
from claim_verifier.config.settings import settings
from claim_verifier.schemas.evidence_schema import EvidenceRecord


class BaseEvidenceSource(ABC):
    """
    Abstract base for HTTP-backed evidence sources.

    Subclasses implement _search(); callers use search().

    Attributes:
        name: Short source identifier used in logs
        timeout: Per-request HTTP timeout in seconds
    """

    name: str = "source"

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the source.

        Args:
            http_client: Shared AsyncClient. When omitted, a client is opened
                and closed around each search.
            timeout: HTTP timeout override in seconds.
        """
        self._http_client = http_client
        self.timeout = timeout or settings.http_timeout_seconds
        self.logger = get_logger(f"sources.{self.name}")

    @property
    def available(self) -> bool:
        """Whether the backend is configured (API keys present)."""
        return True

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client

    async def search(self, query: str, **params) -> List[EvidenceRecord]:
        """
        Search the backend, returning [] on any failure.

        Args:
            query: Search text
            **params: Source-specific options forwarded to _search()

        Returns:
            Evidence records, possibly empty
        """
        if not self.available:
            self.logger.debug(f"{self.name} not configured, skipping search")
            return []

        try:
            records = await self._search(query, **params)
        except Exception as e:
            self.logger.warning(f"{self.name} search failed: {e}")
            return []

        self.logger.info(f"{self.name} returned {len(records)} results")
        return records

    @abstractmethod
    async def _search(self, query: str, **params) -> List[EvidenceRecord]:
        """Backend-specific search. May raise."""
