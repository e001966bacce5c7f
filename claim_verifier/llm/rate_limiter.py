"""Async token bucket rate limiter for Gemini request throttling."""

import asyncio
import time
from typing import Optional

from claim_verifier.config.logging import get_logger
from claim_verifier.config.settings import settings

logger = get_logger("llm.rate_limiter")


class TokenBucket:
    """
    Token bucket algorithm implementation for rate limiting.

    Tokens refill continuously at a fixed rate. Requests consume tokens and
    wait asynchronously when the bucket is empty.

    Attributes:
        capacity: Maximum number of tokens the bucket can hold
        refill_rate: Tokens added per second
        tokens: Current number of tokens available
        last_refill: Monotonic timestamp of last token refill
    """

    def __init__(self, capacity: int, refill_rate: float):
        """
        Initialize token bucket with capacity and refill rate.

        Args:
            capacity: Maximum tokens (e.g., 15 for 15 RPM)
            refill_rate: Tokens per second (e.g., 0.25 = 15 per minute)
        """
        self.capacity = capacity
        self.refill_rate = refill_rate
        self.tokens = float(capacity)
        self.last_refill = time.monotonic()
        self._lock = asyncio.Lock()

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = now - self.last_refill
        self.tokens = min(self.capacity, self.tokens + elapsed * self.refill_rate)
        self.last_refill = now

    def try_acquire(self, tokens: int = 1) -> bool:
        """Take tokens if available without waiting."""
        self._refill()
        if self.tokens >= tokens:
            self.tokens -= tokens
            return True
        return False

    async def acquire(self, tokens: int = 1) -> None:
        """Wait until tokens are available, then take them."""
        async with self._lock:
            while not self.try_acquire(tokens):
                wait_time = (tokens - self.tokens) / self.refill_rate
                logger.debug(f"Rate limited, waiting {wait_time:.2f}s")
                await asyncio.sleep(wait_time)


class RateLimiter:
    """
    Requests-per-minute limiter shared by all calls of one Gemini client.

    Attributes:
        rpm_bucket: Token bucket for request rate limiting
    """

    def __init__(self, max_rpm: Optional[int] = None):
        """
        Initialize rate limiter.

        Args:
            max_rpm: Maximum requests per minute (defaults to settings)
        """
        rpm = max_rpm or settings.max_rpm
        self.rpm_bucket = TokenBucket(capacity=rpm, refill_rate=rpm / 60.0)
        logger.info(f"RateLimiter initialized: {rpm} RPM")

    async def acquire(self) -> None:
        await self.rpm_bucket.acquire()
