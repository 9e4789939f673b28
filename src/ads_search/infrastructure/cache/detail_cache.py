"""
Detail Cache

Session-lifetime memoization of fetched paper details, keyed by bibcode.

Features:
- Synchronous lookup of already fetched details (peek)
- Fetch on miss, one cache slot per bibcode
- Concurrent requests for the same bibcode share one in-flight fetch
- No eviction; entries live as long as the cache
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ads_search.domain.entities import PaperDetail
from ads_search.shared.exceptions import NotFoundError

logger = logging.getLogger(__name__)

DetailFetcher = Callable[[str], Awaitable["PaperDetail | None"]]


class DetailCache:
    """
    In-memory cache for paper details.

    A miss starts one fetch task per bibcode; callers arriving while it runs
    await the same task instead of issuing their own request. Failed or
    not-found fetches are not cached, so a later call retries.

    Example:
        cache = DetailCache(client.fetch_paper_detail)

        detail = await cache.get("2019ApJ...882L..24A")
        cache.peek("2019ApJ...882L..24A")  # same object, no I/O
    """

    def __init__(self, fetch_func: DetailFetcher):
        """
        Initialize cache.

        Args:
            fetch_func: Async function returning the detail for a bibcode,
                        or None when the remote reports no match
        """
        self._fetch = fetch_func
        self._cache: dict[str, PaperDetail] = {}
        self._pending: dict[str, asyncio.Task[PaperDetail]] = {}
        self._stats = CacheStats()

    @property
    def stats(self) -> CacheStats:
        """Get cache statistics."""
        return self._stats

    def peek(self, bibcode: str) -> PaperDetail | None:
        """Return the cached detail without fetching."""
        return self._cache.get(bibcode)

    async def get(self, bibcode: str) -> PaperDetail:
        """
        Get from cache or fetch and cache the result.

        Raises:
            NotFoundError: The remote reported zero matches
            APIError: Transport or remote failure from the fetch function
        """
        cached = self._cache.get(bibcode)
        if cached is not None:
            self._stats.hits += 1
            logger.debug(f"Detail cache hit: {bibcode}")
            return cached

        task = self._pending.get(bibcode)
        if task is not None:
            self._stats.coalesced += 1
            logger.debug(f"Joining in-flight detail fetch: {bibcode}")
        else:
            self._stats.misses += 1
            task = asyncio.ensure_future(self._load(bibcode))
            self._pending[bibcode] = task
            task.add_done_callback(lambda t: self._settle(bibcode, t))

        # Shielded so one cancelled waiter does not cancel the fetch for the others
        return await asyncio.shield(task)

    async def _load(self, bibcode: str) -> PaperDetail:
        self._stats.fetches += 1
        detail = await self._fetch(bibcode)
        if detail is None:
            raise NotFoundError("Paper", bibcode)
        # Detached by invalidate/clear while in flight: waiters still get it
        if self._pending.get(bibcode) is asyncio.current_task():
            self._cache[bibcode] = detail
        return detail

    def _settle(self, bibcode: str, task: asyncio.Task[PaperDetail]) -> None:
        if self._pending.get(bibcode) is task:
            del self._pending[bibcode]
        if not task.cancelled() and task.exception() is not None:
            logger.debug(f"Detail fetch failed for {bibcode}: {task.exception()}")

    def is_pending(self, bibcode: str) -> bool:
        """Whether a fetch for ``bibcode`` is currently in flight."""
        return bibcode in self._pending

    def invalidate(self, bibcode: str) -> bool:
        """
        Drop one cached detail. An in-flight fetch for it is detached
        and will not write its result back.

        Returns:
            True if an entry was removed
        """
        self._pending.pop(bibcode, None)
        return self._cache.pop(bibcode, None) is not None

    def clear(self) -> int:
        """
        Clear all cached details and detach in-flight fetches.

        Returns:
            Number of entries cleared
        """
        count = len(self._cache)
        self._cache.clear()
        self._pending.clear()
        return count

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, bibcode: str) -> bool:
        return bibcode in self._cache


@dataclass
class CacheStats:
    """Cache statistics."""

    hits: int = 0
    misses: int = 0
    coalesced: int = 0
    fetches: int = 0

    @property
    def total_requests(self) -> int:
        return self.hits + self.misses + self.coalesced

    @property
    def hit_rate(self) -> float:
        """Cache hit rate (0-1)."""
        total = self.total_requests
        return self.hits / total if total > 0 else 0.0

    def reset(self) -> None:
        self.hits = 0
        self.misses = 0
        self.coalesced = 0
        self.fetches = 0
