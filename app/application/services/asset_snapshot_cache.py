"""Time-boxed cache for the classified asset snapshot.

One process-wide slot (not per user or per token). Lookups are lazy and
pull-based: a miss or a forced refresh fetches the whole remote inventory,
classifies it and replaces the slot. There is no lock and no single-flight;
concurrent misses may both fetch and the last completed write wins.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from app.application.dtos.asset import AssetSnapshot, SnapshotLookup
from app.application.services.staleness_classifier import classify_assets
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TTL_MS = 10 * 60 * 1000

AssetFetcher = Callable[[], Awaitable[Iterable[Mapping[str, Any]]]]


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class _CacheEntry:
    snapshot: AssetSnapshot
    timestamp_ms: int


class AssetSnapshotCache:
    """Single-slot snapshot cache with a fixed TTL.

    The (snapshot, timestamp) pair lives in one immutable entry that is
    swapped in a single assignment, so readers never see a snapshot paired
    with another fetch's timestamp.
    """

    def __init__(
        self,
        ttl_ms: int = DEFAULT_TTL_MS,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        """Initialize an empty cache.

        Args:
            ttl_ms: Entry lifetime in milliseconds.
            clock: Returns epoch milliseconds (injectable for tests).
        """
        self.ttl_ms = ttl_ms
        self._clock = clock
        self._entry: _CacheEntry | None = None

    def peek(self) -> SnapshotLookup | None:
        """Return the current entry if still fresh, without fetching."""
        entry = self._entry
        if entry is None:
            return None
        age_ms = self._clock() - entry.timestamp_ms
        if age_ms >= self.ttl_ms:
            return None
        return SnapshotLookup(
            snapshot=entry.snapshot, cached=True, cache_age=round(age_ms / 1000)
        )

    async def get(
        self, fetch_assets: AssetFetcher, force_refresh: bool = False
    ) -> SnapshotLookup:
        """Return the cached snapshot or rebuild it.

        Args:
            fetch_assets: Coroutine factory returning every raw asset (called on miss).
            force_refresh: Skip the freshness check and always refetch.

        Returns:
            SnapshotLookup with cached=True and age in seconds on a hit,
            cached=False and age 0 after a fetch.

        Raises:
            Whatever fetch_assets raises; the previous entry is kept.
        """
        if not force_refresh:
            hit = self.peek()
            if hit is not None:
                logger.info("Returning cached assets data (age=%ss)", hit.cache_age)
                return hit

        logger.info("Fetching fresh assets from Snipe-IT (force_refresh=%s)", force_refresh)
        raw_assets = list(await fetch_assets())
        snapshot = classify_assets(raw_assets)
        self._entry = _CacheEntry(snapshot=snapshot, timestamp_ms=self._clock())
        logger.info("Cached %d assets", snapshot.total)
        return SnapshotLookup(snapshot=snapshot, cached=False, cache_age=0)

    def invalidate(self) -> None:
        """Drop the cached entry; the next get() refetches."""
        self._entry = None
