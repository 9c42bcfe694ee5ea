"""Explicit get-or-compute cache for expensive recalculations.

A CalculationCache is passed to the functions that can use one; none of them
require it, and results are identical with or without it.
"""

from __future__ import annotations

import hashlib
import logging
import time
from collections import OrderedDict
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any, TypeVar

from training_planner.config import CACHE_MAX_AGE_S, CACHE_MAX_SIZE

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheStats:
    """Hit/miss counters and current occupancy."""

    hits: int
    misses: int
    size: int

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0


@dataclass
class _Entry:
    value: Any
    stored_at: float


def stable_key(namespace: str, key: Hashable) -> str:
    """SHA-256 of the namespace and the ``repr`` of the key.

    Keys are frozen dataclasses and tuples of them, whose repr is
    deterministic and covers every field.
    """
    digest = hashlib.sha256(f"{namespace}:{key!r}".encode()).hexdigest()
    return f"{namespace}-{digest}"


class CalculationCache:
    """Least-recently-used cache with an age bound.

    Args:
        max_size: Maximum number of entries; the least recently used entry
            is evicted when full.
        max_age_s: Entries older than this many seconds are recomputed.
        clock: Monotonic time source in seconds.
    """

    def __init__(
        self,
        max_size: int = CACHE_MAX_SIZE,
        max_age_s: float = CACHE_MAX_AGE_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self._max_size = max_size
        self._max_age_s = max_age_s
        self._clock = clock
        self._entries: OrderedDict[str, _Entry] = OrderedDict()
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_compute(self, namespace: str, key: Hashable, compute: Callable[[], T]) -> T:
        """Return the cached value for ``key`` or compute and store it."""
        cache_key = stable_key(namespace, key)
        now = self._clock()
        entry = self._entries.get(cache_key)
        if entry is not None:
            if now - entry.stored_at <= self._max_age_s:
                self._entries.move_to_end(cache_key)
                self._hits += 1
                logger.debug("Cache hit %s", namespace)
                return entry.value
            del self._entries[cache_key]

        self._misses += 1
        value = compute()
        if len(self._entries) >= self._max_size:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Cache evicted %s", evicted.split("-", 1)[0])
        self._entries[cache_key] = _Entry(value=value, stored_at=now)
        return value

    def clear(self) -> None:
        self._entries.clear()
        self._hits = 0
        self._misses = 0

    def stats(self) -> CacheStats:
        return CacheStats(hits=self._hits, misses=self._misses, size=len(self._entries))
