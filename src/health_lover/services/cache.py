"""In-process TTL cache for recommendation responses."""

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from health_lover.domain.recommendations import RecommendationRequest

DEFAULT_TTL_SECONDS = 30 * 60

_logger = logging.getLogger(__name__)


class Cache(Protocol):
    """Cache interface keyed by recommendation requests."""

    def get(self, request: RecommendationRequest) -> object | None:
        """Return a cached payload if present and not expired."""

    def put(self, request: RecommendationRequest, data: object) -> None:
        """Store a payload for the request, replacing any previous one."""


@dataclass
class _CacheEntry:
    data: object
    stored_at: float


class RecommendationCache(Cache):
    """Thread-safe TTL cache with an optional LRU size bound.

    Expired entries are ignored on read rather than removed; they are replaced
    by the next ``put`` for the same key or pushed out by the size bound.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, _CacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, request: RecommendationRequest) -> object | None:
        """Return the payload stored for the request while it is fresh."""
        key = request.cache_key
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or self._clock() - entry.stored_at >= self.ttl_seconds:
                _logger.debug("Cache miss for %s", request.kind)
                return None
            self._entries.move_to_end(key)
        _logger.debug("Cache hit for %s", request.kind)
        return entry.data

    def put(self, request: RecommendationRequest, data: object) -> None:
        """Store the payload with the current timestamp."""
        key = request.cache_key
        with self._lock:
            self._entries[key] = _CacheEntry(data=data, stored_at=self._clock())
            self._entries.move_to_end(key)
            if self.max_entries is not None:
                while len(self._entries) > self.max_entries:
                    self._entries.popitem(last=False)
        _logger.debug("Saved to cache: %s", request.kind)

    def clear(self, request: RecommendationRequest) -> None:
        """Drop the entry for one request."""
        with self._lock:
            self._entries.pop(request.cache_key, None)

    def clear_all(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
