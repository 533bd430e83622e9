"""In-process TTL cache for market data lookups."""

import time
from typing import Any, Callable, Optional


class QuoteCache:
    """
    Process-local key -> value store with a fixed freshness window.

    Shared by concurrent requests without a lock; on a concurrent miss the
    last writer wins.
    """

    def __init__(
        self,
        ttl_seconds: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl_seconds
        self._clock = clock
        # key -> (value, expires_at)
        self._entries: dict[str, tuple[Any, float]] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value if still fresh; evict and return None otherwise."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        """Store a value with a fresh expiry."""
        self._entries[key] = (value, self._clock() + self._ttl)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
