"""Token cache implementations."""

import time
from threading import Lock
from typing import Callable, Optional, Protocol


class TokenCache(Protocol):
    """Key-value store with per-entry expiry."""

    def get(self, key: str) -> Optional[str]:
        """Return the value for key, or None when absent or expired."""
        ...

    def put(self, key: str, value: str, ttl: float) -> None:
        """Store value under key for ttl seconds."""
        ...

    def forget(self, key: str) -> None:
        """Drop key if present."""
        ...


class InMemoryTokenCache:
    """Process-local token cache with time based eviction."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize the cache.

        Args:
            clock: Source of the current time in seconds. Tests pass a fake.
        """
        self.clock = clock
        self.entries: dict[str, tuple[str, float]] = {}
        self.lock = Lock()

    def get(self, key: str) -> Optional[str]:
        with self.lock:
            entry = self.entries.get(key)
            if entry is None:
                return None

            value, expires_at = entry
            if self.clock() >= expires_at:
                del self.entries[key]
                return None

            return value

    def put(self, key: str, value: str, ttl: float) -> None:
        if ttl <= 0:
            raise ValueError("ttl must be positive")

        with self.lock:
            self.entries[key] = (value, self.clock() + ttl)

    def forget(self, key: str) -> None:
        with self.lock:
            self.entries.pop(key, None)

    def clear(self) -> None:
        with self.lock:
            self.entries.clear()
