"""In-memory cache implementation."""

import time
from fnmatch import fnmatchcase
from typing import Callable, Optional

from cachetools import TLRUCache

from cache.cache import Cache
from log import get_logger
from models.cache_entry import CacheEntry
from models.config import InMemoryCacheConfig
from utils.connection_decorator import connection

logger = get_logger("cache.in_memory_cache")


def _entry_expiry(_key: str, entry: CacheEntry, _now: float) -> float:
    """Time-to-use function for TLRUCache: each entry carries its own expiry."""
    return entry.expires_at


class InMemoryCache(Cache):
    """Process-local cache with per-entry TTL and LRU eviction."""

    def __init__(
        self, config: InMemoryCacheConfig, timer: Callable[[], float] = time.time
    ) -> None:
        """Create a new instance of in-memory cache.

        Args:
            config: Cache configuration.
            timer: Clock used for expiry, replaceable in tests.
        """
        self.cache_config = config
        self._timer = timer
        self._connected = False
        self._cache: TLRUCache[str, CacheEntry] = TLRUCache(
            maxsize=config.max_entries, ttu=_entry_expiry, timer=timer
        )

    async def connect(self) -> bool:
        """Initialize connection to storage."""
        logger.info("Using in-memory cache with %d entries", self.cache_config.max_entries)
        self._connected = True
        return True

    def connected(self) -> bool:
        """Check if connection to cache is alive."""
        return self._connected

    def mark_disconnected(self) -> None:
        """Record that the cache is not usable."""
        self._connected = False

    async def ping(self) -> bool:
        """Health check."""
        return self._connected

    @connection(default=None)
    async def read(self, key: str) -> Optional[bytes]:
        """Return the value stored under the key, or None when absent or expired."""
        entry = self._cache.get(key)
        if entry is None or entry.expired(self._timer()):
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return entry.value

    @connection(default=False)
    async def write(self, key: str, value: bytes, ttl: int) -> bool:
        """Store the value under the key for `ttl` seconds."""
        self._cache[key] = CacheEntry(
            key=key, value=value, expires_at=self._timer() + ttl
        )
        logger.debug("Cached: %s (TTL: %ds)", key, ttl)
        return True

    @connection(default=False)
    async def write_if_absent(self, key: str, value: bytes, ttl: int) -> bool:
        """Store the value only when the key does not exist yet."""
        if key in self._cache:
            return False
        return await self.write(key, value, ttl)

    @connection(default=False)
    async def remove(self, key: str) -> bool:
        """Delete the value stored under the key."""
        removed = self._cache.pop(key, None) is not None
        logger.debug("Deleted: %s", key)
        return removed

    @connection(default=0)
    async def remove_matching(self, pattern: str) -> int:
        """Delete all keys matching the glob-style pattern."""
        self._cache.expire()
        keys = [key for key in list(self._cache.keys()) if fnmatchcase(key, pattern)]
        for key in keys:
            del self._cache[key]
        logger.info("Deleted %d keys matching: %s", len(keys), pattern)
        return len(keys)
