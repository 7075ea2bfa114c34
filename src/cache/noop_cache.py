"""No-operation cache implementation."""

from typing import Optional

from cache.cache import Cache
from log import get_logger
from utils.connection_decorator import connection

logger = get_logger("cache.noop_cache")


class NoopCache(Cache):
    """Cache that is never connected; every operation is a no-op."""

    async def connect(self) -> bool:
        """Initialize connection to storage."""
        logger.info("Caching is disabled")
        return False

    def connected(self) -> bool:
        """Check if connection to cache is alive."""
        return False

    def mark_disconnected(self) -> None:
        """Nothing to record, the cache is never connected."""

    async def ping(self) -> bool:
        """Health check, always fails."""
        return False

    @connection(default=None)
    async def read(self, key: str) -> Optional[bytes]:
        """Return None in all cases."""
        return None

    @connection(default=False)
    async def write(self, key: str, value: bytes, ttl: int) -> bool:
        """Return False in all cases."""
        return False

    @connection(default=False)
    async def write_if_absent(self, key: str, value: bytes, ttl: int) -> bool:
        """Return False in all cases."""
        return False

    @connection(default=False)
    async def remove(self, key: str) -> bool:
        """Return False in all cases."""
        return False

    @connection(default=0)
    async def remove_matching(self, pattern: str) -> int:
        """Return 0 in all cases."""
        return 0
