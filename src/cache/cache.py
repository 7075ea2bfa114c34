"""Abstract class that is the parent for all cache implementations.

All cache keys in the service are built by `Cache.derive_key`. Every data
operation is wrapped by the `connection` decorator in the implementations,
so a disconnected or failing store behaves like an empty one: reads return
`None`, writes and deletions report failure, and nothing is raised.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional


class Cache(ABC):
    """Abstract key-value cache with TTL and a connectivity probe."""

    @staticmethod
    def derive_key(category: str, params: str | Mapping[str, Any]) -> str:
        """Derive a cache key from a category and its parameters.

        Mapping parameters are sorted by name so that the same parameter set
        always produces the same key regardless of construction order.
        Scalar parameters are appended verbatim.

        Args:
            category: Key prefix, for example "dt:query".
            params: Scalar value or mapping of parameter names to values.

        Returns:
            The derived key, e.g. "dt:query:query:show problems".
        """
        parts = [category]
        if isinstance(params, Mapping):
            for name in sorted(params):
                parts.append(f"{name}:{params[name]}")
        else:
            parts.append(str(params))
        return ":".join(parts)

    @abstractmethod
    async def connect(self) -> bool:
        """Initialize connection to the store, return connectivity."""

    @abstractmethod
    def connected(self) -> bool:
        """Check if connection to cache is alive."""

    @abstractmethod
    def mark_disconnected(self) -> None:
        """Record that the store was found unreachable."""

    @abstractmethod
    async def ping(self) -> bool:
        """Health check; a successful ping restores connectivity."""

    async def reconnect(self) -> bool:
        """Try to restore a lost connection, return connectivity.

        The default implementation never reconnects; stores that can recover
        from an outage override it.
        """
        return self.connected()

    @abstractmethod
    async def read(self, key: str) -> Optional[bytes]:
        """Return the value stored under the key, or None."""

    @abstractmethod
    async def write(self, key: str, value: bytes, ttl: int) -> bool:
        """Store the value under the key for `ttl` seconds."""

    @abstractmethod
    async def write_if_absent(self, key: str, value: bytes, ttl: int) -> bool:
        """Store the value only when the key does not exist yet."""

    @abstractmethod
    async def remove(self, key: str) -> bool:
        """Delete the value stored under the key."""

    @abstractmethod
    async def remove_matching(self, pattern: str) -> int:
        """Delete all keys matching the glob-style pattern, return their count."""

    async def disconnect(self) -> None:
        """Release the connection to the store."""
