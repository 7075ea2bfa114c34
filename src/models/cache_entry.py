"""Model for a value held by the key-value cache."""

from pydantic import BaseModel


class CacheEntry(BaseModel):
    """Model representing a cache entry.

    Attributes:
        key: Derived cache key
        value: Opaque serialized payload
        expires_at: Expiry instant as a timestamp of the cache clock
    """

    key: str
    value: bytes
    expires_at: float

    def expired(self, now: float) -> bool:
        """Check whether the entry is past its expiry instant."""
        return now >= self.expires_at
