"""Redis cache implementation."""

import time
from typing import Any, Awaitable, Callable, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError, ResponseError

import constants
from cache.cache import Cache
from errors import CacheCommandError, CacheUnavailableError
from log import get_logger
from models.config import RedisCacheConfig
from utils.connection_decorator import connection

logger = get_logger("cache.redis_cache")


class RedisCache(Cache):
    """Cache backed by a Redis server.

    Expiry is delegated to Redis (SETEX / SET NX EX), so a read can never
    return a value past its TTL. After an outage the next operation pings the
    server again, at most once per reconnection interval.
    """

    def __init__(
        self, config: RedisCacheConfig, timer: Callable[[], float] = time.monotonic
    ) -> None:
        """Create a new instance of Redis cache.

        Args:
            config: Cache configuration.
            timer: Clock pacing reconnection attempts, replaceable in tests.
        """
        self.redis_config = config
        self._timer = timer
        self._connected = False
        self._last_attempt: Optional[float] = None
        # an empty password means no authentication
        password = (
            config.password.get_secret_value() if config.password is not None else ""
        )
        self._client = redis.Redis(
            host=config.host,
            port=config.port,
            db=config.db,
            password=password or None,
            socket_timeout=config.socket_timeout,
            socket_connect_timeout=config.socket_timeout,
        )

    async def _execute(self, operation: str, awaitable: Awaitable[Any]) -> Any:
        """Await a Redis command, translating its failures."""
        try:
            return await awaitable
        except ResponseError as e:
            raise CacheCommandError(f"Redis {operation} rejected: {e}") from e
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"Redis {operation} failed: {e}") from e

    async def connect(self) -> bool:
        """Initialize connection to Redis, return connectivity."""
        logger.info(
            "Connecting to Redis at %s:%d", self.redis_config.host, self.redis_config.port
        )
        if await self.ping():
            logger.info("Redis connected")
        else:
            logger.warning("Redis connection failed - continuing without cache")
        return self._connected

    def connected(self) -> bool:
        """Check if connection to cache is alive."""
        return self._connected

    def mark_disconnected(self) -> None:
        """Record that Redis was found unreachable."""
        self._connected = False
        self._last_attempt = self._timer()

    async def ping(self) -> bool:
        """Health check; a successful PING restores connectivity."""
        self._last_attempt = self._timer()
        try:
            self._connected = bool(await self._execute("PING", self._client.ping()))
        except (CacheUnavailableError, CacheCommandError) as e:
            logger.warning("%s", e)
            self._connected = False
        return self._connected

    async def reconnect(self) -> bool:
        """Ping a lost server again once the reconnection interval has passed."""
        if self._connected:
            return True
        if (
            self._last_attempt is not None
            and self._timer() - self._last_attempt
            < constants.CACHE_RECONNECT_INTERVAL_SECONDS
        ):
            return False
        if await self.ping():
            logger.info("Redis connection restored")
        return self._connected

    @connection(default=None)
    async def read(self, key: str) -> Optional[bytes]:
        """Return the value stored under the key, or None."""
        value = await self._execute("GET", self._client.get(key))
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return value

    @connection(default=False)
    async def write(self, key: str, value: bytes, ttl: int) -> bool:
        """Store the value under the key for `ttl` seconds."""
        await self._execute("SETEX", self._client.setex(key, ttl, value))
        logger.debug("Cached: %s (TTL: %ds)", key, ttl)
        return True

    @connection(default=False)
    async def write_if_absent(self, key: str, value: bytes, ttl: int) -> bool:
        """Store the value only when the key does not exist yet."""
        stored = await self._execute(
            "SET NX", self._client.set(key, value, ex=ttl, nx=True)
        )
        return bool(stored)

    @connection(default=False)
    async def remove(self, key: str) -> bool:
        """Delete the value stored under the key."""
        deleted = await self._execute("DEL", self._client.delete(key))
        logger.debug("Deleted: %s", key)
        return bool(deleted)

    @connection(default=0)
    async def remove_matching(self, pattern: str) -> int:
        """Delete all keys matching the glob-style pattern."""
        keys = await self._execute("KEYS", self._client.keys(pattern))
        if not keys:
            return 0
        deleted = await self._execute("DEL", self._client.delete(*keys))
        logger.info("Deleted %d keys matching: %s", deleted, pattern)
        return int(deleted)

    async def disconnect(self) -> None:
        """Close the connection pool."""
        self._connected = False
        try:
            await self._client.aclose()
        except (RedisError, OSError) as e:
            logger.warning("Redis disconnect failed: %s", e)
