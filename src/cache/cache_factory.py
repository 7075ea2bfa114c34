"""Cache factory class."""

import constants
from cache.cache import Cache
from cache.in_memory_cache import InMemoryCache
from cache.noop_cache import NoopCache
from cache.redis_cache import RedisCache
from log import get_logger
from models.config import CacheConfiguration

logger = get_logger("cache.cache_factory")


# pylint: disable=R0903
class CacheFactory:
    """Cache factory class."""

    @staticmethod
    def cache(config: CacheConfiguration) -> Cache:
        """Create an instance of Cache based on loaded configuration.

        Returns:
            An instance of `Cache` (either `RedisCache`, `InMemoryCache` or `NoopCache`).
        """
        logger.info("Creating cache instance of type %s", config.type)
        match config.type:
            case constants.CACHE_TYPE_NOOP:
                return NoopCache()
            case constants.CACHE_TYPE_MEMORY:
                if config.memory is not None:
                    return InMemoryCache(config.memory)
                raise ValueError("Expecting configuration for in-memory cache")
            case constants.CACHE_TYPE_REDIS:
                if config.redis is not None:
                    return RedisCache(config.redis)
                raise ValueError("Expecting configuration for Redis cache")
            case _:
                raise ValueError(
                    f"Invalid cache type: {config.type}. "
                    f"Use '{constants.CACHE_TYPE_REDIS}' '{constants.CACHE_TYPE_MEMORY}' "
                    f"or '{constants.CACHE_TYPE_NOOP}' options."
                )
