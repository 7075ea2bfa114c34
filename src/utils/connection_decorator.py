"""Decorator that makes cache operations degrade to neutral values."""

from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar

from errors import CacheCommandError, CacheUnavailableError
from log import get_logger

logger = get_logger("utils.connection_decorator")

T = TypeVar("T")


def connection(
    default: Any = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Wrap a cache method so it never raises when the store misbehaves.

    When the cache is not connected, one reconnection attempt is made
    through `reconnect()`; if that fails the wrapped method is not called
    and `default` is returned. When the method raises
    `CacheUnavailableError`, the cache is marked as disconnected. A
    `CacheCommandError` only affects the current call, the connection is
    kept. In both cases `default` is returned.

    Args:
        default: Value returned instead of the method result.

    Returns:
        The decorator.
    """

    def decorator(method: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(method)
        async def wrapper(self: Any, *args: Any, **kwargs: Any) -> T:
            if not self.connected() and not await self.reconnect():
                logger.debug("Cache is not connected, skipping %s", method.__name__)
                return default
            try:
                return await method(self, *args, **kwargs)
            except CacheCommandError as e:
                logger.warning("Cache command failed in %s: %s", method.__name__, e)
                return default
            except CacheUnavailableError as e:
                logger.warning("Cache unavailable in %s: %s", method.__name__, e)
                self.mark_disconnected()
                return default

        return wrapper

    return decorator
