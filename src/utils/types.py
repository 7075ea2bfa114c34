"""Types shared across the service."""

from typing import Any


class Singleton(type):
    """Metaclass giving each class a single process-wide instance.

    The instance is built on the first call. `discard` forgets it, so the
    next call builds a fresh one.
    """

    _instances: dict[type, Any] = {}

    def __call__(cls, *args: Any, **kwargs: Any) -> Any:
        """Return the instance of the class, building it on first use."""
        instance = Singleton._instances.get(cls)
        if instance is None:
            instance = super().__call__(*args, **kwargs)
            Singleton._instances[cls] = instance
        return instance

    def discard(cls) -> None:
        """Forget the instance of the class."""
        Singleton._instances.pop(cls, None)
