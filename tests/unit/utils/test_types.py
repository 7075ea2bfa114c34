"""Unit tests for functions defined in utils.types module."""

from utils.types import Singleton


class Registry(metaclass=Singleton):
    """Class using the Singleton metaclass."""

    def __init__(self) -> None:
        """Initialize the registry."""
        self.entries: list[str] = []


class OtherRegistry(metaclass=Singleton):
    """Second class using the Singleton metaclass."""


def test_singleton() -> None:
    """Test that only one instance is ever created."""
    Registry().entries.append("a")
    assert Registry() is Registry()
    assert Registry().entries == ["a"]


def test_instances_are_per_class() -> None:
    """Each class gets its own instance."""
    assert OtherRegistry() is not Registry()


def test_discard() -> None:
    """A discarded instance is replaced by a fresh one."""
    registry = Registry()
    Registry.discard()

    assert Registry() is not registry
    assert Registry().entries == []
