"""Service version, kept in sync with pyproject.toml."""

__version__ = "0.3.0"
