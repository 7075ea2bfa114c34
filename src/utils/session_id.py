"""Identifiers for sessions started without one."""

from uuid import uuid4


def new_session_id() -> str:
    """Return a fresh random session identifier (canonical UUID4 text)."""
    return str(uuid4())
