"""Unit tests for session identifier generation."""

import uuid

from utils.session_id import new_session_id


def test_new_session_id() -> None:
    """Generated identifiers are canonical version 4 UUIDs."""
    session_id = new_session_id()

    parsed = uuid.UUID(session_id)
    assert parsed.version == 4
    assert str(parsed) == session_id


def test_new_session_id_is_unique() -> None:
    """Each call yields a different identifier."""
    assert new_session_id() != new_session_id()
