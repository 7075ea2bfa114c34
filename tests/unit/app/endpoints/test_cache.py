"""Unit tests for the /cache REST API endpoint."""

import pytest
from fastapi import HTTPException
from pytest_mock import MockerFixture

from app.endpoints.cache import (
    cache_clear_endpoint_handler,
    may_match_session_records,
)


@pytest.fixture(name="orchestrator")
def orchestrator_fixture(mocker: MockerFixture):
    """Orchestrator returned by the assistant holder."""
    orchestrator = mocker.Mock()
    orchestrator.clear_cache = mocker.AsyncMock(return_value=3)
    mocker.patch(
        "app.endpoints.cache.AssistantHolder.get_orchestrator",
        return_value=orchestrator,
    )
    return orchestrator


@pytest.mark.asyncio
async def test_clear_cache_default_pattern(orchestrator) -> None:
    """Test the cache clearing with the default pattern."""
    response = await cache_clear_endpoint_handler()

    assert response.pattern == "dt:*"
    assert response.deleted == 3
    orchestrator.clear_cache.assert_awaited_once_with("dt:*")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "pattern",
    ["session:*", "*", "*session*", "s*", "?ession:*", "[s]ession:*", "session:s1"],
)
async def test_clear_cache_rejects_session_patterns(orchestrator, pattern: str) -> None:
    """Session records can not be cleared."""
    with pytest.raises(HTTPException) as e:
        await cache_clear_endpoint_handler(pattern)

    assert e.value.status_code == 400
    orchestrator.clear_cache.assert_not_awaited()


@pytest.mark.asyncio
async def test_clear_cache_single_key(orchestrator) -> None:
    """A literal key of a cached result is accepted."""
    response = await cache_clear_endpoint_handler("dt:query:query:show problems")

    assert response.deleted == 3
    orchestrator.clear_cache.assert_awaited_once_with("dt:query:query:show problems")


@pytest.mark.parametrize(
    "pattern,expected",
    [
        ("dt:*", False),
        ("dt:query:*", False),
        ("sessions-archive", False),
        ("se*", True),
        ("session", True),
        ("session:abc*", True),
        ("\\session:*", True),
    ],
)
def test_may_match_session_records(pattern: str, expected: bool) -> None:
    """Only patterns whose literal prefix excludes session keys are safe."""
    assert may_match_session_records(pattern) is expected
