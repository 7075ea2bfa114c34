"""Unit tests for the /chat REST API endpoint."""

import pytest
from pytest_mock import MockerFixture

from app.endpoints.chat import chat_endpoint_handler
from models.requests import ChatRequest


@pytest.fixture(name="orchestrator")
def orchestrator_fixture(mocker: MockerFixture):
    """Orchestrator returned by the assistant holder."""
    orchestrator = mocker.Mock()
    orchestrator.handle_message = mocker.AsyncMock(
        return_value="Model says hi.\n\n_Source: model | 2025-10-03T09:31:25+00:00_"
    )
    mocker.patch(
        "app.endpoints.chat.AssistantHolder.get_orchestrator",
        return_value=orchestrator,
    )
    return orchestrator


@pytest.mark.asyncio
async def test_chat_endpoint(orchestrator) -> None:
    """Test the chat endpoint handler."""
    request = ChatRequest(message="Explain microservices", session_id="ops-team-1")

    response = await chat_endpoint_handler(request)

    assert response.session_id == "ops-team-1"
    assert response.response.startswith("Model says hi.")
    assert response.processing_time_ms >= 0
    orchestrator.handle_message.assert_awaited_once_with(
        "Explain microservices", "ops-team-1"
    )


@pytest.mark.asyncio
async def test_chat_endpoint_generates_session_id(
    mocker: MockerFixture, orchestrator
) -> None:
    """A session identifier is generated when none is provided."""
    mocker.patch("app.endpoints.chat.new_session_id", return_value="generated-id")

    response = await chat_endpoint_handler(ChatRequest(message="help"))

    assert response.session_id == "generated-id"
    orchestrator.handle_message.assert_awaited_once_with("help", "generated-id")
