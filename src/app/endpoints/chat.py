"""Handler for REST API call to send a chat message."""

import logging
import time
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter

from assistant import AssistantHolder
from models.requests import ChatRequest
from models.responses import ChatResponse
from utils.session_id import new_session_id

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["chat"])


chat_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "response": "**Problems** (0 found)\n\n_Source: live-api | 2025-10-03T09:31:25+00:00_",
        "session_id": "ops-team-1",
        "timestamp": "2025-10-03T09:31:25+00:00",
        "processing_time_ms": 420,
    },
    422: {
        "detail": "Message is required and must be a non-empty string",
    },
}


@router.post("/chat", responses=chat_responses)
async def chat_endpoint_handler(chat_request: ChatRequest) -> ChatResponse:
    """
    Handle request to the /chat endpoint.

    Route the message through the orchestrator. Backend outages are
    reported as normal chat responses, never as HTTP errors, so the
    conversation can continue.

    Returns:
        ChatResponse: Formatted response and the session it was recorded in.
    """
    session_id = chat_request.session_id or new_session_id()
    logger.info(
        "Processing message from session %s: %s",
        session_id,
        chat_request.message[:100],
    )

    started = time.perf_counter()
    orchestrator = AssistantHolder().get_orchestrator()
    response = await orchestrator.handle_message(chat_request.message, session_id)
    processing_time_ms = int((time.perf_counter() - started) * 1000)

    return ChatResponse(
        response=response,
        session_id=session_id,
        timestamp=datetime.now(timezone.utc),
        processing_time_ms=processing_time_ms,
    )
