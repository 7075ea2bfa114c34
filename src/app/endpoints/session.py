"""Handler for REST API call to inspect a session."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from assistant import AssistantHolder
from models.responses import SessionResponse

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["session"])


@router.get("/session/{session_id}")
async def session_endpoint_handler(session_id: str) -> SessionResponse:
    """
    Handle request to the /session/{session_id} endpoint.

    Unknown sessions are created on first reference, so this endpoint
    always returns a session.

    Returns:
        SessionResponse: The session and its derived statistics.
    """
    logger.info("Session information requested for %s", session_id)
    orchestrator = AssistantHolder().get_orchestrator()
    session = await orchestrator.get_session(session_id)
    stats = await orchestrator.get_session_stats(session_id)
    return SessionResponse(
        session=session, stats=stats, timestamp=datetime.now(timezone.utc)
    )
