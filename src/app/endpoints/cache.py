"""Handler for REST API call to clear cached query results."""

import logging
import re

from fastapi import APIRouter, HTTPException, status

import constants
from assistant import AssistantHolder
from models.responses import CacheClearResponse

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["cache"])

# characters with a special meaning in Redis and fnmatch glob patterns
GLOB_SPECIAL_CHARACTERS = re.compile(r"[*?\[\\]")


def may_match_session_records(pattern: str) -> bool:
    """Check if the glob pattern could match any session key.

    Only the literal prefix before the first special character is
    inspected: the pattern is considered dangerous when that prefix is
    compatible with the session key prefix. This refuses some harmless
    patterns (for example `?t:*`) but never lets a session-matching one
    through.
    """
    session_prefix = f"{constants.SESSION_KEY_PREFIX}:"
    literal = GLOB_SPECIAL_CHARACTERS.split(pattern, maxsplit=1)[0]
    return session_prefix.startswith(literal) or literal.startswith(session_prefix)


@router.delete("/cache")
async def cache_clear_endpoint_handler(
    pattern: str = constants.DEFAULT_CACHE_CLEAR_PATTERN,
) -> CacheClearResponse:
    """
    Handle request to the /cache endpoint.

    Delete cached query results matching a glob-style pattern. Session
    records can not be cleared through this endpoint.

    Returns:
        CacheClearResponse: The pattern and the number of deleted keys.
    """
    if may_match_session_records(pattern):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "response": "Invalid cache pattern",
                "cause": f"Pattern '{pattern}' would match session records",
            },
        )
    orchestrator = AssistantHolder().get_orchestrator()
    deleted = await orchestrator.clear_cache(pattern)
    return CacheClearResponse(pattern=pattern, deleted=deleted)
