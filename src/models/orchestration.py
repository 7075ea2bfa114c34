"""Models describing how a message was routed and answered."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class Intent(str, Enum):
    """Classified purpose of an inbound message."""

    LIVE_QUERY = "live_query"
    KNOWLEDGE_QUERY = "knowledge_query"
    MODEL_CHAT = "model_chat"
    HELP = "help"


class Provenance(str, Enum):
    """Backend (or cache) that produced the final response."""

    CACHE = "cache"
    LIVE_API = "live-api"
    MODEL = "model"
    KNOWLEDGE_BASE = "knowledge-base"
    HELP = "help"
    ERROR = "error"


class OrchestrationResult(BaseModel):
    """Transient result of one orchestrated request.

    Attributes:
        text: Rendered response body, without the provenance trailer
        provenance: Which backend produced the text
        timestamp: When the result was produced
    """

    text: str
    provenance: Provenance
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
