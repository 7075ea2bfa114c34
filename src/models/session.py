"""Models for per-conversation session state."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Topic(str, Enum):
    """Topic a conversation is currently about."""

    NONE = "none"
    OBSERVABILITY = "observability"
    ENTERPRISE = "enterprise"


class Urgency(str, Enum):
    """Urgency signal detected in an enterprise message."""

    NORMAL = "normal"
    ELEVATED = "elevated"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Ordering used to never downgrade a detected urgency."""
        return _URGENCY_RANKS[self]


_URGENCY_RANKS = {Urgency.NORMAL: 0, Urgency.ELEVATED: 1, Urgency.HIGH: 2}


class DomainContext(BaseModel):
    """Enterprise sub-systems and urgency mentioned in the last message."""

    systems: list[str] = Field(default_factory=list)
    urgency: Urgency = Urgency.NORMAL


class SessionContext(BaseModel):
    """Rolling topic context of a conversation."""

    current_topic: Topic = Topic.NONE
    recent_queries: list[str] = Field(default_factory=list)
    domain_context: Optional[DomainContext] = None


class LastExchange(BaseModel):
    """Truncated projection of the most recent message and response."""

    message: str
    truncated_response: str
    timestamp: datetime


class Session(BaseModel):
    """Model representing one conversation.

    Attributes:
        id: Opaque session identifier
        created_at: When the session was created
        updated_at: When the session was last written by an exchange
        message_count: Number of recorded exchanges
        context: Rolling topic context
        last_exchange: The most recent exchange, if any
    """

    id: str
    created_at: datetime
    updated_at: datetime
    message_count: int = 0
    context: SessionContext = Field(default_factory=SessionContext)
    last_exchange: Optional[LastExchange] = None


class SessionStats(BaseModel):
    """Derived, read-only view of a session."""

    message_count: int
    duration_seconds: float
    current_topic: Topic
