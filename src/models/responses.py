"""Models for REST API responses."""

from datetime import datetime

from pydantic import BaseModel, Field

from models.session import Session, SessionStats


class ChatResponse(BaseModel):
    """Model representing a response to a chat message.

    Attributes:
        response: Formatted response text including the provenance trailer.
        session_id: Session the message was recorded in.
        timestamp: When the response was produced.
        processing_time_ms: Time spent handling the message.

    Example:
        ```python
        chat_response = ChatResponse(
            response="No current problems.",
            session_id="ops-team-1",
            timestamp=datetime.now(timezone.utc),
            processing_time_ms=42,
        )
        ```
    """

    response: str = Field(
        description="Formatted response with provenance trailer",
        examples=["**No current problems!**\n\n_Source: live-api | 2025-10-03T09:31:25Z_"],
    )

    session_id: str = Field(
        description="Session identifier",
        examples=["ops-team-1"],
    )

    timestamp: datetime = Field(description="Response timestamp")

    processing_time_ms: int = Field(
        description="Time spent handling the message in milliseconds",
        examples=[42, 1250],
    )


class SessionResponse(BaseModel):
    """Model representing a session introspection response.

    Attributes:
        session: The stored session.
        stats: Statistics derived from the session.
        timestamp: When the response was produced.
    """

    session: Session
    stats: SessionStats
    timestamp: datetime


class InfoResponse(BaseModel):
    """Model representing a response to an info request.

    Attributes:
        name: Service name.
        service_version: Service version.
        features: Backends and capabilities provided by the service.
        live_api_configured: Whether the metrics/incident API is configured.
        cache_connected: Whether the key-value cache is reachable.
        model_url: URL of the model backend.
    """

    name: str = Field(
        description="Service name",
        examples=["Ops Assistant"],
    )

    service_version: str = Field(
        description="Service version",
        examples=["0.1.0", "0.3.0"],
    )

    features: list[str] = Field(
        description="Capabilities provided by the service",
        examples=[["Live problem queries", "Session management"]],
    )

    live_api_configured: bool = Field(
        description="Flag indicating that the metrics/incident API is configured",
        examples=[True, False],
    )

    cache_connected: bool = Field(
        description="Flag indicating that the key-value cache is reachable",
        examples=[True, False],
    )

    model_url: str = Field(
        description="URL of the model backend",
        examples=["http://localhost:11434"],
    )


class ComponentsHealth(BaseModel):
    """Health of the backends the service depends on."""

    cache: bool
    live_api: bool
    model: bool


class HealthResponse(BaseModel):
    """Model representing a response to a health request.

    Attributes:
        status: Overall status; the service stays healthy when backends are down.
        service: Service name.
        timestamp: When the check was made.
        components: Per-backend health.

    Example:
        ```python
        health_response = HealthResponse(
            status="healthy",
            service="Ops Assistant",
            timestamp=datetime.now(timezone.utc),
            components=ComponentsHealth(cache=True, live_api=True, model=False),
        )
        ```
    """

    status: str = Field(
        description="Overall service status",
        examples=["healthy", "degraded"],
    )
    service: str
    timestamp: datetime
    components: ComponentsHealth


class CacheClearResponse(BaseModel):
    """Model representing a response to a cache clearing request."""

    pattern: str = Field(
        description="Pattern the cleared keys were matched with",
        examples=["dt:*"],
    )
    deleted: int = Field(
        description="Number of deleted keys",
        examples=[0, 12],
    )
