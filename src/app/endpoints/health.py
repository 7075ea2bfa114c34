"""Handler for health REST API endpoint.

An unavailable backend makes the service degraded, never unhealthy: every
message still gets a fallback answer.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from assistant import AssistantHolder
from configuration import configuration
from models.responses import ComponentsHealth, HealthResponse

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["health"])


@router.get("/health")
async def health_endpoint_handler() -> HealthResponse:
    """
    Handle request to the /health endpoint.

    Ping the cache (which restores its connectivity flag when Redis is
    back), check the model backend and report whether the live API is
    configured.

    Returns:
        HealthResponse: Overall and per-backend health.
    """
    orchestrator = AssistantHolder().get_orchestrator()
    components = ComponentsHealth(
        cache=await orchestrator.cache.ping(),
        live_api=orchestrator.live_client.configured,
        model=await orchestrator.model_client.check_health(),
    )
    logger.debug("Health of components: %s", components)
    healthy = components.cache and components.live_api and components.model
    return HealthResponse(
        status="healthy" if healthy else "degraded",
        service=configuration.configuration.name,
        timestamp=datetime.now(timezone.utc),
        components=components,
    )
