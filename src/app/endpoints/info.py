"""Handler for REST API call to provide info."""

import logging
from typing import Any

from fastapi import APIRouter

from assistant import AssistantHolder
from configuration import configuration
from models.responses import InfoResponse
from version import __version__

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["info"])

FEATURES = [
    "Live problem and environment queries",
    "Model analysis of live results",
    "Troubleshooting knowledge base",
    "Query result caching",
    "Session management",
]

get_info_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "name": "Service name",
        "service_version": "Service version",
        "features": "Capabilities provided by the service",
        "live_api_configured": "Live API configured",
        "cache_connected": "Cache connected",
        "model_url": "Model backend URL",
    },
}


@router.get("/info", responses=get_info_responses)
async def info_endpoint_handler() -> InfoResponse:
    """
    Handle request to the /info endpoint.

    Process GET requests to the /info endpoint, returning the service
    name, version and the state of its backends.

    Returns:
        InfoResponse: An object describing the service.
    """
    logger.info("Response to /v1/info endpoint")
    orchestrator = AssistantHolder().get_orchestrator()
    return InfoResponse(
        name=configuration.configuration.name,
        service_version=__version__,
        features=FEATURES,
        live_api_configured=orchestrator.live_client.configured,
        cache_connected=orchestrator.cache.connected(),
        model_url=orchestrator.model_client.url,
    )
