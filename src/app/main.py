"""Definition of FastAPI based web service."""

import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.routing import Mount, Route, WebSocketRoute

import constants
import metrics
import version
from app import routers
from assistant import AssistantHolder
from configuration import configuration
from log import get_logger
from models.config import CORSConfiguration

logger = get_logger(__name__)

logger.info("Initializing app")

CONFIG_PATH_VARIABLE = "OPS_ASSISTANT_CONFIG_PATH"


# running on FastAPI startup
@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """
    Initialize app resources.

    FastAPI lifespan context: loads configuration (when the worker process
    does not have it yet), builds the routing core and connects the cache
    before serving requests; disconnects the cache on shutdown.
    """
    if not configuration.is_loaded():
        configuration.load_configuration(os.environ[CONFIG_PATH_VARIABLE])
    await AssistantHolder().load(configuration)
    logger.info("App startup complete")

    yield

    await AssistantHolder().close()
    logger.info("App shutdown complete")


def create_app() -> FastAPI:
    """Create the FastAPI application with middleware and routers."""
    service_name = (
        configuration.configuration.name
        if configuration.is_loaded()
        else constants.SERVICE_NAME
    )
    cors = (
        configuration.service_configuration.cors
        if configuration.is_loaded()
        else CORSConfiguration()
    )

    application = FastAPI(
        title=f"{service_name} service - OpenAPI",
        summary=f"{service_name} service API specification.",
        description=f"{service_name} service API specification.",
        version=version.__version__,
        license_info={
            "name": "Apache 2.0",
            "url": "https://www.apache.org/licenses/LICENSE-2.0.html",
        },
        servers=[
            {"url": "http://localhost:3000/", "description": "Locally running service"}
        ],
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=cors.allow_origins,
        allow_credentials=cors.allow_credentials,
        allow_methods=cors.allow_methods,
        allow_headers=cors.allow_headers,
    )

    logger.info("Including routers")
    routers.include_routers(application)

    app_routes_paths = [
        route.path
        for route in application.routes
        if isinstance(route, (Mount, Route, WebSocketRoute))
    ]

    @application.middleware("http")
    async def rest_api_metrics(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Middleware with REST API counter update logic."""
        path = request.url.path
        logger.debug("Received request for path: %s", path)

        # ignore paths that are not part of the app routes
        if path not in app_routes_paths:
            return await call_next(request)

        # measure time to handle duration + update histogram
        with metrics.response_duration_seconds.labels(path).time():
            response = await call_next(request)

        # ignore /metrics endpoint that will be called periodically
        if not path.endswith("/metrics"):
            metrics.rest_api_calls_total.labels(path, response.status_code).inc()
        return response

    return application


app = create_app()
