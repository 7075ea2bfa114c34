"""REST API routers."""

from fastapi import FastAPI

from app.endpoints import (
    cache,
    chat,
    health,
    info,
    metrics,
    root,
    session,
)


def include_routers(app: FastAPI) -> None:
    """Include FastAPI routers for different endpoints.

    Args:
        app: The `FastAPI` app instance.
    """
    app.include_router(root.router)

    app.include_router(info.router, prefix="/v1")
    app.include_router(chat.router, prefix="/v1")
    app.include_router(session.router, prefix="/v1")
    app.include_router(cache.router, prefix="/v1")

    # health and metrics endpoints are not versioned
    app.include_router(health.router)
    app.include_router(metrics.router)
