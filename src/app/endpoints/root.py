"""Handler for the / endpoint."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["root"])

index_page = """
<html>
    <head>
        <title>Ops Assistant</title>
    </head>
    <body style='font-family: sans-serif;text-align:center;'>
        <h1>Ops Assistant</h1>
        <div>POST your messages to <code>/v1/chat</code></div>
        <div><a href="docs">Swagger UI</a></div>
        <div><a href="redoc">ReDoc</a></div>
    </body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
def root_endpoint_handler(request: Request) -> HTMLResponse:
    """Serve the landing page."""
    _ = request
    return HTMLResponse(index_page)
