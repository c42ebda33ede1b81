"""FastAPI web application for the forest plot generator.

This module defines the FastAPI application, mounts static files,
configures Jinja2 templates and includes the API routes. It also
provides a convenience function to launch the server via Uvicorn.
"""

from __future__ import annotations

from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
import uvicorn

from .. import __version__
from ..config.settings import settings
from .routes import router


# Create FastAPI app
app = FastAPI(
    title="Forest Plot Generator",
    description="Create forest plots from a CSV of effect estimates",
    version=__version__,
)

# Setup templates and static files
BASE_DIR = Path(__file__).parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))
app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

# Include API routes
app.include_router(router)


@app.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    """Upload form, options and the plot area."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": "Forest Plot Generator",
            "x_label": settings.default_x_label,
            "marker_color": settings.marker_color,
            "ci_color": settings.ci_color,
            "reference_color": settings.reference_color,
        },
    )


def start_server(host: str = "0.0.0.0", port: int = 8000, reload: bool = True) -> None:
    """Start the Uvicorn web server.

    Parameters
    ----------
    host: str
        Host to bind the server to. Defaults to ``0.0.0.0``.
    port: int
        Port to listen on. Defaults to 8000.
    reload: bool
        Whether to enable auto-reload. Useful during development.
    """
    uvicorn.run(
        "fpg.web.app:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    start_server()
