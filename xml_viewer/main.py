# ------------------------------------------------------------
# Module: xml_viewer/main.py
# Purpose: FastAPI application factory and ASGI entrypoint.
# ------------------------------------------------------------

"""ASGI entrypoint: `uvicorn xml_viewer.main:app`.

The browser front end talks to this API; CORS origins come from settings.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from xml_viewer.api.routes import router as v1_router
from xml_viewer.core.config import settings
from xml_viewer.core.lifespan import lifespan
from xml_viewer.core.logging import configure_logging


def create_app() -> FastAPI:
    configure_logging()
    application = FastAPI(title="XML Table Viewer", version="0.1.0", lifespan=lifespan)

    # Enable CORS so the browser front end can call the API from its dev server.
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(v1_router, prefix="/v1")
    return application


app = create_app()


def run() -> None:
    """Console entrypoint: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "xml_viewer.main:app",
        host="127.0.0.1",
        port=8000,
        access_log=settings.ACCESS_LOG,
        reload=settings.APP_ENV == "dev",
    )
