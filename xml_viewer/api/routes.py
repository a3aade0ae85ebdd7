# ------------------------------------------------------------
# Module: xml_viewer/api/routes.py
# Purpose: Compose and expose all v1 FastAPI routers.
# ------------------------------------------------------------

"""Central composition root for versioned API routing.

`xml_viewer.main` mounts this under /v1. Inclusion order is kept stable so
OpenAPI tag groups stay predictable across builds.
"""

from __future__ import annotations

from fastapi import APIRouter

from xml_viewer.api.v1.extract import router as extract_router
from xml_viewer.api.v1.health import router as health_router
from xml_viewer.api.v1.sessions import router as sessions_router

router: APIRouter = APIRouter()

# Tags double as doc group names; avoid renaming casually.
router.include_router(health_router, prefix="/health", tags=["health"])
router.include_router(extract_router, prefix="/extract", tags=["extract"])
router.include_router(sessions_router, prefix="/sessions", tags=["sessions"])
