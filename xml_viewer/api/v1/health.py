# ------------------------------------------------------------
# Module: xml_viewer/api/v1/health.py
# Purpose: Lightweight readiness endpoint for the viewer backend.
# ------------------------------------------------------------

"""Health check endpoints.

Details:
    - `/v1/health/ready` reports 200 `{"status": "ready"}` once the session
      registry is up, 503 `{"status": "degraded"}` otherwise.
    - Keep this endpoint fast; never raise uncaught exceptions.
"""

import logging

from fastapi import APIRouter, Request, Response

router: APIRouter = APIRouter()
log = logging.getLogger("xmlviewer.api.health")


@router.get("/ready", include_in_schema=True)
def ready(request: Request, res: Response) -> dict[str, str]:
    """Readiness probe endpoint.

    Example:
        GET /v1/health/ready → {"status": "ready"}
        (before startup completes) → 503 {"status": "degraded"}
    """
    if getattr(request.app.state, "sessions", None) is None:
        log.warning("ready check failed: session registry not initialized")
        res.status_code = 503
        return {"status": "degraded"}
    log.debug("ready check ok")
    return {"status": "ready"}
