# ------------------------------------------------------------
# Module: xml_viewer/api/deps.py
# Purpose: Shared request helpers: registry lookup and upload guardrails.
# ------------------------------------------------------------

"""Dependencies and guards shared by the v1 routers.

Responsibilities
----------------
- Resolve the session registry from `app.state` (set by the lifespan).
- Map unknown session ids to 404.
- Enforce the `.xml` extension and the upload size limit at the edge.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request, UploadFile

from xml_viewer.core.config import settings
from xml_viewer.services.sessions import SessionNotFound, SessionRegistry
from xml_viewer.services.viewer import ViewerSession

log = logging.getLogger("xmlviewer.api.deps")

ALLOWED_SUFFIX = ".xml"


def get_registry(request: Request) -> SessionRegistry:
    registry = getattr(request.app.state, "sessions", None)
    if registry is None:
        raise HTTPException(status_code=503, detail="service_not_ready")
    return registry


def get_session(session_id: str, registry: SessionRegistry) -> ViewerSession:
    try:
        return registry.get(session_id)
    except SessionNotFound:
        log.info("session lookup miss sid=%s", session_id)
        raise HTTPException(status_code=404, detail="session_not_found")


async def read_xml_upload(file: UploadFile) -> bytes:
    """Return the upload's bytes after extension and size checks."""
    name = (file.filename or "").strip()
    if not name.lower().endswith(ALLOWED_SUFFIX):
        raise HTTPException(status_code=415, detail="unsupported_file_type")
    data = await file.read()
    # Hard reject oversize uploads at the edge.
    if len(data) > settings.MAX_UPLOAD_MB * 1024 * 1024:
        raise HTTPException(status_code=413, detail="file_too_large")
    return data
