# ------------------------------------------------------------
# Module: xml_viewer/core/lifespan.py
# Purpose: Manage FastAPI startup and shutdown lifecycle events.
# ------------------------------------------------------------

"""FastAPI lifespan context for startup and shutdown events.

Responsibilities
----------------
- Open the visible-columns store and ensure its schema exists.
- Create the session registry and attach both to `app.state`.
- Log timings and errors for observability.

Developer Guidance
------------------
- Routes reach shared objects through `xml_viewer.api.deps`, never globals.
- Fail fast on startup errors; don't silently ignore them.
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI

from xml_viewer.core import paths
from xml_viewer.core.config import settings
from xml_viewer.ingest.extract_config import ExtractConfig
from xml_viewer.services.sessions import SessionRegistry
from xml_viewer.store.kv import SqliteStore

logger = logging.getLogger("xmlviewer.lifespan")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build shared state on startup; drop it on shutdown."""
    t0 = time.perf_counter()
    try:
        logger.info("startup begin paths=%s", paths.log_path_map())
        store = SqliteStore(paths.state_db())
        store.ensure_initialized()
        app.state.store = store
        app.state.sessions = SessionRegistry(
            store,
            page_size=settings.PAGE_SIZE,
            extract_config=ExtractConfig(
                row_tag=settings.ROW_TAG,
                flatten_children=settings.FLATTEN_CHILDREN,
            ),
            max_sessions=settings.MAX_SESSIONS,
        )
        logger.info("startup ok duration_ms=%.1f", (time.perf_counter() - t0) * 1000)
    except Exception:
        logger.exception("startup failed")
        raise

    try:
        yield
    finally:
        logger.info("shutdown begin sessions=%d", len(app.state.sessions))
        app.state.sessions = None
        logger.info("shutdown ok")
