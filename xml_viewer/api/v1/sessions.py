# ------------------------------------------------------------
# Module: xml_viewer/api/v1/sessions.py
# Purpose: Session-scoped endpoints mirroring the viewer's user controls.
# ------------------------------------------------------------

"""Viewer session endpoints.

Each route maps to one user control (upload, search box, column hide/show,
filter toggle, sort toggle, previous/next page) and answers with the full
`ViewState`, so the front end re-renders from a single payload.

Responsibilities
----------------
- Create, read, and drop sessions.
- Accept `.xml` uploads; a parse failure answers 422 and keeps the old table.
- Parse uploads on the thread pool so the event loop stays free.
- Reject actions on unknown columns with 404 `column_not_found`.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile
from fastapi.concurrency import run_in_threadpool

from xml_viewer.api.deps import get_registry, get_session, read_xml_upload
from xml_viewer.api.v1.models import SearchRequest, ViewState
from xml_viewer.api.v1.serializers.view import to_view_state
from xml_viewer.ingest.errors import ParseError
from xml_viewer.services.sessions import SessionRegistry
from xml_viewer.services.viewer import ViewerSession
from xml_viewer.utils.hashing import compute_sha256

router = APIRouter()
log = logging.getLogger("xmlviewer.api.sessions")


def _state(session: ViewerSession) -> ViewState:
    return to_view_state(session.snapshot())


def _require_column(session: ViewerSession, column: str) -> None:
    if not session.has_column(column):
        raise HTTPException(status_code=404, detail="column_not_found")


@router.post("", status_code=201, response_model=ViewState)
def create_session(registry: SessionRegistry = Depends(get_registry)) -> ViewState:
    return _state(registry.create())


@router.get("/{session_id}", response_model=ViewState)
def read_session(
    session_id: str, registry: SessionRegistry = Depends(get_registry)
) -> ViewState:
    return _state(get_session(session_id, registry))


@router.delete("/{session_id}", status_code=204)
def delete_session(
    session_id: str, registry: SessionRegistry = Depends(get_registry)
) -> Response:
    get_session(session_id, registry)
    registry.drop(session_id)
    return Response(status_code=204)


@router.post("/{session_id}/upload", response_model=ViewState)
async def upload(
    session_id: str,
    response: Response,
    file: UploadFile = File(...),
    registry: SessionRegistry = Depends(get_registry),
) -> ViewState:
    session = get_session(session_id, registry)
    data = await read_xml_upload(file)
    try:
        await run_in_threadpool(session.load, data)
    except ParseError as e:
        # Session already recorded the message and kept its previous table.
        raise HTTPException(status_code=422, detail=e.user_message) from e
    except Exception:
        log.exception("upload_failed sid=%s", session_id)
        raise HTTPException(status_code=500, detail="upload_failed")

    response.headers["X-Source-SHA256"] = compute_sha256(data)
    return await run_in_threadpool(_state, session)


@router.put("/{session_id}/search", response_model=ViewState)
def set_search(
    session_id: str,
    body: SearchRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> ViewState:
    session = get_session(session_id, registry)
    session.set_search(body.term)
    return _state(session)


@router.post("/{session_id}/columns/{column}/visibility", response_model=ViewState)
def toggle_visibility(
    session_id: str, column: str, registry: SessionRegistry = Depends(get_registry)
) -> ViewState:
    session = get_session(session_id, registry)
    _require_column(session, column)
    session.toggle_column(column)
    return _state(session)


@router.post("/{session_id}/columns/{column}/filter", response_model=ViewState)
def toggle_filter(
    session_id: str, column: str, registry: SessionRegistry = Depends(get_registry)
) -> ViewState:
    session = get_session(session_id, registry)
    _require_column(session, column)
    session.toggle_filter(column)
    return _state(session)


@router.post("/{session_id}/columns/{column}/sort", response_model=ViewState)
def sort_column(
    session_id: str, column: str, registry: SessionRegistry = Depends(get_registry)
) -> ViewState:
    session = get_session(session_id, registry)
    _require_column(session, column)
    session.sort_by(column)
    return _state(session)


@router.post("/{session_id}/page/next", response_model=ViewState)
def next_page(
    session_id: str, registry: SessionRegistry = Depends(get_registry)
) -> ViewState:
    session = get_session(session_id, registry)
    session.next_page()
    return _state(session)


@router.post("/{session_id}/page/previous", response_model=ViewState)
def previous_page(
    session_id: str, registry: SessionRegistry = Depends(get_registry)
) -> ViewState:
    session = get_session(session_id, registry)
    session.previous_page()
    return _state(session)
