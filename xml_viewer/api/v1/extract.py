# ------------------------------------------------------------
# Module: xml_viewer/api/v1/extract.py
# Purpose: Stateless XML → records endpoint.
# ------------------------------------------------------------

"""POST /v1/extract: parse an uploaded `.xml` file and return its records.

No session is created and no view (sort/search/filter/page) is applied;
useful for clients that render everything themselves.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, File, HTTPException, Response, UploadFile
from fastapi.concurrency import run_in_threadpool

from xml_viewer.api.deps import read_xml_upload
from xml_viewer.api.v1.models import ExtractResponse
from xml_viewer.core.config import settings
from xml_viewer.ingest.errors import ParseError
from xml_viewer.ingest.extract import extract
from xml_viewer.ingest.extract_config import ExtractConfig
from xml_viewer.utils.hashing import compute_sha256
from xml_viewer.view.columns import derive_columns

router = APIRouter()
log = logging.getLogger("xmlviewer.api.extract")


@router.post("", response_model=ExtractResponse)
async def extract_upload(
    response: Response, file: UploadFile = File(...)
) -> ExtractResponse:
    data = await read_xml_upload(file)
    cfg = ExtractConfig(
        row_tag=settings.ROW_TAG, flatten_children=settings.FLATTEN_CHILDREN
    )
    try:
        records = await run_in_threadpool(extract, data, cfg)
    except ParseError as e:
        raise HTTPException(status_code=422, detail=e.user_message) from e

    response.headers["X-Source-SHA256"] = compute_sha256(data)
    return ExtractResponse(columns=derive_columns(records), records=records)
