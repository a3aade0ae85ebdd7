# ------------------------------------------------------------
# Module: xml_viewer/api/v1/models.py
# Purpose: Public request/response contracts for the viewer API.
# ------------------------------------------------------------
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# Wire enum (serialized as strings):
# - Values are part of the public API. Changing them is a breaking change.
class SortDirection(str, Enum):
    asc = "asc"
    desc = "desc"


class SearchRequest(BaseModel):
    """Body for PUT /v1/sessions/{sid}/search."""

    model_config = ConfigDict(extra="forbid")

    term: str = Field("", max_length=1000)


class ColumnInfo(BaseModel):
    """One column header: full name, display split, and visibility."""

    name: str
    group: str
    sub_label: str | None = None
    visible: bool


class SortState(BaseModel):
    key: str
    direction: SortDirection


# Canonical session payload:
# - rows hold the current page only, projected onto visible_columns as text.
# - page/total_pages drive the pager; total_rows counts the filtered view,
#   row_count the records loaded.
class ViewState(BaseModel):
    """Response for every /v1/sessions route except DELETE."""

    session_id: str
    columns: list[ColumnInfo]
    visible_columns: list[str]
    excluded_columns: list[str]
    sort: SortState | None = None
    filter_column: str | None = None
    search: str = ""
    page: int
    page_size: int
    total_pages: int
    total_rows: int
    row_count: int
    rows: list[list[str]]
    error: str | None = None


class ExtractResponse(BaseModel):
    """Response for POST /v1/extract: raw records, no view applied."""

    columns: list[str]
    records: list[dict[str, Any]]


__all__ = [
    "ColumnInfo",
    "ExtractResponse",
    "SearchRequest",
    "SortDirection",
    "SortState",
    "ViewState",
]
