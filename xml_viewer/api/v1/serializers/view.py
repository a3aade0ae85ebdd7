# ------------------------------------------------------------
# Module: xml_viewer/api/v1/serializers/view.py
# Purpose: Map a session snapshot onto the public ViewState contract.
# ------------------------------------------------------------
from __future__ import annotations

from xml_viewer.api.v1.models import ColumnInfo, SortDirection, SortState, ViewState
from xml_viewer.services.viewer import ViewSnapshot
from xml_viewer.view.columns import column_label
from xml_viewer.view.query import project


def to_view_state(snap: ViewSnapshot) -> ViewState:
    """Build the exact wire shape the front end renders."""
    shown = set(snap.visible_columns)
    columns = []
    for name in snap.all_columns:
        label = column_label(name)
        columns.append(
            ColumnInfo(
                name=name,
                group=label.group,
                sub_label=label.sub_label,
                visible=name in shown,
            )
        )
    sort = (
        SortState(key=snap.sort.key, direction=SortDirection(snap.sort.direction))
        if snap.sort is not None
        else None
    )
    return ViewState(
        session_id=snap.session_id,
        columns=columns,
        visible_columns=snap.visible_columns,
        excluded_columns=snap.excluded_columns,
        sort=sort,
        filter_column=snap.filter_column,
        search=snap.search,
        page=snap.page,
        page_size=snap.page_size,
        total_pages=snap.total_pages,
        total_rows=snap.total_rows,
        row_count=snap.row_count,
        rows=project(snap.rows, snap.visible_columns),
        error=snap.error,
    )
