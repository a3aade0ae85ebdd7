# ------------------------------------------------------------
# Module: xml_viewer/services/viewer.py
# Purpose: Hold one viewer's state and apply user actions to it.
# ------------------------------------------------------------

"""Viewer session: the state behind one open table.

A session owns the extracted records, the column partition, and the current
sort/filter/search/page settings. Every user action is a method; the
rendered view is computed on demand by `snapshot()`.

Responsibilities
----------------
- Extract uploads and swap all derived state in one step.
- Keep the previous table when an upload fails to parse.
- Persist the visible columns and the hidden names on every visibility toggle.
- Reset the page cursor whenever the view's contents change.

Notes
-----
- FastAPI runs sync routes on a thread pool, so state changes happen under
  `self._lock`. Extraction runs outside the lock.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from xml_viewer.ingest.errors import ParseError
from xml_viewer.ingest.extract import extract
from xml_viewer.ingest.extract_config import ExtractConfig
from xml_viewer.ingest.types import Record
from xml_viewer.store.kv import (
    KeyValueStore,
    load_hidden_columns,
    load_visible_columns,
    save_visible_columns,
)
from xml_viewer.utils.logging_extras import log_adapter
from xml_viewer.view import columns as colreg
from xml_viewer.view import paginate as pager
from xml_viewer.view.query import SortSpec, next_filter, next_sort, view

log = logging.getLogger("xmlviewer.services.viewer")


@dataclass(frozen=True)
class ViewSnapshot:
    """Point-in-time copy of a session, with the current page resolved."""

    session_id: str
    all_columns: list[str]
    visible_columns: list[str]
    excluded_columns: list[str]
    sort: SortSpec | None
    filter_column: str | None
    search: str
    page: int
    page_size: int
    total_pages: int
    total_rows: int
    row_count: int
    rows: list[Record] = field(default_factory=list)
    error: str | None = None


class ViewerSession:
    def __init__(
        self,
        session_id: str,
        store: KeyValueStore,
        *,
        page_size: int = pager.DEFAULT_PAGE_SIZE,
        extract_config: ExtractConfig | None = None,
    ) -> None:
        self.session_id = session_id
        self.page_size = page_size
        self.extract_config = extract_config or ExtractConfig()
        self._store = store
        self._lock = threading.Lock()
        self._log = log_adapter(log, session_id)

        self._records: list[Record] = []
        self._all_columns: list[str] = []
        self._visible: list[str] = []
        self._excluded: list[str] = []
        self._error: str | None = None
        self._sort: SortSpec | None = None
        self._filter: str | None = None
        self._search = ""
        self._page = 1
        # Read once; later toggles keep them current.
        self._saved_visible = load_visible_columns(store)
        self._saved_hidden = load_hidden_columns(store)

    # ---- Upload ----
    def load(self, raw: bytes | str) -> None:
        """Replace the table with the records extracted from `raw`.

        On ParseError only the error message changes; the previous table
        stays on screen. The error is re-raised for the caller to report.
        """
        try:
            records = extract(raw, self.extract_config)
        except ParseError as e:
            with self._lock:
                self._error = e.user_message
            self._log.info("upload rejected, previous table kept")
            raise

        all_columns = colreg.derive_columns(records)
        with self._lock:
            visible, excluded = colreg.restore_visibility(
                all_columns, self._saved_visible, self._saved_hidden
            )
            self._records = records
            self._all_columns = all_columns
            self._visible = visible
            self._excluded = excluded
            self._error = None
            # Drop sort/filter that point at columns the new file lacks.
            if self._sort is not None and self._sort.key not in all_columns:
                self._sort = None
            if self._filter is not None and self._filter not in all_columns:
                self._filter = None
            self._page = 1
        self._log.info(
            "loaded rows=%d columns=%d hidden=%d",
            len(records),
            len(all_columns),
            len(excluded),
        )

    # ---- Column actions ----
    def has_column(self, column: str) -> bool:
        with self._lock:
            return column in self._all_columns

    def toggle_column(self, column: str) -> None:
        with self._lock:
            self._visible, self._excluded = colreg.toggle(
                column, self._visible, self._excluded, self._all_columns
            )
            # Names hidden under an earlier file stay hidden until shown again.
            elsewhere = [
                c for c in self._saved_hidden or [] if c not in self._all_columns
            ]
            self._saved_visible = list(self._visible)
            self._saved_hidden = [*elsewhere, *self._excluded]
            save_visible_columns(
                self._store, self._saved_visible, hidden=self._saved_hidden
            )

    def toggle_filter(self, column: str) -> None:
        with self._lock:
            self._filter = next_filter(self._filter, column)
            self._page = 1

    def sort_by(self, column: str) -> None:
        with self._lock:
            self._sort = next_sort(self._sort, column)
            self._page = 1

    def set_search(self, term: str) -> None:
        with self._lock:
            if term != self._search:
                self._search = term
                self._page = 1

    # ---- Page cursor ----
    def next_page(self) -> None:
        with self._lock:
            pages = pager.total_pages(len(self._view()), self.page_size)
            self._page = pager.next_page(self._page, pages)

    def previous_page(self) -> None:
        with self._lock:
            self._page = pager.previous_page(self._page)

    # ---- Read ----
    def _view(self) -> list[Record]:
        return view(self._records, self._sort, self._filter, self._search)

    def snapshot(self) -> ViewSnapshot:
        with self._lock:
            rows = self._view()
            return ViewSnapshot(
                session_id=self.session_id,
                all_columns=list(self._all_columns),
                visible_columns=list(self._visible),
                excluded_columns=list(self._excluded),
                sort=self._sort,
                filter_column=self._filter,
                search=self._search,
                page=self._page,
                page_size=self.page_size,
                total_pages=pager.total_pages(len(rows), self.page_size),
                total_rows=len(rows),
                row_count=len(self._records),
                rows=pager.paginate(rows, self._page, self.page_size),
                error=self._error,
            )
