# ------------------------------------------------------------
# Module: xml_viewer/view/query.py
# Purpose: Sort, search, and presence-filter records into the view sequence.
# ------------------------------------------------------------

"""Query pipeline: records → view.

Order is fixed: sort first (stable, on a copy), then keep records that match
the search term AND pass the presence filter. Survivors keep sorted order.

Responsibilities
----------------
- Compare raw cell values with `<`/`>`; unorderable pairs count as equal.
- Render cells to display strings (JSON for objects/lists).
- Drive the sort-control cycle and the single-column filter toggle.
- Project records onto visible columns for rendering.

Notes
-----
- Comparing unorderable values as "equal" is an approximation: a column
  mixing text and objects sorts the text among itself but leaves objects
  wherever the stable sort puts them.
- Values are compared raw, so "10" < "9" (text order, not numeric).
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Literal

from xml_viewer.ingest.types import Record

SortDirection = Literal["asc", "desc"]


@dataclass(frozen=True)
class SortSpec:
    """Active sort: one column and a direction."""

    key: str
    direction: SortDirection = "asc"


def compare_values(a: Any, b: Any) -> int:
    """Three-way compare with generic `<`/`>`; TypeError → 0 (equal)."""
    try:
        if a < b:
            return -1
        if a > b:
            return 1
    except TypeError:
        return 0
    return 0


def display_value(value: Any) -> str:
    """Render a cell as text: objects/lists as JSON, missing as ``""``."""
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def sort_records(records: Sequence[Record], spec: SortSpec | None) -> list[Record]:
    """Return a stably sorted copy (or a plain copy when no sort is active)."""
    items = list(records)
    if spec is None:
        return items
    sign = 1 if spec.direction == "asc" else -1

    def _cmp(x: Record, y: Record) -> int:
        return sign * compare_values(x.get(spec.key), y.get(spec.key))

    items.sort(key=cmp_to_key(_cmp))
    return items


def matches_search(record: Record, term: str) -> bool:
    """True if any value contains `term` case-insensitively; empty term matches."""
    if not term:
        return True
    needle = term.lower()
    return any(needle in display_value(v).lower() for v in record.values())


def passes_filter(record: Record, column: str | None) -> bool:
    """True if no filter is set, or the column's value is non-blank."""
    if column is None:
        return True
    value = record.get(column)
    if value is None:
        return False
    return display_value(value).strip() != ""


def view(
    records: Sequence[Record],
    sort_spec: SortSpec | None = None,
    filter_column: str | None = None,
    search_term: str = "",
) -> list[Record]:
    """Sort, then keep records matching both the search and the filter."""
    return [
        r
        for r in sort_records(records, sort_spec)
        if matches_search(r, search_term) and passes_filter(r, filter_column)
    ]


# Sort control: none → asc → desc → asc …; a new column starts at asc.
def next_sort(current: SortSpec | None, column: str) -> SortSpec:
    if current is not None and current.key == column and current.direction == "asc":
        return SortSpec(key=column, direction="desc")
    return SortSpec(key=column, direction="asc")


# Filter control: selecting the active column clears the filter.
def next_filter(current: str | None, column: str) -> str | None:
    return None if column == current else column


def project(records: Iterable[Record], columns: Sequence[str]) -> list[list[str]]:
    """Render `columns` of each record as display strings (records untouched)."""
    return [[display_value(r.get(c)) for c in columns] for r in records]


__all__ = [
    "SortDirection",
    "SortSpec",
    "compare_values",
    "display_value",
    "matches_search",
    "next_filter",
    "next_sort",
    "passes_filter",
    "project",
    "sort_records",
    "view",
]
