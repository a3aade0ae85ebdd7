# ------------------------------------------------------------
# Module: xml_viewer/view/columns.py
# Purpose: Derive the column set and maintain the visible/excluded partition.
# ------------------------------------------------------------

"""Column registry helpers.

The column set is the key order of the first record. Visibility is a
partition of that set into `visible` (kept in column-set order) and
`excluded` (kept in the order columns were hidden).

Responsibilities
----------------
- Derive columns from records (first record only).
- Toggle a column between visible and excluded without mutating inputs.
- Apply stored visibility (hidden names or visible snapshot) to a new column set.
- Split dotted names into a display group and sub-label.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from xml_viewer.ingest.types import Record


@dataclass(frozen=True)
class ColumnLabel:
    """Display hint for a column name: `"a.b.c"` → group `"a"`, sub-label `"b.c"`."""

    group: str
    sub_label: str | None = None


def derive_columns(records: Sequence[Record]) -> list[str]:
    """Return the keys of `records[0]` in insertion order, or `[]`."""
    if not records:
        return []
    return list(records[0].keys())


def toggle(
    column: str,
    visible: Sequence[str],
    excluded: Sequence[str],
    all_columns: Sequence[str],
) -> tuple[list[str], list[str]]:
    """Move `column` across the visible/excluded partition.

    - Visible → removed from `visible`, appended to `excluded`.
    - Excluded → removed from `excluded`, re-inserted into `visible` at its
      column-set position relative to the other visible columns.
    - Unknown column → both lists returned unchanged (as copies).
    """
    if column in visible:
        return [c for c in visible if c != column], [*excluded, column]
    if column in excluded:
        shown = set(visible)
        shown.add(column)
        return (
            [c for c in all_columns if c in shown],
            [c for c in excluded if c != column],
        )
    return list(visible), list(excluded)


def restore_visibility(
    all_columns: Sequence[str],
    snapshot: Sequence[str] | None,
    hidden: Sequence[str] | None = None,
) -> tuple[list[str], list[str]]:
    """Apply stored visibility to a freshly derived column set.

    With `hidden` (names the user hid, in hide order), only those columns
    are excluded; every other column, including ones never seen before, is
    visible. Without it the visible `snapshot` decides membership:

    - No snapshot → every column is visible.
    - A stored empty list → every column is hidden.
    - A non-empty snapshot sharing no column with `all_columns` → every
      column is visible (it was taken from an unrelated file).

    Visible columns always follow column-set order.
    """
    if hidden is not None:
        present = set(all_columns)
        excluded = list(dict.fromkeys(c for c in hidden if c in present))
        drop = set(excluded)
        return [c for c in all_columns if c not in drop], excluded
    if snapshot is None:
        return list(all_columns), []
    keep = set(snapshot)
    if keep and keep.isdisjoint(all_columns):
        return list(all_columns), []
    visible = [c for c in all_columns if c in keep]
    excluded = [c for c in all_columns if c not in keep]
    return visible, excluded


def column_label(name: str) -> ColumnLabel:
    """Split a column name on its first dot for grouped header display."""
    group, sep, rest = name.partition(".")
    if not sep:
        return ColumnLabel(group=name)
    return ColumnLabel(group=group, sub_label=rest)


__all__ = [
    "ColumnLabel",
    "column_label",
    "derive_columns",
    "restore_visibility",
    "toggle",
]
