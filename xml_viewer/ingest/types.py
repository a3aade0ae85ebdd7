# ------------------------------------------------------------
# Module: xml_viewer/ingest/types.py
# Purpose: Define the semi-structured record shape shared by all view stages.
# ------------------------------------------------------------

"""Typed aliases for extracted rows.

A record maps a field name to text, a nested object, or a list of those.
Extraction itself only produces text; the wider type lets callers feed in
records from other sources (e.g. JSON) without changing the view stages.
Later records may lack keys that the first one has.
"""

from __future__ import annotations

from typing import Any, TypeAlias

CellValue: TypeAlias = str | dict[str, Any] | list[Any]
Record: TypeAlias = dict[str, CellValue]
