# ------------------------------------------------------------
# Module: xml_viewer/ingest/extract_config.py
# Purpose: Define which XML elements become rows and how children map to fields.
# ------------------------------------------------------------

"""Configuration model for extracting row records from XML.

Responsibilities
----------------
- Name the repeated row element (default: the `Table1` element of a
  .NET DataSet export).
- Toggle one-level flattening of nested child elements into dotted keys.
- Offer namespace-agnostic tag matching using local-name extraction.
"""

from __future__ import annotations

from dataclasses import dataclass


def local_name(elem) -> str:
    """Return the namespace-agnostic local name of an XML tag."""
    return elem.tag.rsplit("}", 1)[-1]


@dataclass(frozen=True)
class ExtractConfig:
    """Configuration for locating rows and fields in XML."""

    row_tag: str = "Table1"
    # When True, <Addr><City>x</City></Addr> yields {"Addr.City": "x"}.
    # Only one level is expanded; deeper content is folded into text.
    flatten_children: bool = False
    key_separator: str = "."

    def match(self, elem, tag: str | None) -> bool:
        """Return True if the element matches the given local-name tag."""
        if tag is None or not isinstance(elem.tag, str):
            return False
        return local_name(elem) == tag
