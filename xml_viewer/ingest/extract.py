# ------------------------------------------------------------
# Module: xml_viewer/ingest/extract.py
# Purpose: Parse uploaded XML text into an ordered list of flat row records.
# ------------------------------------------------------------

"""One-pass XML → records extraction.

Every element whose local name equals `ExtractConfig.row_tag` becomes one
record. Its immediate child elements become fields, keyed by local tag name,
valued by their full text content.

Responsibilities
----------------
- Parse bytes or text with a hardened `lxml` parser (no entities, no network).
- Map any parser/decoding failure to `ParseError`.
- Preserve child order as field order; a repeated child tag keeps its first
  position and takes the last value.
- Return `[]` (not an error) when no row elements match.
"""

from __future__ import annotations

import logging
import re

from lxml import etree

from xml_viewer.ingest.errors import ParseError
from xml_viewer.ingest.extract_config import ExtractConfig, local_name
from xml_viewer.ingest.types import Record
from xml_viewer.utils.timing import log_timer

log = logging.getLogger("xmlviewer.ingest.extract")

# lxml refuses `str` input that still carries an encoding declaration.
_XML_DECL_RE = re.compile(r"^\s*<\?xml[^>]*\?>", re.IGNORECASE)


def _parser() -> etree.XMLParser:
    # Fresh parser per call; lxml parsers are not safe to share across threads.
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
        huge_tree=False,
    )


def _parse_root(raw: bytes | str) -> etree._Element:
    """Parse raw input into a root element or raise ParseError."""
    if not raw.strip():
        raise ParseError("empty document")
    if isinstance(raw, str):
        raw = _XML_DECL_RE.sub("", raw.lstrip("\ufeff"), count=1)
    try:
        return etree.fromstring(raw, parser=_parser())
    # UnicodeDecodeError is a ValueError; lxml also raises ValueError for bad str input.
    except (etree.LxmlError, ValueError) as e:
        raise ParseError(str(e)) from e


def _text_content(elem: etree._Element) -> str:
    """Concatenated text of the element and all its descendants."""
    return "".join(elem.itertext())


def _row_record(row: etree._Element, cfg: ExtractConfig) -> Record:
    rec: Record = {}
    for child in row:
        if not isinstance(child.tag, str):
            continue
        key = local_name(child)
        grandchildren = [g for g in child if isinstance(g.tag, str)]
        if cfg.flatten_children and grandchildren:
            for g in grandchildren:
                rec[f"{key}{cfg.key_separator}{local_name(g)}"] = _text_content(g)
        else:
            rec[key] = _text_content(child)
    return rec


def extract(raw: bytes | str, config: ExtractConfig | None = None) -> list[Record]:
    """Extract one record per row element, in document order.

    Raises
    ------
    ParseError
        If `raw` is empty, not well-formed, or not decodable as XML text.
    """
    cfg = config or ExtractConfig()
    with log_timer(
        "extract",
        log,
        expected=(ParseError,),
        row_tag=cfg.row_tag,
        flatten=cfg.flatten_children,
        size=len(raw),
    ) as out:
        root = _parse_root(raw)
        records = [
            _row_record(el, cfg) for el in root.iter() if cfg.match(el, cfg.row_tag)
        ]
        out["rows"] = len(records)
        out["columns"] = len(records[0]) if records else 0

    if not records:
        log.warning("no <%s> elements matched", cfg.row_tag)
    return records


__all__ = ["extract"]
