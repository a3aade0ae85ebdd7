# ------------------------------------------------------------
# Module: xml_viewer/cli.py
# Purpose: CLI to extract an XML file and print one page of its view.
# ------------------------------------------------------------

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from xml_viewer.core.config import settings
from xml_viewer.core.logging import configure_logging
from xml_viewer.ingest.errors import ParseError
from xml_viewer.ingest.extract import extract
from xml_viewer.ingest.extract_config import ExtractConfig
from xml_viewer.view.columns import derive_columns
from xml_viewer.view.paginate import paginate, total_pages
from xml_viewer.view.query import SortSpec, project, view


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="Print one page of the table extracted from an XML file."
    )
    ap.add_argument("xml", type=Path, help="Path to the XML file.")
    ap.add_argument("--row-tag", default=settings.ROW_TAG, help="Repeated row element.")
    ap.add_argument("--flatten", action="store_true", help="Expand nested children.")
    ap.add_argument("--search", default="", help="Case-insensitive substring.")
    ap.add_argument("--filter", dest="filter_column", help="Keep rows with this column set.")
    ap.add_argument("--sort", dest="sort_key", help="Column to sort by.")
    ap.add_argument("--desc", action="store_true", help="Sort descending.")
    ap.add_argument("--page", type=int, default=1)
    ap.add_argument("--page-size", type=int, default=settings.PAGE_SIZE)
    ap.add_argument(
        "--columns", help="Comma-separated columns to show (default: all)."
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Log extraction details.")
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(level="INFO" if args.verbose else "WARNING", stream=sys.stderr)
    if args.page < 1 or args.page_size < 1:
        print("error: --page and --page-size must be >= 1", file=sys.stderr)
        return 2

    try:
        raw = args.xml.read_bytes()
    except OSError as e:
        print(f"error: cannot read {args.xml}: {e}", file=sys.stderr)
        return 2

    cfg = ExtractConfig(row_tag=args.row_tag, flatten_children=args.flatten)
    try:
        records = extract(raw, cfg)
    except ParseError as e:
        print(e.user_message, file=sys.stderr)
        return 1

    columns = derive_columns(records)
    if args.columns:
        wanted = {c.strip() for c in args.columns.split(",")}
        columns = [c for c in columns if c in wanted]
    sort = (
        SortSpec(args.sort_key, "desc" if args.desc else "asc")
        if args.sort_key
        else None
    )
    rows = view(records, sort, args.filter_column, args.search)
    pages = total_pages(len(rows), args.page_size)
    page = min(args.page, pages)

    print("\t".join(columns))
    for cells in project(paginate(rows, page, args.page_size), columns):
        print("\t".join(cells))
    print(f"-- page {page} of {pages} ({len(rows)} rows)", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
