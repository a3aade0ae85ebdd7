# ------------------------------------------------------------
# Module: xml_viewer/view/paginate.py
# Purpose: Fixed-size page slicing and page-cursor transitions.
# ------------------------------------------------------------

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10


def paginate(seq: Sequence[T], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> list[T]:
    """Return the half-open slice for 1-based `page`.

    Does not clamp `page`; an out-of-range page yields `[]`.
    """
    if page < 1:
        return []
    return list(seq[(page - 1) * page_size : page * page_size])


def total_pages(n_items: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """ceil(n / size), never below 1 so an empty view still reads "page 1 of 1"."""
    return max(math.ceil(n_items / page_size), 1)


def previous_page(current: int) -> int:
    return max(current - 1, 1)


def next_page(current: int, pages: int) -> int:
    return min(current + 1, pages)


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "next_page",
    "paginate",
    "previous_page",
    "total_pages",
]
