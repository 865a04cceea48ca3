from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import List, Optional

DEFAULT_ROWS_PER_PAGE = 10
MIN_ROWS_PER_PAGE = 5
MAX_ROWS_PER_PAGE = 100


@dataclass(frozen=True)
class TableState:
    """Server-side pagination position; ``page`` is 1-based."""
    page: int = 1
    rows_per_page: int = DEFAULT_ROWS_PER_PAGE

    @property
    def key(self) -> tuple:
        return (self.page, self.rows_per_page)


def set_rows_per_page(
    state: TableState,
    value: Optional[int],
    *,
    min_rows: int = MIN_ROWS_PER_PAGE,
    max_rows: int = MAX_ROWS_PER_PAGE,
    default: int = DEFAULT_ROWS_PER_PAGE,
) -> TableState:
    """Change the page size and go back to the first page."""
    rows = default if value is None else max(min_rows, min(max_rows, int(value)))
    return replace(state, page=1, rows_per_page=rows)


def set_page_from_paginator(state: TableState, index: Optional[int]) -> TableState:
    """Apply a zero-based page index as emitted by the paginator."""
    return replace(state, page=(index or 0) + 1)


def first_record(state: TableState) -> int:
    return (state.page - 1) * state.rows_per_page


def page_count(total: int, rows_per_page: int) -> int:
    if rows_per_page <= 0 or total <= 0:
        return 0
    return math.ceil(total / rows_per_page)


def page_links(current_page: int, n_pages: int, link_size: int = 5) -> List[int]:
    """
    1-based page numbers shown between the previous/next links.

    The window holds at most ``link_size`` pages, is centered on the
    current page and is shifted back when it would run past either end.
    """
    if n_pages <= 0:
        return []
    visible = min(link_size, n_pages)
    current = current_page - 1
    start = max(0, math.ceil(current - visible / 2))
    end = min(n_pages - 1, start + visible - 1)
    delta = link_size - (end - start + 1)
    start = max(0, start - delta)
    return list(range(start + 1, end + 2))
