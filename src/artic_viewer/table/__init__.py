"""
Table
=====

Pagination state, cell formatting and the view controller behind the
artworks table.
"""

from .pagination import (
    TableState,
    first_record,
    page_count,
    page_links,
    set_page_from_paginator,
    set_rows_per_page,
)
from .format import (
    render_dates,
    selected_ids_from_frame,
    selected_item_subtitle,
    selected_item_title,
    selection_frame,
    to_frame,
)
from .controller import TableController

__all__ = [
    "TableState",
    "first_record",
    "page_count",
    "page_links",
    "set_page_from_paginator",
    "set_rows_per_page",
    "render_dates",
    "selected_ids_from_frame",
    "selected_item_subtitle",
    "selected_item_title",
    "selection_frame",
    "to_frame",
    "TableController",
]
