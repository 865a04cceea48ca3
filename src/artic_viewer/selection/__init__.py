"""
Selection
=========

Cross-page selection map operations and their local persistence.
"""

from .reconcile import (
    SelectionMap,
    apply_page_selection,
    deselect_all_on_page,
    page_selection,
    remove_from_selection,
    select_all_on_page,
    selected_artworks,
    selection_count,
    toggle_row,
)
from .store import LocalStorage, SelectionStore

__all__ = [
    "SelectionMap",
    "apply_page_selection",
    "deselect_all_on_page",
    "page_selection",
    "remove_from_selection",
    "select_all_on_page",
    "selected_artworks",
    "selection_count",
    "toggle_row",
    "LocalStorage",
    "SelectionStore",
]
