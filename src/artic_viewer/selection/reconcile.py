"""
Selection Map Operations
========================

The selection map holds every selected artwork keyed by id, regardless of
which page it was selected on. The table only ever shows one page, so each
operation here reconciles the visible rows with that cross-page map.

Every function returns a new map and leaves its input untouched.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ..api.models import Artwork

SelectionMap = Dict[int, Artwork]


def toggle_row(selection: SelectionMap, row: Artwork, checked: bool) -> SelectionMap:
    """Add ``row`` when checked, remove it otherwise."""
    nxt = dict(selection)
    if checked:
        nxt[row.id] = row
    else:
        nxt.pop(row.id, None)
    return nxt


def apply_page_selection(
    selection: SelectionMap,
    page_items: List[Artwork],
    selected_rows: Optional[Iterable[Artwork]],
) -> SelectionMap:
    """
    Reconcile the map with the checked rows reported by the table.

    Only ids of the current page are considered: a page item newly present in
    ``selected_rows`` is added, a page item missing from it is removed.
    Selections made on other pages are kept as they are.
    """
    new_ids = {r.id for r in (selected_rows or [])}
    nxt = dict(selection)
    for row in page_items:
        found = row.id in new_ids
        existed = row.id in selection
        if found and not existed:
            nxt[row.id] = row
        elif not found and existed:
            del nxt[row.id]
    return nxt


def select_all_on_page(selection: SelectionMap, page_items: List[Artwork]) -> SelectionMap:
    nxt = dict(selection)
    for row in page_items:
        nxt[row.id] = row
    return nxt


def deselect_all_on_page(selection: SelectionMap, page_items: List[Artwork]) -> SelectionMap:
    nxt = dict(selection)
    for row in page_items:
        nxt.pop(row.id, None)
    return nxt


def remove_from_selection(selection: SelectionMap, artwork_id: int) -> SelectionMap:
    nxt = dict(selection)
    nxt.pop(artwork_id, None)
    return nxt


def page_selection(selection: SelectionMap, page_items: List[Artwork]) -> Optional[List[Artwork]]:
    """Page items present in the map, in page order; ``None`` if there are none."""
    sel = [row for row in page_items if row.id in selection]
    return sel or None


def selected_artworks(selection: SelectionMap) -> List[Artwork]:
    """Stored records in ascending id order."""
    return [selection[k] for k in sorted(selection)]


def selection_count(selection: SelectionMap) -> int:
    return len(selection)
