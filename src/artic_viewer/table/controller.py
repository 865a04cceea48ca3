"""
Table Controller
================

View state for the artworks table, kept in a mutable mapping so the same
logic drives Streamlit's ``st.session_state`` and plain dicts in tests.

State keys:
- table_state: TableState (page, rows per page)
- loading: True while a page fetch is in flight
- items / total_records: the page currently displayed
- selected_map: cross-page selection, persisted on every change
- page_selection: rows of the current page present in the selection
- visible_sidebar: side panel visibility
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, MutableMapping, Optional, Any

from ..api.models import Artwork, ArtworksPage
from ..config import ViewerConfig
from ..errors import ArtworkApiError
from ..selection import reconcile
from ..selection.reconcile import SelectionMap
from ..selection.store import SelectionStore
from .pagination import TableState, set_page_from_paginator, set_rows_per_page, page_count

logger = logging.getLogger(__name__)

FetchPage = Callable[[int, int], ArtworksPage]


class TableController:
    """
    Drives pagination, fetching and selection for one table view.

    Args:
        state: Mutable mapping holding the view state between reruns.
        store: Persistence for the selection map.
        fetch: Callable ``(page, limit) -> ArtworksPage``.
        config: Viewer configuration (rows-per-page bounds).
    """

    def __init__(
        self,
        state: MutableMapping[str, Any],
        store: SelectionStore,
        fetch: FetchPage,
        config: Optional[ViewerConfig] = None,
    ):
        self.state = state
        self.store = store
        self.fetch = fetch
        self.config = config or ViewerConfig()
        self._init_state()

    def _init_state(self) -> None:
        s = self.state
        if "table_state" not in s:
            s["table_state"] = TableState(page=1, rows_per_page=int(self.config.default_rows_per_page))
        s.setdefault("loading", False)
        s.setdefault("items", [])
        s.setdefault("total_records", 0)
        s.setdefault("page_selection", None)
        s.setdefault("visible_sidebar", False)
        s.setdefault("loaded_key", None)
        s.setdefault("fetch_token", 0)
        if "selected_map" not in s:
            s["selected_map"] = self.store.load()
            logger.info("Restored %d selected artworks", len(s["selected_map"]))

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------
    @property
    def table_state(self) -> TableState:
        return self.state["table_state"]

    @property
    def items(self) -> List[Artwork]:
        return self.state["items"]

    @property
    def total_records(self) -> int:
        return self.state["total_records"]

    @property
    def selected_map(self) -> SelectionMap:
        return self.state["selected_map"]

    @property
    def page_selection(self) -> Optional[List[Artwork]]:
        return self.state["page_selection"]

    @property
    def loading(self) -> bool:
        return self.state["loading"]

    @property
    def visible_sidebar(self) -> bool:
        return self.state["visible_sidebar"]

    @property
    def page_count(self) -> int:
        return page_count(self.total_records, self.table_state.rows_per_page)

    def selected_count(self) -> int:
        return reconcile.selection_count(self.selected_map)

    def selected_artworks(self) -> List[Artwork]:
        return reconcile.selected_artworks(self.selected_map)

    def dt_selection(self) -> List[Artwork]:
        """Rows of the current page that should render checked."""
        return [it for it in self.items if it.id in self.selected_map]

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------
    def begin_fetch(self) -> int:
        """Start a fetch and return its token; any older token becomes stale."""
        self.state["fetch_token"] += 1
        self.state["loading"] = True
        return self.state["fetch_token"]

    def is_current(self, token: int, key: tuple) -> bool:
        return token == self.state["fetch_token"] and key == self.table_state.key

    def finish_fetch(self, token: int, key: tuple, result: Optional[ArtworksPage]) -> bool:
        """
        Apply a fetch result unless it is stale.

        ``result`` is ``None`` when the fetch failed; the table is then emptied.
        Returns True when the result was applied.
        """
        if not self.is_current(token, key):
            logger.debug("Discarding stale artworks result for page=%s rows=%s", *key)
            return False

        if result is None:
            self.state["items"] = []
            self.state["total_records"] = 0
            self.state["page_selection"] = None
        else:
            self.state["items"] = list(result.items)
            self.state["total_records"] = result.total
            self.state["page_selection"] = reconcile.page_selection(self.selected_map, result.items)
        self.state["loaded_key"] = key
        self.state["loading"] = False
        return True

    def refresh(self, force: bool = False) -> bool:
        """Fetch the current page if it is not the one already displayed."""
        key = self.table_state.key
        if not force and self.state["loaded_key"] == key:
            return False

        token = self.begin_fetch()
        page, rows = key
        result: Optional[ArtworksPage] = None
        try:
            result = self.fetch(page, rows)
        except ArtworkApiError:
            logger.exception("Failed to load artworks page=%s rows=%s", page, rows)
        return self.finish_fetch(token, key, result)

    def reload(self) -> bool:
        return self.refresh(force=True)

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------
    def change_page(self, page: int) -> None:
        """Go to a 1-based page."""
        self.state["table_state"] = set_page_from_paginator(self.table_state, max(1, int(page)) - 1)

    def on_page_change(self, index: Optional[int]) -> None:
        """Go to a zero-based paginator index."""
        self.state["table_state"] = set_page_from_paginator(self.table_state, index)

    def change_rows_per_page(self, value: Optional[int]) -> None:
        self.state["table_state"] = set_rows_per_page(
            self.table_state,
            value,
            min_rows=int(self.config.min_rows_per_page),
            max_rows=int(self.config.max_rows_per_page),
            default=int(self.config.default_rows_per_page),
        )

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def _commit(self, selection: SelectionMap, page_sel: Optional[List[Artwork]]) -> None:
        self.state["selected_map"] = selection
        self.state["page_selection"] = page_sel
        self.store.save(selection)

    def toggle_row(self, row: Artwork, checked: bool) -> None:
        nxt = reconcile.toggle_row(self.selected_map, row, checked)
        self._commit(nxt, reconcile.page_selection(nxt, self.items))

    def on_selection_change(self, selected_ids: Iterable[int]) -> None:
        """Reconcile the map with the set of checked ids reported for this page."""
        ids = set(selected_ids)
        new_selection = [it for it in self.items if it.id in ids]
        nxt = reconcile.apply_page_selection(self.selected_map, self.items, new_selection)
        self._commit(nxt, new_selection or None)

    def select_all_on_page(self) -> None:
        nxt = reconcile.select_all_on_page(self.selected_map, self.items)
        self._commit(nxt, list(self.items) or None)

    def deselect_all_on_page(self) -> None:
        nxt = reconcile.deselect_all_on_page(self.selected_map, self.items)
        self._commit(nxt, None)

    def remove_from_selection(self, artwork_id: int) -> None:
        nxt = reconcile.remove_from_selection(self.selected_map, artwork_id)
        self._commit(nxt, reconcile.page_selection(nxt, self.items))

    def clear_selection(self) -> None:
        self._commit({}, None)

    # ------------------------------------------------------------------
    # Side panel
    # ------------------------------------------------------------------
    def show_panel(self) -> None:
        self.state["visible_sidebar"] = True

    def hide_panel(self) -> None:
        self.state["visible_sidebar"] = False
