"""
Artic Artworks Viewer - Streamlit UI
====================================

Paginated table over the Art Institute of Chicago artworks API.

Layout:
1. Toolbar (selection counter, select/deselect page, rows per page)
2. Artworks table with a checkbox column
3. Paginator
4. Side panel listing the selection
"""

import html
import json
import logging
from typing import List

import plotly.graph_objects as go
import streamlit as st
from pydantic import ValidationError

from artic_viewer.api.client import ArtworksClient
from artic_viewer.api.models import Artwork
from artic_viewer.config import ViewerConfig
from artic_viewer.errors import SelectionStoreError
from artic_viewer.logging_utils import configure_logging
from artic_viewer.selection.store import LocalStorage, SelectionStore
from artic_viewer.table.controller import TableController
from artic_viewer.table.format import (
    SELECT_COLUMN,
    selected_ids_from_frame,
    selected_item_subtitle,
    selected_item_title,
    selection_frame,
    to_frame,
)
from artic_viewer.table.pagination import first_record, page_links

logger = logging.getLogger("artic_viewer.ui")


st.set_page_config(
    page_title="Art Institute - Artworks",
    page_icon="🖼️",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .selected-title {
        font-weight: 600;
    }
    .selected-sub {
        color: #6c757d;
        font-size: 0.85rem;
    }
</style>
""", unsafe_allow_html=True)


def get_controller(config: ViewerConfig) -> TableController:
    """Build the controller for this session, reusing one HTTP client."""
    if "client" not in st.session_state:
        st.session_state["client"] = ArtworksClient(config)
    client = st.session_state["client"]
    store = SelectionStore(LocalStorage(config.storage_path), key=config.storage_key)
    return TableController(st.session_state, store, client.fetch_page, config)


def _editor_key() -> str:
    return f"artworks_editor_{st.session_state.get('editor_version', 0)}"


def _reset_editor() -> None:
    """Drop pending checkbox edits so the table re-renders from the selection map."""
    st.session_state["editor_version"] = st.session_state.get("editor_version", 0) + 1


def _run(action, *args) -> None:
    try:
        action(*args)
    except SelectionStoreError as e:
        logger.error("Selection not saved: %s", e)
        st.error(f"Selection could not be saved: {e}")
    _reset_editor()


def render_toolbar(controller: TableController, config: ViewerConfig):
    col1, col2, col3, _, col5 = st.columns([2, 2, 2, 3, 2])
    with col1:
        if st.button(f"📋 Selected: {controller.selected_count()}", width="stretch"):
            controller.show_panel()
            st.rerun()
    with col2:
        if st.button("Select all on page", width="stretch"):
            _run(controller.select_all_on_page)
            st.rerun()
    with col3:
        if st.button("Deselect all on page", width="stretch"):
            _run(controller.deselect_all_on_page)
            st.rerun()
    with col5:
        rows = st.number_input(
            "Rows per page:",
            min_value=int(config.min_rows_per_page),
            max_value=int(config.max_rows_per_page),
            value=int(controller.table_state.rows_per_page),
            step=1,
        )
        if rows is not None and int(rows) != controller.table_state.rows_per_page:
            controller.change_rows_per_page(int(rows))
            _reset_editor()
            st.rerun()


def render_table(controller: TableController):
    if not controller.items:
        st.info("No records found")
        return

    dt_ids = [it.id for it in controller.dt_selection()]
    df = to_frame(controller.items, dt_ids)
    edited = st.data_editor(
        df,
        key=_editor_key(),
        hide_index=True,
        width="stretch",
        disabled=[c for c in df.columns if c != SELECT_COLUMN],
        column_config={
            SELECT_COLUMN: st.column_config.CheckboxColumn("", width="small"),
        },
    )

    new_ids = selected_ids_from_frame(edited)
    if set(new_ids) != set(dt_ids):
        _run(controller.on_selection_change, new_ids)
        st.rerun()


def render_paginator(controller: TableController, config: ViewerConfig):
    state = controller.table_state
    n_pages = controller.page_count
    if n_pages == 0:
        return

    links = page_links(state.page, n_pages, int(config.page_link_size))
    cols = st.columns(len(links) + 3)
    with cols[0]:
        if st.button("‹", key="page_prev", disabled=state.page <= 1):
            controller.change_page(state.page - 1)
            _reset_editor()
            st.rerun()
    for col, p in zip(cols[1:], links):
        with col:
            kind = "primary" if p == state.page else "secondary"
            if st.button(str(p), key=f"page_{p}", type=kind):
                controller.change_page(p)
                _reset_editor()
                st.rerun()
    with cols[len(links) + 1]:
        if st.button("›", key="page_next", disabled=state.page >= n_pages):
            controller.change_page(state.page + 1)
            _reset_editor()
            st.rerun()

    start = first_record(state)
    end = start + len(controller.items)
    st.caption(f"Showing {start + 1 if end > start else 0}–{end} of {controller.total_records}")


def _date_span(a: Artwork):
    start = a.date_start if a.date_start is not None else a.date_end
    end = a.date_end if a.date_end is not None else start
    return start, max(1, end - start)


def _plot_selected_dates(artworks: List[Artwork]) -> go.Figure:
    dated = [a for a in artworks if a.date_start is not None or a.date_end is not None]
    spans = [_date_span(a) for a in dated]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        y=[selected_item_title(a) for a in dated],
        x=[width for _, width in spans],
        base=[start for start, _ in spans],
        orientation="h",
        name="Date span",
    ))
    fig.update_layout(
        title="Selected works by date",
        xaxis_title="Year",
        height=max(200, 40 * len(dated) + 100),
        showlegend=False,
    )
    return fig


def render_side_panel(controller: TableController):
    selected = controller.selected_artworks()
    with st.sidebar:
        st.header(f"Selected Artworks ({len(selected)})")

        with st.container(height=480):
            if not selected:
                st.write("No items selected.")
            for a in selected:
                col1, col2 = st.columns([6, 1])
                with col1:
                    st.markdown(
                        f"<div class='selected-title'>{html.escape(selected_item_title(a))}</div>"
                        f"<div class='selected-sub'>{html.escape(selected_item_subtitle(a))}</div>",
                        unsafe_allow_html=True,
                    )
                with col2:
                    if st.button("✕", key=f"remove_{a.id}"):
                        _run(controller.remove_from_selection, a.id)
                        st.rerun()

        if selected:
            if any(a.date_start is not None or a.date_end is not None for a in selected):
                st.plotly_chart(_plot_selected_dates(selected), width="stretch")

            df = selection_frame(selected)
            col1, col2 = st.columns(2)
            with col1:
                st.download_button(
                    "CSV",
                    df.to_csv(index=False),
                    file_name="selected_artworks.csv",
                    mime="text/csv",
                    width="stretch",
                )
            with col2:
                st.download_button(
                    "JSON",
                    json.dumps([a.model_dump() for a in selected], ensure_ascii=False, indent=2),
                    file_name="selected_artworks.json",
                    mime="application/json",
                    width="stretch",
                )
            if st.button("Clear selection", width="stretch"):
                _run(controller.clear_selection)
                st.rerun()

        st.divider()
        if st.button("Close", width="stretch"):
            controller.hide_panel()
            st.rerun()


def main():
    """Main application."""
    try:
        config = ViewerConfig.from_env()
    except ValidationError as e:
        st.error(f"Invalid configuration: {e}")
        st.stop()

    configure_logging(config.log_level)

    st.title("Art Institute - Artworks")

    controller = get_controller(config)
    render_toolbar(controller, config)

    with st.spinner("Loading artworks..."):
        controller.refresh()

    render_table(controller)
    render_paginator(controller, config)

    if controller.visible_sidebar:
        render_side_panel(controller)


if __name__ == "__main__":
    main()
