from __future__ import annotations

import argparse
import json
import logging
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd
from pydantic import ValidationError

from .api.client import ArtworksClient
from .config import ViewerConfig
from .errors import ArtworkApiError, SelectionStoreError
from .logging_utils import configure_logging
from .selection import reconcile
from .selection.store import LocalStorage, SelectionStore
from .table.format import (
    render_dates,
    selected_item_subtitle,
    selected_item_title,
    selection_frame,
)
from .table.pagination import page_count

logger = logging.getLogger(__name__)

APP_PATH = Path(__file__).parent / "ui" / "app.py"


def _store(config: ViewerConfig) -> SelectionStore:
    return SelectionStore(LocalStorage(config.storage_path), key=config.storage_key)


def cmd_page(args, config: ViewerConfig) -> int:
    client = ArtworksClient(config)
    limit = config.clamp_rows(args.limit)
    result = client.fetch_page(args.page, limit)
    selection = _store(config).load()

    df = pd.DataFrame(
        {
            "": ["[x]" if it.id in selection else "[ ]" for it in result.items],
            "ID": [it.id for it in result.items],
            "Title": [it.title for it in result.items],
            "Artist": [it.artist_display for it in result.items],
            "Dates": [render_dates(it) for it in result.items],
        }
    )
    if df.empty:
        print("No records found")
    else:
        print(df.to_string(index=False, max_colwidth=48))
    print(
        f"\nPage {args.page} of {page_count(result.total, result.per_page)} "
        f"({result.total} records), selected: {len(selection)}"
    )
    return 0


def cmd_select(args, config: ViewerConfig) -> int:
    client = ArtworksClient(config)
    result = client.fetch_page(args.page, config.clamp_rows(args.limit))
    by_id = {it.id: it for it in result.items}
    missing = [i for i in args.ids if i not in by_id]
    if missing:
        print(f"Not on page {args.page}: {', '.join(map(str, missing))}", file=sys.stderr)
        return 1

    store = _store(config)
    selection = store.load()
    for i in args.ids:
        selection = reconcile.toggle_row(selection, by_id[i], True)
    store.save(selection)
    print(f"Selected: {len(selection)}")
    return 0


def cmd_deselect(args, config: ViewerConfig) -> int:
    store = _store(config)
    selection = store.load()
    missing = [i for i in args.ids if i not in selection]
    for i in args.ids:
        selection = reconcile.remove_from_selection(selection, i)
    store.save(selection)
    if missing:
        print(f"Not selected: {', '.join(map(str, missing))}", file=sys.stderr)
    print(f"Selected: {len(selection)}")
    return 1 if missing else 0


def cmd_list(args, config: ViewerConfig) -> int:
    selection = _store(config).load()
    print(f"Selected Artworks ({len(selection)})")
    if not selection:
        print("No items selected.")
    for a in reconcile.selected_artworks(selection):
        sub = selected_item_subtitle(a)
        print(f"- [{a.id}] {selected_item_title(a)}" + (f" / {sub}" if sub else ""))
    return 0


def cmd_clear(args, config: ViewerConfig) -> int:
    _store(config).clear()
    print("Selected: 0")
    return 0


def cmd_export(args, config: ViewerConfig) -> int:
    artworks = reconcile.selected_artworks(_store(config).load())
    if args.format == "json":
        text = json.dumps([a.model_dump() for a in artworks], ensure_ascii=False, indent=2)
    else:
        text = selection_frame(artworks).to_csv(index=False)

    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        print(f"Wrote {len(artworks)} artworks to {args.output}")
    else:
        sys.stdout.write(text)
    return 0


def cmd_ui(args, config: ViewerConfig) -> int:
    return subprocess.call([sys.executable, "-m", "streamlit", "run", str(APP_PATH)])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="artic-viewer",
        description="Browse Art Institute of Chicago artworks and manage a local selection.",
    )
    parser.add_argument("--log-level", default=None, help="Override ARTIC_VIEWER_LOG_LEVEL.")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("page", help="Print one page of artworks.")
    p.add_argument("--page", type=int, default=1)
    p.add_argument("--limit", type=int, default=None, help="Rows per page (5-100).")
    p.set_defaults(func=cmd_page)

    p = sub.add_parser("select", help="Add artworks from a page to the selection.")
    p.add_argument("ids", type=int, nargs="+")
    p.add_argument("--page", type=int, default=1)
    p.add_argument("--limit", type=int, default=None)
    p.set_defaults(func=cmd_select)

    p = sub.add_parser("deselect", help="Remove artworks from the selection.")
    p.add_argument("ids", type=int, nargs="+")
    p.set_defaults(func=cmd_deselect)

    p = sub.add_parser("list", help="List selected artworks.")
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("clear", help="Empty the selection.")
    p.set_defaults(func=cmd_clear)

    p = sub.add_parser("export", help="Export the selection.")
    p.add_argument("--format", "-f", choices=["csv", "json"], default="csv")
    p.add_argument("--output", "-o", help="Write to a file instead of stdout.")
    p.set_defaults(func=cmd_export)

    p = sub.add_parser("ui", help="Launch the Streamlit viewer.")
    p.set_defaults(func=cmd_ui)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = ViewerConfig.from_env()
    except ValidationError as e:
        print("Configuration error:", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(args.log_level or config.log_level)

    try:
        return args.func(args, config)
    except ArtworkApiError as e:
        print(f"API error: {e}", file=sys.stderr)
        return 1
    except SelectionStoreError as e:
        print(f"Storage error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
