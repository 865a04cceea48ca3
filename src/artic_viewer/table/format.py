from __future__ import annotations

from typing import Iterable, List

import pandas as pd

from ..api.models import Artwork

SELECT_COLUMN = "Selected"
COLUMNS = {
    "title": "Title",
    "place_of_origin": "Place of origin",
    "artist_display": "Artist",
    "inscriptions": "Inscription",
}
DATES_COLUMN = "Dates"


def render_dates(row: Artwork) -> str:
    """Single year when start and end agree or one is missing, else a range."""
    s = row.date_start if row.date_start is not None else ""
    e = row.date_end if row.date_end is not None else ""
    if s == e or not s or not e:
        return str(s or e or "-")
    return f"{s} — {e}"


def selected_item_title(row: Artwork) -> str:
    return row.title if row.title is not None else "(untitled)"


def selected_item_subtitle(row: Artwork) -> str:
    if row.artist_display is not None:
        return row.artist_display
    if row.place_of_origin is not None:
        return row.place_of_origin
    return ""


def to_frame(items: List[Artwork], selected_ids: Iterable[int] = ()) -> pd.DataFrame:
    """
    Build the table shown for one page.

    The frame is indexed by artwork id and starts with a boolean
    selection column followed by the display columns.
    """
    selected = set(selected_ids)
    records = []
    for row in items:
        rec = {SELECT_COLUMN: row.id in selected}
        for field, label in COLUMNS.items():
            rec[label] = getattr(row, field)
        rec[DATES_COLUMN] = render_dates(row)
        records.append(rec)

    columns = [SELECT_COLUMN, *COLUMNS.values(), DATES_COLUMN]
    df = pd.DataFrame(records, columns=columns, index=pd.Index([r.id for r in items], name="id"))
    df[SELECT_COLUMN] = df[SELECT_COLUMN].astype(bool)
    return df


def selection_frame(items: List[Artwork]) -> pd.DataFrame:
    """Flat export of selected artworks, one row per artwork."""
    df = pd.DataFrame(
        [row.model_dump() for row in items],
        columns=list(Artwork.model_fields),
    )
    df["dates"] = [render_dates(row) for row in items]
    return df


def selected_ids_from_frame(df: pd.DataFrame) -> List[int]:
    """Ids whose selection checkbox is ticked in an edited page frame."""
    if df.empty:
        return []
    mask = df[SELECT_COLUMN].fillna(False).astype(bool).to_numpy()
    return [int(i) for i in df.index[mask]]
