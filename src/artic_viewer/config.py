from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Any, List, Mapping, Optional

from pydantic import BaseModel, Field, PositiveFloat, conint, model_validator

ENV_PREFIX = "ARTIC_VIEWER_"

DEFAULT_API_URL = "https://api.artic.edu/api/v1/artworks"
DEFAULT_FIELDS = [
    "id",
    "title",
    "place_of_origin",
    "artist_display",
    "inscriptions",
    "date_start",
    "date_end",
]
DEFAULT_STORAGE_KEY = "selected_artworks_map_v1"


def default_storage_path() -> Path:
    return Path.home() / ".artic_viewer" / "local_storage.json"


class ViewerConfig(BaseModel):
    api_url: str = Field(DEFAULT_API_URL, description="Artworks collection endpoint.")
    fields: List[str] = Field(
        default_factory=lambda: list(DEFAULT_FIELDS),
        description="Fields requested from the API for each artwork.",
    )
    timeout_s: PositiveFloat = Field(10.0, description="HTTP request timeout (seconds).")

    storage_path: Path = Field(
        default_factory=default_storage_path,
        description="JSON file used as the local key-value store.",
    )
    storage_key: str = Field(DEFAULT_STORAGE_KEY, description="Key holding the selection blob.")

    default_rows_per_page: conint(ge=1) = Field(10, description="Rows per page on first load.")
    min_rows_per_page: conint(ge=1) = Field(5, description="Lower bound of the rows-per-page input.")
    max_rows_per_page: conint(ge=1) = Field(100, description="Upper bound of the rows-per-page input.")
    page_link_size: conint(ge=1) = Field(5, description="Number of page links shown by the paginator.")

    log_level: str = Field("INFO", description="Root logging level.")

    @model_validator(mode="after")
    def _rows_bounds(self) -> "ViewerConfig":
        if self.min_rows_per_page > self.max_rows_per_page:
            raise ValueError("min_rows_per_page must be <= max_rows_per_page")
        if not (self.min_rows_per_page <= self.default_rows_per_page <= self.max_rows_per_page):
            raise ValueError("default_rows_per_page must lie within the rows-per-page bounds")
        if "id" not in self.fields:
            raise ValueError("fields must include 'id'")
        return self

    def clamp_rows(self, value: Optional[int]) -> int:
        """Clamp a rows-per-page value; ``None`` falls back to the default."""
        if value is None:
            return int(self.default_rows_per_page)
        return max(int(self.min_rows_per_page), min(int(self.max_rows_per_page), int(value)))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ViewerConfig":
        """
        Build a config from ``ARTIC_VIEWER_*`` environment variables.

        ``ARTIC_VIEWER_FIELDS`` is a comma separated list. Unset variables keep
        their defaults.

        Raises:
            pydantic.ValidationError: if a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        for name in cls.model_fields:
            raw = env.get(ENV_PREFIX + name.upper())
            if raw is None or raw == "":
                continue
            if name == "fields":
                data[name] = [f.strip() for f in raw.split(",") if f.strip()]
            elif name == "storage_path":
                data[name] = Path(raw).expanduser()
            else:
                data[name] = raw
        return cls.model_validate(data)
