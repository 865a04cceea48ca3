from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Artwork(BaseModel):
    """One catalog record, normalized so every missing field is ``None``."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: int
    title: Optional[str] = None
    place_of_origin: Optional[str] = None
    artist_display: Optional[str] = None
    inscriptions: Optional[str] = None
    date_start: Optional[int] = None
    date_end: Optional[int] = None


class Pagination(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total: Optional[int] = None
    limit: Optional[int] = None
    offset: Optional[int] = None
    total_pages: Optional[int] = None
    current_page: Optional[int] = None


class ArtworkApiResponse(BaseModel):
    """Envelope returned by the artworks listing endpoint."""

    model_config = ConfigDict(extra="ignore")

    data: Optional[List[Any]] = Field(default_factory=list)
    pagination: Optional[Pagination] = None


class ArtworksPage(BaseModel):
    items: List[Artwork] = Field(default_factory=list)
    total: int = 0
    per_page: int
