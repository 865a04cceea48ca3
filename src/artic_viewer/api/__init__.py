"""
API Adapter
===========

Fetch adapter for the Art Institute of Chicago artworks endpoint.
"""

from .models import Artwork, ArtworkApiResponse, ArtworksPage, Pagination
from .client import ArtworksClient, fetch_artworks_page, get_default_client, normalize_records

__all__ = [
    "Artwork",
    "ArtworkApiResponse",
    "ArtworksPage",
    "Pagination",
    "ArtworksClient",
    "fetch_artworks_page",
    "get_default_client",
    "normalize_records",
]
