"""
Artworks Fetch Adapter
======================

Fetches one page of the artworks listing and normalizes it into typed
``Artwork`` records plus the server-side totals needed by the paginator.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from ..config import ViewerConfig
from ..errors import ArtworkApiError
from .models import Artwork, ArtworkApiResponse, ArtworksPage

logger = logging.getLogger(__name__)


class ArtworksClient:
    """
    HTTP client for the artworks collection endpoint.

    Args:
        config: Viewer configuration (endpoint, fields, timeout).
        session: Optional ``requests.Session``; a new one is created if omitted.
    """

    def __init__(self, config: Optional[ViewerConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or ViewerConfig()
        self.session = session or requests.Session()

    def build_params(self, page: int, limit: int) -> Dict[str, Any]:
        return {
            "page": page,
            "limit": limit,
            "fields": ",".join(self.config.fields),
        }

    def fetch_page(self, page: int = 1, limit: int = 10) -> ArtworksPage:
        """
        Fetch and normalize one page of artworks.

        Returns:
            ArtworksPage with the page items, the total record count
            (0 when the server omits it) and the effective page size
            (the requested ``limit`` when the server omits it).

        Raises:
            ArtworkApiError: on transport errors, non-2xx responses or
                bodies that are not a valid listing envelope.
        """
        params = self.build_params(page, limit)
        logger.debug("Fetching artworks page=%s limit=%s", page, limit)
        try:
            res = self.session.get(self.config.api_url, params=params, timeout=self.config.timeout_s)
        except requests.RequestException as e:
            raise ArtworkApiError(f"Failed to fetch artworks: {e}") from e

        if not res.ok:
            logger.warning("Artworks request failed with HTTP %s", res.status_code)
            raise ArtworkApiError("Failed to fetch artworks")

        try:
            payload = ArtworkApiResponse.model_validate(res.json())
        except ValueError as e:
            # covers JSONDecodeError and pydantic.ValidationError
            raise ArtworkApiError(f"Invalid artworks response: {e}") from e

        items = normalize_records(payload.data or [])
        pagination = payload.pagination
        total = pagination.total if pagination and pagination.total is not None else 0
        per_page = pagination.limit if pagination and pagination.limit is not None else limit
        logger.info("Loaded %d artworks (page %s, total %s)", len(items), page, total)
        return ArtworksPage(items=items, total=total, per_page=per_page)

    def close(self) -> None:
        self.session.close()


def normalize_records(records: List[Any]) -> List[Artwork]:
    """Map raw records to ``Artwork``; records without a usable id are dropped."""
    items: List[Artwork] = []
    for d in records:
        if not isinstance(d, dict):
            logger.warning("Skipping non-object artwork record: %r", d)
            continue
        try:
            items.append(Artwork.model_validate(d))
        except ValidationError as e:
            logger.warning("Skipping artwork record id=%r: %s", d.get("id"), e.errors()[0]["msg"])
    return items


_default_client: Optional[ArtworksClient] = None


def get_default_client() -> ArtworksClient:
    global _default_client
    if _default_client is None:
        _default_client = ArtworksClient(ViewerConfig.from_env())
    return _default_client


def fetch_artworks_page(page: int = 1, limit: int = 10) -> ArtworksPage:
    """Fetch one page using the process-wide default client."""
    return get_default_client().fetch_page(page, limit)
