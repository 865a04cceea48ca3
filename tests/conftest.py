from unittest.mock import MagicMock

import pytest

from artic_viewer.api.models import Artwork, ArtworksPage
from artic_viewer.config import ViewerConfig
from artic_viewer.selection.store import LocalStorage, SelectionStore


def make_artwork(i, **kw):
    data = {"id": i, "title": f"Artwork {i}", "artist_display": f"Artist {i}"}
    data.update(kw)
    return Artwork(**data)


def make_response(payload, status_code=200):
    """A stand-in for ``requests.Response``."""
    res = MagicMock()
    res.status_code = status_code
    res.ok = 200 <= status_code < 300
    res.json.return_value = payload
    return res


def api_payload(ids, total=None, limit=10):
    return {
        "pagination": {"total": total if total is not None else len(ids), "limit": limit, "offset": 0},
        "data": [{"id": i, "title": f"Artwork {i}", "artist_display": f"Artist {i}"} for i in ids],
    }


@pytest.fixture
def config(tmp_path):
    return ViewerConfig(storage_path=tmp_path / "local_storage.json")


@pytest.fixture
def store(config):
    return SelectionStore(LocalStorage(config.storage_path), key=config.storage_key)


class FakeFetch:
    """Serves pages from a fixed catalog of ``n`` artworks with ids 1..n."""

    def __init__(self, n=25):
        self.n = n
        self.calls = []
        self.error = None

    def __call__(self, page, limit):
        self.calls.append((page, limit))
        if self.error is not None:
            raise self.error
        start = (page - 1) * limit
        ids = range(start + 1, min(start + limit, self.n) + 1)
        return ArtworksPage(items=[make_artwork(i) for i in ids], total=self.n, per_page=limit)


@pytest.fixture
def fake_fetch():
    return FakeFetch()
