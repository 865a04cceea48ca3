import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from artic_viewer.api.client import ArtworksClient, normalize_records
from artic_viewer.config import ViewerConfig
from artic_viewer.errors import ArtworkApiError

from conftest import api_payload, make_response

FIELDS = "id,title,place_of_origin,artist_display,inscriptions,date_start,date_end"


class TestArtworksClient:

    @pytest.fixture
    def client(self):
        return ArtworksClient(ViewerConfig(), session=requests.Session())

    @patch("requests.Session.get")
    def test_fetch_page_requests_expected_url(self, mock_get, client):
        mock_get.return_value = make_response(api_payload([1, 2]))

        client.fetch_page(3, 25)

        args, kwargs = mock_get.call_args
        assert args[0] == "https://api.artic.edu/api/v1/artworks"
        assert kwargs["params"] == {"page": 3, "limit": 25, "fields": FIELDS}
        assert kwargs["timeout"] == 10.0

    @patch("requests.Session.get")
    def test_fetch_page_normalizes_items(self, mock_get, client):
        mock_get.return_value = make_response({
            "pagination": {"total": 120000, "limit": 10, "offset": 0, "total_pages": 12000},
            "data": [
                {"id": 27992, "title": "A Sunday on La Grande Jatte", "date_start": 1884, "date_end": 1886},
                {"id": 28560},
            ],
        })

        result = client.fetch_page(1, 10)

        assert result.total == 120000
        assert result.per_page == 10
        assert [a.id for a in result.items] == [27992, 28560]
        assert result.items[0].date_end == 1886
        bare = result.items[1]
        assert bare.title is None
        assert bare.place_of_origin is None
        assert bare.artist_display is None
        assert bare.inscriptions is None
        assert bare.date_start is None
        assert bare.date_end is None

    @patch("requests.Session.get")
    def test_missing_pagination_defaults(self, mock_get, client):
        mock_get.return_value = make_response({"data": [{"id": 1}]})

        result = client.fetch_page(1, 15)

        assert result.total == 0
        assert result.per_page == 15

    @patch("requests.Session.get")
    def test_missing_data_is_empty(self, mock_get, client):
        mock_get.return_value = make_response({"pagination": {"total": 5, "limit": 5}})

        result = client.fetch_page()

        assert result.items == []
        assert result.total == 5

    @patch("requests.Session.get")
    def test_null_data_is_empty(self, mock_get, client):
        mock_get.return_value = make_response({"data": None})

        assert client.fetch_page().items == []

    @patch("requests.Session.get")
    def test_non_ok_status_raises(self, mock_get, client):
        mock_get.return_value = make_response({}, status_code=503)

        with pytest.raises(ArtworkApiError, match="Failed to fetch artworks"):
            client.fetch_page()

    @patch("requests.Session.get")
    def test_transport_error_raises(self, mock_get, client):
        mock_get.side_effect = requests.exceptions.ConnectionError("connection refused")

        with pytest.raises(ArtworkApiError, match="connection refused"):
            client.fetch_page()

    @patch("requests.Session.get")
    def test_invalid_json_raises(self, mock_get, client):
        res = make_response(None)
        res.json.side_effect = json.JSONDecodeError("Expecting value", "<html>", 0)
        mock_get.return_value = res

        with pytest.raises(ArtworkApiError, match="Invalid artworks response"):
            client.fetch_page()

    @patch("requests.Session.get")
    def test_non_object_body_raises(self, mock_get, client):
        mock_get.return_value = make_response(["not", "an", "envelope"])

        with pytest.raises(ArtworkApiError):
            client.fetch_page()

    def test_custom_endpoint_and_fields(self):
        session = MagicMock()
        session.get.return_value = make_response(api_payload([]))
        config = ViewerConfig(api_url="http://localhost:9000/artworks", fields=["id", "title"], timeout_s=2)

        ArtworksClient(config, session=session).fetch_page(1, 5)

        session.get.assert_called_once_with(
            "http://localhost:9000/artworks",
            params={"page": 1, "limit": 5, "fields": "id,title"},
            timeout=2.0,
        )


class TestNormalizeRecords:

    def test_records_without_id_are_dropped(self, caplog):
        items = normalize_records([{"id": 1}, {"title": "No id"}, {"id": None}, "junk", {"id": 2}])

        assert [a.id for a in items] == [1, 2]
        assert "Skipping" in caplog.text

    def test_unknown_fields_are_ignored(self):
        (item,) = normalize_records([{"id": 7, "image_id": "abc", "title": "T"}])

        assert item.title == "T"
        assert not hasattr(item, "image_id")


@patch("requests.Session.get")
def test_module_level_fetch_uses_env_config(mock_get, monkeypatch):
    from artic_viewer.api import client as client_module

    monkeypatch.setattr(client_module, "_default_client", None)
    monkeypatch.setenv("ARTIC_VIEWER_API_URL", "http://example.test/artworks")
    mock_get.return_value = make_response(api_payload([1, 2], total=2, limit=2))

    result = client_module.fetch_artworks_page(1, 2)

    assert [a.id for a in result.items] == [1, 2]
    assert mock_get.call_args.args[0] == "http://example.test/artworks"
    assert client_module.get_default_client() is client_module.get_default_client()


@patch("requests.Session.get")
def test_fetch_page_skips_null_and_non_object_records(mock_get, caplog):
    mock_get.return_value = make_response({
        "pagination": {"total": 3, "limit": 10},
        "data": [{"id": 1, "title": "ok"}, None, "junk"],
    })

    result = ArtworksClient(ViewerConfig(), session=requests.Session()).fetch_page(1, 10)

    assert [a.id for a in result.items] == [1]
    assert result.total == 3
    assert "Skipping non-object artwork record" in caplog.text


@patch("requests.Session.get")
def test_fetch_page_keeps_records_with_numeric_text_fields(mock_get):
    mock_get.return_value = make_response({"data": [{"id": 1, "title": 1984, "inscriptions": 7}, {"id": 2}]})

    result = ArtworksClient(ViewerConfig(), session=requests.Session()).fetch_page(1, 10)

    assert [a.id for a in result.items] == [1, 2]
    assert result.items[0].title == "1984"
    assert result.items[0].inscriptions == "7"
