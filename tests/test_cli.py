import json
from unittest.mock import patch

import pytest

from artic_viewer.cli import main
from artic_viewer.config import ViewerConfig
from artic_viewer.selection.store import LocalStorage, SelectionStore

from conftest import api_payload, make_artwork, make_response


@pytest.fixture
def storage_path(tmp_path, monkeypatch):
    path = tmp_path / "local_storage.json"
    monkeypatch.setenv("ARTIC_VIEWER_STORAGE_PATH", str(path))
    return path


@pytest.fixture
def cli_store(storage_path):
    return SelectionStore(LocalStorage(storage_path))


@patch("requests.Session.get")
def test_page_marks_selected_rows(mock_get, cli_store, capsys):
    cli_store.save({2: make_artwork(2)})
    mock_get.return_value = make_response(api_payload([1, 2, 3], total=30))

    assert main(["page", "--page", "1", "--limit", "10"]) == 0

    out = capsys.readouterr().out
    assert "[x]" in out
    assert out.count("[ ]") == 2
    assert "Page 1 of 3 (30 records), selected: 1" in out


@patch("requests.Session.get")
def test_page_limit_is_clamped(mock_get, storage_path):
    mock_get.return_value = make_response(api_payload([]))

    assert main(["page", "--limit", "500"]) == 0

    assert mock_get.call_args.kwargs["params"]["limit"] == 100


@patch("requests.Session.get")
def test_page_api_failure_exits_1(mock_get, storage_path, capsys):
    mock_get.return_value = make_response({}, status_code=500)

    assert main(["page"]) == 1
    assert "Failed to fetch artworks" in capsys.readouterr().err


@patch("requests.Session.get")
def test_select_adds_rows_from_page(mock_get, cli_store):
    mock_get.return_value = make_response(api_payload([1, 2, 3]))

    assert main(["select", "1", "3"]) == 0

    assert sorted(cli_store.load()) == [1, 3]


@patch("requests.Session.get")
def test_select_unknown_id_exits_1(mock_get, cli_store, capsys):
    mock_get.return_value = make_response(api_payload([1, 2, 3]))

    assert main(["select", "1", "99"]) == 1

    assert cli_store.load() == {}
    assert "99" in capsys.readouterr().err


def test_deselect(cli_store):
    cli_store.save({1: make_artwork(1), 2: make_artwork(2)})

    assert main(["deselect", "1"]) == 0
    assert list(cli_store.load()) == [2]

    assert main(["deselect", "5"]) == 1


def test_list_orders_by_id(cli_store, capsys):
    cli_store.save({9: make_artwork(9), 4: make_artwork(4, title=None, artist_display=None, place_of_origin="Peru")})

    assert main(["list"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Selected Artworks (2)"
    assert lines[1] == "- [4] (untitled) / Peru"
    assert lines[2] == "- [9] Artwork 9 / Artist 9"


def test_list_empty(storage_path, capsys):
    assert main(["list"]) == 0
    assert "No items selected." in capsys.readouterr().out


def test_clear(cli_store):
    cli_store.save({1: make_artwork(1)})

    assert main(["clear"]) == 0
    assert cli_store.load() == {}


def test_export_json_to_file(cli_store, tmp_path):
    cli_store.save({2: make_artwork(2), 1: make_artwork(1)})
    out = tmp_path / "sel.json"

    assert main(["export", "--format", "json", "--output", str(out)]) == 0

    data = json.loads(out.read_text(encoding="utf-8"))
    assert [d["id"] for d in data] == [1, 2]


def test_export_csv_to_stdout(cli_store, capsys):
    cli_store.save({1: make_artwork(1, date_start=1700, date_end=1710)})

    assert main(["export"]) == 0

    out = capsys.readouterr().out
    assert out.splitlines()[0].startswith("id,title,")
    assert "1700 — 1710" in out


def test_invalid_config_exits_2(monkeypatch, capsys):
    monkeypatch.setenv("ARTIC_VIEWER_TIMEOUT_S", "not-a-number")

    assert main(["list"]) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_ui_launches_streamlit(storage_path):
    with patch("artic_viewer.cli.subprocess.call", return_value=0) as call:
        assert main(["ui"]) == 0

    cmd = call.call_args.args[0]
    assert cmd[1:4] == ["-m", "streamlit", "run"]
    assert cmd[4].endswith("app.py")


def test_env_storage_path_is_used(storage_path):
    assert ViewerConfig.from_env().storage_path == storage_path
