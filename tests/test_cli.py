"""Tests for the command line entry points."""

import json

import pytest

from music_curator import cli
from music_curator.core.config import Config, ViewConfig


@pytest.fixture
def snapshot_path(tmp_path):
    path = tmp_path / "snapshot.json"
    path.write_text(
        json.dumps(
            {
                "sources": [{"id": "local"}],
                "tracks": [
                    {
                        "id": "y",
                        "source_id": "local",
                        "path": "Mix/y.mp3",
                        "tags": {"artist": "Artist", "title": "Yellow"},
                    },
                    {
                        "id": "z",
                        "source_id": "local",
                        "path": "Other/z.mp3",
                        "tags": {"artist": "Artist", "title": "Zebra"},
                    },
                ],
                "favourites": [{"artist": "Mozart", "title": "Requiem"}],
                "playlists": [
                    {
                        "name": "Road Trip",
                        "tracks": [
                            {"artist": "Artist", "title": "Xylophone"},
                            {"artist": "Artist", "title": "Yellow"},
                        ],
                    }
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def console_output(monkeypatch):
    """Capture everything printed through the Rich console."""
    from rich.console import Console

    console = Console(record=True, width=200)
    monkeypatch.setattr("music_curator.core.console._console", console)
    return console


class TestRunIdentify:
    """Tests for run_identify."""

    def test_library_view(self, snapshot_path, console_output):
        assert cli.run_identify(str(snapshot_path), Config()) == 0
        text = console_output.export_text()
        assert "Library" in text
        assert "Yellow" in text
        assert "Requiem" in text
        assert "3 of 3 tracks shown, 1 missing" in text

    def test_playlist_view(self, snapshot_path, console_output):
        assert (
            cli.run_identify(str(snapshot_path), Config(), playlist_name="Road Trip")
            == 0
        )
        text = console_output.export_text()
        assert "Playlist: Road Trip" in text
        assert "Xylophone" in text
        assert "Zebra" not in text

    def test_favourites_only_from_config(self, snapshot_path, console_output):
        config = Config(view=ViewConfig(favourites_only=True))
        assert cli.run_identify(str(snapshot_path), config) == 0
        assert "1 of 3 tracks shown" in console_output.export_text()

    def test_search(self, snapshot_path, console_output):
        assert cli.run_identify(str(snapshot_path), Config(), search="zeb") == 0
        assert "1 of 3 tracks shown" in console_output.export_text()

    def test_unknown_playlist(self, snapshot_path, console_output):
        assert cli.run_identify(str(snapshot_path), Config(), playlist_name="Nope") == 1
        assert "Playlist not found" in console_output.export_text()

    def test_invalid_sort_key(self, snapshot_path, console_output):
        assert cli.run_identify(str(snapshot_path), Config(), sort_by="bpm") == 1

    def test_missing_snapshot(self, tmp_path, console_output):
        assert cli.run_identify(str(tmp_path / "nope.json"), Config()) == 1

    def test_snapshot_not_an_object(self, tmp_path, console_output):
        path = tmp_path / "snapshot.json"
        path.write_text("[]", encoding="utf-8")
        assert cli.run_identify(str(path), Config()) == 1
        assert "expected a JSON object" in console_output.export_text()

    def test_numeric_tags(self, tmp_path, console_output):
        path = tmp_path / "snapshot.json"
        path.write_text(
            json.dumps(
                {
                    "tracks": [
                        {
                            "id": "p",
                            "source_id": "local",
                            "path": "p.mp3",
                            "tags": {"artist": "Prince", "title": 1999},
                        }
                    ]
                }
            ),
            encoding="utf-8",
        )
        assert cli.run_identify(str(path), Config(), search="1999") == 0
        assert "1 of 1 tracks shown" in console_output.export_text()


class TestRunAutoplaylists:
    """Tests for run_autoplaylists."""

    def test_lists_directories(self, snapshot_path, console_output):
        assert cli.run_autoplaylists(str(snapshot_path)) == 0
        text = console_output.export_text()
        assert "Mix (1 tracks)" in text
        assert "Other (1 tracks)" in text

    def test_missing_snapshot(self, tmp_path, console_output):
        assert cli.run_autoplaylists(str(tmp_path / "nope.json")) == 1


class TestMain:
    """Tests for argument parsing."""

    def test_no_subcommand_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])
        assert exc_info.value.code == 1
