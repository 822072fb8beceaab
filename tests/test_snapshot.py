"""Tests for loading library snapshots."""

import json

import pytest

from music_curator.domain.library import Favourite, Source
from music_curator.domain.playlists import PlaylistTrack
from music_curator.domain.tracks import identify
from music_curator.snapshot import load_snapshot, parse_snapshot, parse_track

SNAPSHOT = {
    "sources": [
        {"id": "local", "name": "Music"},
        {"id": "nas", "enabled": False},
    ],
    "tracks": [
        {
            "id": "a",
            "source_id": "local",
            "path": "Baroque/air.mp3",
            "tags": {"artist": "Bach", "title": "Air", "album": "Suites", "nr": 3},
        },
        {"id": "b", "source_id": "nas", "path": "b.mp3"},
    ],
    "favourites": [{"artist": "Bach", "title": "Air"}],
    "playlists": [
        {
            "name": "Road Trip",
            "tracks": [{"artist": "Bach", "title": "Air", "album": "Suites"}],
        }
    ],
    "now_playing": {"id": "a", "index_in_playlist": 0},
}


class TestParseSnapshot:
    """Tests for parse_snapshot."""

    def test_full_snapshot(self):
        snapshot = parse_snapshot(SNAPSHOT)

        assert snapshot.sources[0] == Source(id="local", name="Music")
        assert snapshot.enabled_source_ids() == frozenset({"local"})
        assert snapshot.tracks[0].tags.nr == 3
        assert snapshot.tracks[0].tags.disc == 1
        assert snapshot.tracks[1].tags.artist is None
        assert snapshot.favourites == (Favourite("Bach", "Air"),)
        assert snapshot.playlists[0].tracks == (PlaylistTrack("Bach", "Air", "Suites"),)
        assert not snapshot.playlists[0].autogenerated
        assert snapshot.now_playing.track.id == "a"
        assert snapshot.now_playing.identifiers.index_in_playlist == 0

    def test_empty_snapshot(self):
        snapshot = parse_snapshot({})
        assert snapshot.tracks == ()
        assert snapshot.enabled_source_ids() is None
        assert snapshot.now_playing is None

    def test_unknown_now_playing_ignored(self):
        snapshot = parse_snapshot({"now_playing": {"id": "ghost"}})
        assert snapshot.now_playing is None

    def test_track_missing_path(self):
        with pytest.raises(ValueError, match="missing 'path'"):
            parse_track({"id": "a", "source_id": "local"})

    def test_favourite_missing_title(self):
        with pytest.raises(ValueError, match="favourite is missing 'title'"):
            parse_snapshot({"favourites": [{"artist": "Bach"}]})

    def test_non_string_tags_read_as_text(self):
        """Numeric tag values become strings and identify without errors."""
        snapshot = parse_snapshot(
            {
                "tracks": [
                    {
                        "id": "p",
                        "source_id": "local",
                        "path": "p.mp3",
                        "tags": {"artist": "Prince", "title": 1999, "album": 1999},
                    }
                ],
                "favourites": [{"artist": "Prince", "title": 1999}],
                "playlists": [
                    {"name": "Party", "tracks": [{"artist": "Prince", "title": 1999}]}
                ],
            }
        )

        assert snapshot.tracks[0].tags.title == "1999"
        assert snapshot.tracks[0].tags.album == "1999"
        assert snapshot.favourites == (Favourite("Prince", "1999"),)
        assert snapshot.playlists[0].tracks[0].title == "1999"

        identified = identify(snapshot.tracks, snapshot.favourites)
        assert len(identified) == 1
        assert identified[0].identifiers.is_favourite

    def test_top_level_must_be_object(self):
        with pytest.raises(ValueError, match="expected a JSON object, got list"):
            parse_snapshot([{"id": "a"}])

    def test_playlist_by_name(self):
        snapshot = parse_snapshot(SNAPSHOT)
        assert snapshot.playlist_by_name("road trip").name == "Road Trip"
        with pytest.raises(ValueError, match="Playlist not found"):
            snapshot.playlist_by_name("Nope")


class TestLoadSnapshot:
    """Tests for load_snapshot."""

    def test_reads_file(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")
        assert len(load_snapshot(path).tracks) == 2

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid snapshot JSON"):
            load_snapshot(path)

    def test_top_level_array(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps([SNAPSHOT]), encoding="utf-8")
        with pytest.raises(ValueError, match="expected a JSON object"):
            load_snapshot(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_snapshot(tmp_path / "missing.json")
