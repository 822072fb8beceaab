"""
Library snapshots stored as JSON.

A snapshot bundles every input of an identification pass (sources,
tracks, favourites, playlists and the now-playing reference) so it can be
inspected from the command line.
"""

import json
from pathlib import Path
from typing import Any, NamedTuple, Optional

from loguru import logger

from music_curator.domain.library import Favourite, Source, Tags, Track
from music_curator.domain.playlists import Playlist, PlaylistTrack
from music_curator.domain.tracks import IdentifiedTrack, Identifiers


class LibrarySnapshot(NamedTuple):
    """All engine inputs read from a snapshot file."""

    sources: tuple[Source, ...] = ()
    tracks: tuple[Track, ...] = ()
    favourites: tuple[Favourite, ...] = ()
    playlists: tuple[Playlist, ...] = ()
    now_playing: Optional[IdentifiedTrack] = None

    def enabled_source_ids(self) -> Optional[frozenset[str]]:
        """Ids of enabled sources, or None when the snapshot declares no sources.

        Tracks of undeclared sources are not eligible once any source is declared.
        """
        if not self.sources:
            return None
        return frozenset(s.id for s in self.sources if s.enabled)

    def playlist_by_name(self, name: str) -> Playlist:
        """Find a playlist by name (case-insensitive).

        Raises:
            ValueError: If no playlist has that name
        """
        for playlist in self.playlists:
            if playlist.name.lower() == name.lower():
                return playlist
        raise ValueError(f"Playlist not found: {name}")


def _require(data: dict[str, Any], key: str, context: str) -> Any:
    if key not in data:
        raise ValueError(f"Invalid snapshot: {context} is missing '{key}'")
    return data[key]


def _text(value: Any) -> Optional[str]:
    """Text tag value; numbers and other scalars are read as their string form."""
    if value is None or isinstance(value, str):
        return value
    return str(value)


def parse_tags(data: dict[str, Any]) -> Tags:
    """Parse a tag bundle, tolerating absent fields and non-string values."""
    return Tags(
        artist=_text(data.get("artist")),
        title=_text(data.get("title")),
        album=_text(data.get("album")),
        genre=_text(data.get("genre")),
        year=data.get("year"),
        disc=data.get("disc", 1),
        nr=data.get("nr", 0),
        picture=data.get("picture"),
    )


def parse_track(data: dict[str, Any]) -> Track:
    """Parse a track record.

    Raises:
        ValueError: If id, source_id or path is missing
    """
    return Track(
        id=str(_require(data, "id", "track")),
        source_id=str(_require(data, "source_id", f"track {data.get('id')}")),
        path=_require(data, "path", f"track {data.get('id')}"),
        tags=parse_tags(data.get("tags") or {}),
        inserted_at=data.get("inserted_at"),
    )


def parse_source(data: dict[str, Any]) -> Source:
    """Parse a source record."""
    return Source(
        id=str(_require(data, "id", "source")),
        name=data.get("name", ""),
        enabled=data.get("enabled", True),
        has_error=data.get("has_error", False),
        directory_playlists=data.get("directory_playlists", True),
    )


def parse_playlist(data: dict[str, Any]) -> Playlist:
    """Parse a playlist record."""
    return Playlist(
        name=_require(data, "name", "playlist"),
        tracks=tuple(
            PlaylistTrack(
                artist=_text(t.get("artist")),
                title=_text(t.get("title")),
                album=_text(t.get("album")),
            )
            for t in data.get("tracks", [])
        ),
        autogenerated=data.get("autogenerated", False),
    )


def _parse_now_playing(
    data: Optional[dict[str, Any]], tracks: tuple[Track, ...]
) -> Optional[IdentifiedTrack]:
    if not data:
        return None

    track_id = str(_require(data, "id", "now_playing"))
    track = next((t for t in tracks if t.id == track_id), None)
    if track is None:
        logger.warning(f"Now-playing track {track_id} is not in the library")
        return None

    return IdentifiedTrack(
        identifiers=Identifiers(index_in_playlist=data.get("index_in_playlist")),
        track=track,
    )


def parse_snapshot(data: dict[str, Any]) -> LibrarySnapshot:
    """Build a snapshot from decoded JSON.

    Raises:
        ValueError: If the data is not an object or a record is missing a
            required field
    """
    if not isinstance(data, dict):
        raise ValueError(
            f"Invalid snapshot: expected a JSON object, got {type(data).__name__}"
        )

    tracks = tuple(parse_track(t) for t in data.get("tracks", []))
    return LibrarySnapshot(
        sources=tuple(parse_source(s) for s in data.get("sources", [])),
        tracks=tracks,
        favourites=tuple(
            Favourite(
                artist=_text(_require(f, "artist", "favourite")) or "",
                title=_text(_require(f, "title", "favourite")) or "",
            )
            for f in data.get("favourites", [])
        ),
        playlists=tuple(parse_playlist(p) for p in data.get("playlists", [])),
        now_playing=_parse_now_playing(data.get("now_playing"), tracks),
    )


def load_snapshot(path: Path) -> LibrarySnapshot:
    """Read a snapshot file.

    Raises:
        ValueError: If the file is not valid JSON or misses required fields
        OSError: If the file cannot be read
    """
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid snapshot JSON in {path}: {e}") from e

    snapshot = parse_snapshot(data)
    logger.info(
        f"Loaded snapshot {path}: {len(snapshot.tracks)} tracks, "
        f"{len(snapshot.favourites)} favourites, {len(snapshot.playlists)} playlists"
    )
    return snapshot
