"""
Identified track models.

An identified track pairs a library track (or a synthesized placeholder)
with flags derived for one reconciliation pass. Identifiers are never
persisted and never partially updated.
"""

from typing import NamedTuple, Optional

from music_curator.domain.library.favourites import Favourite
from music_curator.domain.library.models import Tags, Track
from music_curator.domain.playlists.models import PlaylistTrack

# Sentinel used for placeholder ids, paths, sources and unknown albums
MISSING_ID = "<missing>"


class Identifiers(NamedTuple):
    """Per-pass flags attached to a track."""

    index_in_playlist: Optional[int] = None
    is_favourite: bool = False
    is_missing: bool = False
    is_now_playing: bool = False
    is_selected: bool = False
    is_favourites_only_hidden: bool = False
    index_in_list: int = 0


class IdentifiedTrack(NamedTuple):
    """A track together with its identifiers."""

    identifiers: Identifiers
    track: Track

    @property
    def is_missing(self) -> bool:
        return self.identifiers.is_missing


def missing_track(
    artist: Optional[str], title: Optional[str], album: Optional[str] = None
) -> Track:
    """Synthesize a placeholder track for a reference with no library match."""
    return Track(
        id=MISSING_ID,
        source_id=MISSING_ID,
        path=MISSING_ID,
        tags=Tags(
            artist=artist or "",
            title=title or "",
            album=album or MISSING_ID,
            disc=1,
            nr=0,
        ),
    )


def missing_favourite(favourite: Favourite) -> IdentifiedTrack:
    """Placeholder for a favourite that no library track satisfies."""
    return IdentifiedTrack(
        identifiers=Identifiers(is_favourite=True, is_missing=True),
        track=missing_track(favourite.artist, favourite.title),
    )


def missing_playlist_track(
    index: int, playlist_track: PlaylistTrack
) -> IdentifiedTrack:
    """Placeholder for a playlist reference, kept at its playlist index."""
    return IdentifiedTrack(
        identifiers=Identifiers(index_in_playlist=index, is_missing=True),
        track=missing_track(
            playlist_track.artist, playlist_track.title, playlist_track.album
        ),
    )
