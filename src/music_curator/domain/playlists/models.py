"""
Playlist domain models.

Playlists reference songs by tags rather than track ids, so they survive
rescans and can point at songs that are not in the library.
"""

from typing import NamedTuple, Optional

from music_curator.domain.library.models import Track


class PlaylistTrack(NamedTuple):
    """Reference to a song inside a playlist."""

    artist: Optional[str] = None
    title: Optional[str] = None
    album: Optional[str] = None


class Playlist(NamedTuple):
    """Named, ordered sequence of playlist track references.

    Auto-generated playlists are derived from the directory structure of a
    source; all others are authored (and manually ordered) by the user.
    """

    name: str
    tracks: tuple[PlaylistTrack, ...] = ()
    autogenerated: bool = False


def playlist_track_from_track(track: Track) -> PlaylistTrack:
    """Build a playlist reference from a library track's tags."""
    return PlaylistTrack(
        artist=track.tags.artist,
        title=track.tags.title,
        album=track.tags.album,
    )
