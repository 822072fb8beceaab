"""
Matching library tracks against playlist track references.

A reference matches a track when artist, title and album are equal
ignoring case. Because duplicate tag sets are possible on both sides,
assignment is one-to-one: references are processed in playlist order and
each claims the earliest unclaimed matching library track.
"""

from collections import defaultdict, deque
from typing import Iterable, NamedTuple

from music_curator.domain.library.models import Track, tag_text

from .models import PlaylistTrack


class PlaylistMatch(NamedTuple):
    """A library track claimed by the reference at ``index``."""

    index: int
    track: Track


class PlaylistAssignment(NamedTuple):
    """Result of assigning library tracks to a playlist.

    matched: claimed tracks, in playlist order
    unclaimed: (index, reference) pairs with no library track
    """

    matched: list[PlaylistMatch]
    unclaimed: list[tuple[int, PlaylistTrack]]


def match_key(artist, title, album) -> tuple[str, str, str]:
    """Case-insensitive lookup key for a tag triple."""
    return (tag_text(artist), tag_text(title), tag_text(album))


def matches_playlist_track(track: Track, playlist_track: PlaylistTrack) -> bool:
    """Check if a library track matches a playlist reference."""
    return match_key(
        track.tags.artist, track.tags.title, track.tags.album
    ) == match_key(playlist_track.artist, playlist_track.title, playlist_track.album)


def assign_playlist_tracks(
    tracks: Iterable[Track], playlist_tracks: Iterable[PlaylistTrack]
) -> PlaylistAssignment:
    """Assign library tracks to playlist references, first available wins.

    Args:
        tracks: Library tracks in their natural order
        playlist_tracks: References in stored playlist order

    Returns:
        PlaylistAssignment with claimed tracks and unclaimed references.
        Library tracks that no reference claimed are not part of the result.
    """
    buckets: dict[tuple[str, str, str], deque[Track]] = defaultdict(deque)
    for track in tracks:
        tags = track.tags
        buckets[match_key(tags.artist, tags.title, tags.album)].append(track)

    matched: list[PlaylistMatch] = []
    unclaimed: list[tuple[int, PlaylistTrack]] = []

    for index, playlist_track in enumerate(playlist_tracks):
        candidates = buckets.get(
            match_key(playlist_track.artist, playlist_track.title, playlist_track.album)
        )
        if candidates:
            matched.append(PlaylistMatch(index=index, track=candidates.popleft()))
        else:
            unclaimed.append((index, playlist_track))

    return PlaylistAssignment(matched=matched, unclaimed=unclaimed)
