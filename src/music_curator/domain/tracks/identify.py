"""
Track identification - reconciling the library with favourites and playlists.

One call folds the untouched library, the favourites and (optionally) the
selected playlist into the ordered list of identified tracks the interface
renders. The function is pure: the result replaces any previous result in
full and nothing is patched incrementally.

Two modes:
- Library (no playlist): every track of an enabled source is identified;
  favourites without a matching track become missing placeholders.
- Playlist: only tracks claimed by a playlist reference are kept, each at
  its playlist index; unclaimed references become placeholders at their
  index, followed by placeholders for unconsumed favourites.
"""

from typing import Iterable, Optional

from loguru import logger

from music_curator.domain.library.favourites import Favourite, favourite_key
from music_curator.domain.library.models import Track
from music_curator.domain.playlists.matching import assign_playlist_tracks
from music_curator.domain.playlists.models import Playlist

from .models import (
    IdentifiedTrack,
    Identifiers,
    missing_favourite,
    missing_playlist_track,
)
from .sorting import (
    SortBy,
    SortDirection,
    SortPreference,
    effective_sort,
    sort_and_index,
)


class FavouritePool:
    """Working set of favourites for one pass.

    Membership is checked against all favourites. A favourite is consumed by
    the first track matching it; later matching tracks are still flagged as
    favourites but do not consume anything. Whatever is left unconsumed gets
    exactly one placeholder each.
    """

    def __init__(self, favourites: Iterable[Favourite]) -> None:
        self._remaining: dict[tuple[str, str], Favourite] = {}
        for favourite in favourites:
            self._remaining.setdefault(
                favourite_key(favourite.artist, favourite.title), favourite
            )
        self._keys = frozenset(self._remaining)

    def claim(self, track: Track) -> bool:
        """Check favourite membership, consuming the favourite on first match."""
        key = favourite_key(track.tags.artist, track.tags.title)
        if key not in self._keys:
            return False
        self._remaining.pop(key, None)
        return True

    def unconsumed(self) -> list[Favourite]:
        """Favourites no track has claimed, in their original order."""
        return list(self._remaining.values())


def is_now_playing(
    track: Track,
    index_in_playlist: Optional[int],
    now_playing: Optional[IdentifiedTrack],
) -> bool:
    """Check if a track in the current context is the now-playing track.

    Identity is the track id. When both the now-playing entry and the
    current context carry a playlist index, the indexes must also agree,
    which tells duplicate songs at different playlist positions apart.
    """
    if now_playing is None or now_playing.identifiers.is_missing:
        return False
    if now_playing.track.id != track.id:
        return False

    playing_index = now_playing.identifiers.index_in_playlist
    if playing_index is not None and index_in_playlist is not None:
        return playing_index == index_in_playlist
    return True


def _identify_track(
    track: Track,
    index_in_playlist: Optional[int],
    pool: FavouritePool,
    now_playing: Optional[IdentifiedTrack],
) -> IdentifiedTrack:
    return IdentifiedTrack(
        identifiers=Identifiers(
            index_in_playlist=index_in_playlist,
            is_favourite=pool.claim(track),
            is_now_playing=is_now_playing(track, index_in_playlist, now_playing),
        ),
        track=track,
    )


def _single_now_playing(tracks: list[IdentifiedTrack]) -> list[IdentifiedTrack]:
    """Keep the now-playing flag on the first flagged entry only."""
    seen = False
    result = []
    for identified in tracks:
        if identified.identifiers.is_now_playing:
            if seen:
                identified = identified._replace(
                    identifiers=identified.identifiers._replace(is_now_playing=False)
                )
            seen = True
        result.append(identified)
    return result


def _identify_library(
    tracks: list[Track],
    pool: FavouritePool,
    now_playing: Optional[IdentifiedTrack],
) -> list[IdentifiedTrack]:
    matched = [_identify_track(t, None, pool, now_playing) for t in tracks]
    missing = [missing_favourite(f) for f in pool.unconsumed()]

    logger.debug(
        f"Identified library: {len(matched)} tracks, {len(missing)} missing favourites"
    )
    return missing + matched


def _identify_playlist(
    tracks: list[Track],
    playlist: Playlist,
    pool: FavouritePool,
    now_playing: Optional[IdentifiedTrack],
) -> list[IdentifiedTrack]:
    assignment = assign_playlist_tracks(tracks, playlist.tracks)

    from_playlist = [
        _identify_track(match.track, match.index, pool, now_playing)
        for match in assignment.matched
    ]
    from_playlist.extend(
        missing_playlist_track(index, playlist_track)
        for index, playlist_track in assignment.unclaimed
    )
    from_playlist.sort(key=lambda t: t.identifiers.index_in_playlist)

    missing_favourites = [missing_favourite(f) for f in pool.unconsumed()]

    logger.debug(
        f"Identified playlist '{playlist.name}': "
        f"{len(assignment.matched)} matched, "
        f"{len(assignment.unclaimed)} missing, "
        f"{len(tracks) - len(assignment.matched)} library tracks dropped, "
        f"{len(missing_favourites)} missing favourites"
    )
    return from_playlist + missing_favourites


def identify(
    tracks: Iterable[Track],
    favourites: Iterable[Favourite] = (),
    enabled_source_ids: Optional[Iterable[str]] = None,
    selected_playlist: Optional[Playlist] = None,
    now_playing: Optional[IdentifiedTrack] = None,
    sort_by: SortBy = SortBy.ARTIST,
    sort_direction: SortDirection = SortDirection.ASC,
) -> list[IdentifiedTrack]:
    """Compute the identified, ordered track list for one state snapshot.

    Args:
        tracks: Untouched library tracks, in natural order
        favourites: Favourite references
        enabled_source_ids: Sources whose tracks are eligible (None = all)
        selected_playlist: Playlist to view, or None for the library view
        now_playing: Currently playing identified track, if any
        sort_by: User's sort key
        sort_direction: User's sort direction

    Returns:
        Identified tracks in final order with dense index_in_list values
    """
    if enabled_source_ids is None:
        eligible = list(tracks)
    else:
        enabled = frozenset(enabled_source_ids)
        eligible = [t for t in tracks if t.source_id in enabled]

    pool = FavouritePool(favourites)

    if selected_playlist is None:
        identified = _identify_library(eligible, pool, now_playing)
        preference = effective_sort(SortPreference(sort_by, sort_direction), None)
    else:
        identified = _identify_playlist(eligible, selected_playlist, pool, now_playing)
        preference = effective_sort(
            SortPreference(sort_by, sort_direction), selected_playlist.autogenerated
        )

    return sort_and_index(preference, _single_now_playing(identified))
