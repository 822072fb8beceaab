"""Library state management - immutable state updates.

The state holds every input of the identification pass together with the
last result. Each update returns a new state whose identified list has been
recomputed from scratch; the previous list is discarded, never patched.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from loguru import logger

from music_curator.core.config import Config
from music_curator.domain.library import Favourite, Track, toggle_favourite
from music_curator.domain.playlists import Playlist
from music_curator.domain.tracks import (
    IdentifiedTrack,
    SortBy,
    SortDirection,
    identify,
)
from music_curator.snapshot import LibrarySnapshot


@dataclass
class LibraryState:
    """Snapshot of the engine inputs and the identified output."""

    tracks: tuple[Track, ...] = ()
    enabled_source_ids: Optional[frozenset[str]] = None  # None = all sources
    favourites: tuple[Favourite, ...] = ()
    selected_playlist: Optional[Playlist] = None
    now_playing: Optional[IdentifiedTrack] = None
    sort_by: SortBy = SortBy.ARTIST
    sort_direction: SortDirection = SortDirection.ASC

    # Output of the last pass
    identified: list[IdentifiedTrack] = field(default_factory=list)


def recompute(state: LibraryState) -> LibraryState:
    """Run the identification pass and replace the identified list."""
    identified = identify(
        state.tracks,
        favourites=state.favourites,
        enabled_source_ids=state.enabled_source_ids,
        selected_playlist=state.selected_playlist,
        now_playing=state.now_playing,
        sort_by=state.sort_by,
        sort_direction=state.sort_direction,
    )
    return replace(state, identified=identified)


def set_tracks(state: LibraryState, tracks: Iterable[Track]) -> LibraryState:
    """Replace the whole library."""
    return recompute(replace(state, tracks=tuple(tracks)))


def set_enabled_sources(
    state: LibraryState, source_ids: Optional[Iterable[str]]
) -> LibraryState:
    """Change which sources are enabled (None enables all)."""
    enabled = None if source_ids is None else frozenset(source_ids)
    return recompute(replace(state, enabled_source_ids=enabled))


def set_favourites(
    state: LibraryState, favourites: Iterable[Favourite]
) -> LibraryState:
    """Replace the favourites."""
    return recompute(replace(state, favourites=tuple(favourites)))


def toggle_favourite_at(state: LibraryState, index_in_list: int) -> LibraryState:
    """Toggle the favourite of the identified entry at a list index."""
    if not 0 <= index_in_list < len(state.identified):
        logger.warning(f"No track at list index {index_in_list}")
        return state

    favourites = toggle_favourite(state.favourites, state.identified[index_in_list])
    return set_favourites(state, favourites)


def select_playlist(state: LibraryState, playlist: Optional[Playlist]) -> LibraryState:
    """Select a playlist to view, or None for the library view."""
    return recompute(replace(state, selected_playlist=playlist))


def set_now_playing(
    state: LibraryState, now_playing: Optional[IdentifiedTrack]
) -> LibraryState:
    """Set the now-playing track (None when playback stopped)."""
    return recompute(replace(state, now_playing=now_playing))


def play_at(state: LibraryState, index_in_list: int) -> LibraryState:
    """Mark the entry at a list index as now playing.

    Missing placeholders cannot be played; the state is returned unchanged.
    """
    if not 0 <= index_in_list < len(state.identified):
        logger.warning(f"No track at list index {index_in_list}")
        return state

    identified = state.identified[index_in_list]
    if identified.identifiers.is_missing:
        logger.debug(f"Cannot play missing track: {identified.track.tags.title}")
        return state

    return set_now_playing(state, identified)


def set_sort(
    state: LibraryState,
    sort_by: SortBy,
    direction: Optional[SortDirection] = None,
) -> LibraryState:
    """Change the sort key.

    Without an explicit direction, picking the active key again flips the
    direction and picking another key sorts ascending.
    """
    if direction is None:
        direction = (
            SortDirection.DESC
            if sort_by == state.sort_by and state.sort_direction == SortDirection.ASC
            else SortDirection.ASC
        )
    return recompute(replace(state, sort_by=sort_by, sort_direction=direction))


def check_selected_playlist(
    selected: Optional[Playlist], playlists: Iterable[Playlist]
) -> Optional[Playlist]:
    """Compare the selected playlist with the authoritative playlists.

    Returns:
        The selected playlist itself when it is unchanged, the authoritative
        copy when its tracks or flag diverged, or None when it was removed
    """
    if selected is None:
        return None

    for playlist in playlists:
        if playlist.name == selected.name:
            return selected if playlist == selected else playlist

    return None


def recheck_selected_playlist(
    state: LibraryState, playlists: Iterable[Playlist]
) -> LibraryState:
    """Re-run the pass if the selected playlist changed in the playlist store."""
    checked = check_selected_playlist(state.selected_playlist, playlists)
    if checked is state.selected_playlist:
        return state

    if checked is None:
        logger.info(f"Selected playlist '{state.selected_playlist.name}' was removed")
    else:
        logger.info(f"Selected playlist '{checked.name}' changed, recomputing")
    return select_playlist(state, checked)


def state_from_snapshot(
    snapshot: LibrarySnapshot,
    config: Config,
    selected_playlist: Optional[Playlist] = None,
) -> LibraryState:
    """Build the initial state from a snapshot and the user's configuration."""
    if config.library.enabled_sources:
        enabled = frozenset(config.library.enabled_sources)
    else:
        enabled = snapshot.enabled_source_ids()

    state = LibraryState(
        tracks=snapshot.tracks,
        enabled_source_ids=enabled,
        favourites=snapshot.favourites,
        selected_playlist=selected_playlist,
        now_playing=snapshot.now_playing,
        sort_by=SortBy.from_string(config.library.sort_by),
        sort_direction=SortDirection.from_string(config.library.sort_direction),
    )
    return recompute(state)
