"""
Harvesting - the view actually rendered and queued.

Takes the identified list and applies the search results, the
favourites-only toggle and duplicate hiding. Also home to the small
helpers the list and queue consume (selection, scroll-to-now-playing).
"""

from typing import AbstractSet, Iterable, Optional

from loguru import logger

from music_curator.domain.library.models import tag_text

from .models import IdentifiedTrack
from .sorting import assign_list_indexes

TrackKey = tuple[str, str]


def track_key(identified: IdentifiedTrack) -> TrackKey:
    """(source id, track id) pair; track ids are only unique within a source."""
    return (identified.track.source_id, identified.track.id)


def search_track_ids(term: str, tracks: Iterable[IdentifiedTrack]) -> set[TrackKey]:
    """Find keys of real tracks whose tags contain the search term.

    Case-insensitive substring match over artist, title, album and genre.
    Placeholders are never part of search results.
    """
    needle = term.strip().lower()
    results = set()

    for identified in tracks:
        if identified.identifiers.is_missing:
            continue
        tags = identified.track.tags
        searchable = " ".join(
            tag_text(value)
            for value in (tags.artist, tags.title, tags.album, tags.genre)
        )
        if needle in searchable:
            results.add(track_key(identified))

    return results


def mark_favourites_only_hidden(
    tracks: Iterable[IdentifiedTrack], favourites_only: bool
) -> list[IdentifiedTrack]:
    """Flag entries hidden by the favourites-only toggle."""
    return [
        t._replace(
            identifiers=t.identifiers._replace(
                is_favourites_only_hidden=favourites_only
                and not t.identifiers.is_favourite
            )
        )
        for t in tracks
    ]


def _without_duplicates(tracks: list[IdentifiedTrack]) -> list[IdentifiedTrack]:
    seen: set[tuple[str, str]] = set()
    unique = []
    for identified in tracks:
        tags = identified.track.tags
        key = (tag_text(tags.artist), tag_text(tags.title))
        if key in seen:
            continue
        seen.add(key)
        unique.append(identified)
    return unique


def harvest(
    identified: Iterable[IdentifiedTrack],
    search_results: Optional[AbstractSet[TrackKey]] = None,
    favourites_only: bool = False,
    hide_duplicates: bool = False,
) -> list[IdentifiedTrack]:
    """Filter the identified list down to what is rendered.

    Args:
        identified: Output of the identification pass
        search_results: Track keys matching the active search (None = no search)
        favourites_only: Only keep favourites (including missing ones)
        hide_duplicates: Keep only the first entry per artist and title

    Returns:
        Harvested tracks, re-indexed densely in their existing order
    """
    tracks = mark_favourites_only_hidden(identified, favourites_only)
    total = len(tracks)

    if search_results is not None:
        tracks = [
            t
            for t in tracks
            if not t.identifiers.is_missing and track_key(t) in search_results
        ]

    tracks = [t for t in tracks if not t.identifiers.is_favourites_only_hidden]

    if hide_duplicates:
        tracks = _without_duplicates(tracks)

    logger.debug(f"Harvested {len(tracks)} of {total} identified tracks")
    return assign_list_indexes(tracks)


def select_tracks(
    tracks: Iterable[IdentifiedTrack], indexes: AbstractSet[int]
) -> list[IdentifiedTrack]:
    """Mark the entries at the given list indexes as selected."""
    return [
        t._replace(
            identifiers=t.identifiers._replace(
                is_selected=t.identifiers.index_in_list in indexes
            )
        )
        for t in tracks
    ]


def now_playing_index(tracks: Iterable[IdentifiedTrack]) -> Optional[int]:
    """Get the list index of the now-playing entry, for scrolling to it."""
    for identified in tracks:
        if identified.identifiers.is_now_playing:
            return identified.identifiers.index_in_list
    return None
