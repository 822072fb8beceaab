"""
Sorting identified tracks.

Sorting is stable, and the direction applies to the whole ordering.
List indexes are assigned after sorting so they always reflect the final
order.
"""

from enum import Enum
from typing import Callable, Iterable, NamedTuple, Optional

from .models import IdentifiedTrack


class SortBy(Enum):
    """Sort key for the track list."""

    ARTIST = "artist"
    ALBUM = "album"
    TITLE = "title"
    PLAYLIST_INDEX = "playlist_index"

    @classmethod
    def from_string(cls, value: str) -> "SortBy":
        """Parse a sort key name (case-insensitive, '-' or '_').

        Raises:
            ValueError: If the name is not a known sort key
        """
        normalized = value.strip().lower().replace("-", "_")
        for member in cls:
            if member.value == normalized:
                return member
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Invalid sort key: {value!r}. Valid keys are: {valid}")


class SortDirection(Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def from_string(cls, value: str) -> "SortDirection":
        """Parse a direction ('asc'/'ascending', 'desc'/'descending').

        Raises:
            ValueError: If the value is not a known direction
        """
        normalized = value.strip().lower()
        if normalized in ("asc", "ascending"):
            return cls.ASC
        if normalized in ("desc", "descending"):
            return cls.DESC
        raise ValueError(f"Invalid sort direction: {value!r}. Use 'asc' or 'desc'")


class SortPreference(NamedTuple):
    """Effective sort key and direction for one pass."""

    sort_by: SortBy = SortBy.ARTIST
    direction: SortDirection = SortDirection.ASC


def _tag_sort_key(field: str) -> Callable[[IdentifiedTrack], str]:
    def key(identified: IdentifiedTrack) -> str:
        return (getattr(identified.track.tags, field) or "").lower()

    return key


_TAG_FIELDS = {
    SortBy.ARTIST: "artist",
    SortBy.ALBUM: "album",
    SortBy.TITLE: "title",
}


def sort_tracks(
    sort_by: SortBy, direction: SortDirection, tracks: Iterable[IdentifiedTrack]
) -> list[IdentifiedTrack]:
    """Stable sort of identified tracks.

    Tag keys compare case-insensitively. PLAYLIST_INDEX compares
    index_in_playlist; entries without an index go last in either
    direction and keep their relative order.
    """
    reverse = direction == SortDirection.DESC

    if sort_by == SortBy.PLAYLIST_INDEX:
        tracks = list(tracks)
        indexed = [t for t in tracks if t.identifiers.index_in_playlist is not None]
        unindexed = [t for t in tracks if t.identifiers.index_in_playlist is None]
        indexed = sorted(
            indexed, key=lambda t: t.identifiers.index_in_playlist, reverse=reverse
        )
        return indexed + unindexed

    return sorted(tracks, key=_tag_sort_key(_TAG_FIELDS[sort_by]), reverse=reverse)


def assign_list_indexes(tracks: Iterable[IdentifiedTrack]) -> list[IdentifiedTrack]:
    """Set index_in_list densely (0..n-1) in the given order."""
    return [
        t._replace(identifiers=t.identifiers._replace(index_in_list=idx))
        for idx, t in enumerate(tracks)
    ]


def effective_sort(
    preference: SortPreference, playlist_autogenerated: Optional[bool]
) -> SortPreference:
    """Decide which ordering applies to a view.

    User-authored playlists are ordered manually, so they always sort by
    playlist position ascending. The library view (no playlist, passed as
    None) and auto-generated playlists use the user's preference.
    """
    if playlist_autogenerated is False:
        return SortPreference(SortBy.PLAYLIST_INDEX, SortDirection.ASC)
    return preference


def sort_and_index(
    preference: SortPreference, tracks: Iterable[IdentifiedTrack]
) -> list[IdentifiedTrack]:
    """Sort, then assign list indexes."""
    return assign_list_indexes(
        sort_tracks(preference.sort_by, preference.direction, tracks)
    )
