"""
Favourites - user references to songs by artist and title.

A favourite is not tied to a track id: the matching track may not be in
the library (yet), in which case it surfaces as a missing placeholder.
"""

from typing import NamedTuple, TYPE_CHECKING

from .models import Track, tag_text

if TYPE_CHECKING:
    from music_curator.domain.tracks.models import IdentifiedTrack


class Favourite(NamedTuple):
    """Favourite reference. Values are assumed to be trimmed already."""

    artist: str
    title: str


def favourite_key(artist, title) -> tuple[str, str]:
    """Case-insensitive lookup key for an (artist, title) pair."""
    return (tag_text(artist), tag_text(title))


def matches_favourite(track: Track, favourite: Favourite) -> bool:
    """Check if a track matches a favourite (case-insensitive artist + title).

    Album is ignored.
    """
    return favourite_key(track.tags.artist, track.tags.title) == favourite_key(
        favourite.artist, favourite.title
    )


def toggle_favourite(
    favourites: tuple[Favourite, ...], identified: "IdentifiedTrack"
) -> tuple[Favourite, ...]:
    """Add or remove the favourite for an identified track.

    Removing drops every favourite matching the track's artist and title,
    so a placeholder can be un-favourited as well as a real track.

    Args:
        favourites: Current favourites
        identified: Track the user toggled

    Returns:
        New favourites tuple (the input is left untouched)
    """
    track = identified.track
    remaining = tuple(f for f in favourites if not matches_favourite(track, f))

    if len(remaining) != len(favourites):
        return remaining

    return favourites + (
        Favourite(artist=track.tags.artist or "", title=track.tags.title or ""),
    )
