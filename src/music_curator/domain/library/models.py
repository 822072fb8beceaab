"""
Music library domain models.

Contains data structures for representing scanned tracks and the sources
they were scanned from.
"""

from typing import NamedTuple, Optional


class Tags(NamedTuple):
    """Tag bundle read from an audio file.

    Artist, title and album may be absent when the file carried no tags;
    matching treats an absent value as an empty string.
    """

    artist: Optional[str] = None
    title: Optional[str] = None
    album: Optional[str] = None
    genre: Optional[str] = None
    year: Optional[int] = None
    disc: int = 1
    nr: int = 0
    picture: Optional[str] = None  # Reference to embedded or external artwork


class Track(NamedTuple):
    """Represents a scanned track.

    Tracks are produced by the library scanner and never mutated afterwards.
    The id is unique within a source.
    """

    id: str
    source_id: str
    path: str  # Path relative to the source root, "/" separated
    tags: Tags = Tags()
    inserted_at: Optional[str] = None


class Source(NamedTuple):
    """A place tracks are scanned from (local directory, remote bucket, ...)."""

    id: str
    name: str = ""
    enabled: bool = True
    has_error: bool = False
    directory_playlists: bool = True  # Contributes auto-generated playlists


def tag_text(value: Optional[str]) -> str:
    """Lowercase a tag value for comparison, treating None as empty."""
    return (value or "").lower()
