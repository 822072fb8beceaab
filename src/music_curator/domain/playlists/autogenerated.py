"""
Directory playlists generated from the library layout.

Every top-level directory of a source becomes a playlist containing the
tracks below it, in path order. Tracks at the source root belong to no
directory playlist.
"""

from typing import Iterable, Optional

from loguru import logger

from music_curator.domain.library.models import Source, Track

from .models import Playlist, playlist_track_from_track


def is_viable_source(source: Source) -> bool:
    """Check if a source contributes directory playlists."""
    return source.enabled and not source.has_error and source.directory_playlists


def top_level_directory(path: str) -> Optional[str]:
    """Get the first directory segment of a source-relative path.

    Examples:
        >>> top_level_directory("Jazz/Miles Davis/So What.mp3")
        'Jazz'
        >>> top_level_directory("loose.mp3") is None
        True
    """
    segments = [s for s in path.split("/") if s]
    if len(segments) < 2:
        return None
    return segments[0]


def generate_directory_playlists(
    sources: Iterable[Source], tracks: Iterable[Track]
) -> list[Playlist]:
    """Generate one auto playlist per top-level directory per viable source.

    Args:
        sources: All configured sources (non-viable ones are skipped)
        tracks: Untouched library tracks

    Returns:
        Playlists ordered by source order, then directory name
    """
    viable = [s.id for s in sources if is_viable_source(s)]
    grouped: dict[str, dict[str, list[Track]]] = {source_id: {} for source_id in viable}

    for track in tracks:
        directories = grouped.get(track.source_id)
        if directories is None:
            continue
        directory = top_level_directory(track.path)
        if directory is None:
            continue
        directories.setdefault(directory, []).append(track)

    playlists = []
    for source_id in viable:
        for directory in sorted(grouped[source_id]):
            members = sorted(grouped[source_id][directory], key=lambda t: t.path)
            playlists.append(
                Playlist(
                    name=directory,
                    tracks=tuple(playlist_track_from_track(t) for t in members),
                    autogenerated=True,
                )
            )

    logger.debug(
        f"Generated {len(playlists)} directory playlists from {len(viable)} sources"
    )
    return playlists
