"""Playlists domain - playlist references and directory playlists.

This domain handles:
- Playlist and playlist track models
- Matching library tracks against playlist references
- Generating playlists from the directory structure of sources
"""

# Models
from .models import Playlist, PlaylistTrack, playlist_track_from_track

# Matching
from .matching import (
    PlaylistAssignment,
    PlaylistMatch,
    assign_playlist_tracks,
    matches_playlist_track,
)

# Auto-generated playlists
from .autogenerated import (
    generate_directory_playlists,
    is_viable_source,
    top_level_directory,
)

__all__ = [
    # Models
    "Playlist",
    "PlaylistTrack",
    "playlist_track_from_track",
    # Matching
    "PlaylistAssignment",
    "PlaylistMatch",
    "assign_playlist_tracks",
    "matches_playlist_track",
    # Auto-generated
    "generate_directory_playlists",
    "is_viable_source",
    "top_level_directory",
]
