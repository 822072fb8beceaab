"""Music Curator - reconciles a scanned track library with favourites and playlists."""

__version__ = "0.1.0"
