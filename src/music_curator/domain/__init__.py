"""Domain layer - library, playlists and track identification."""
