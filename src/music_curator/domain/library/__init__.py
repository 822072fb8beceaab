"""Library domain - scanned tracks, sources and favourites.

This domain handles:
- Track, tag and source data models
- Favourite references and favourite matching
"""

# Models
from .models import Source, Tags, Track, tag_text

# Favourites
from .favourites import (
    Favourite,
    favourite_key,
    matches_favourite,
    toggle_favourite,
)

__all__ = [
    # Models
    "Source",
    "Tags",
    "Track",
    "tag_text",
    # Favourites
    "Favourite",
    "favourite_key",
    "matches_favourite",
    "toggle_favourite",
]
