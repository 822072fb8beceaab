"""Tracks domain - identifying, sorting and harvesting the track list.

This domain handles:
- Identified track models and missing placeholders
- Reconciling the library with favourites and the selected playlist
- Sorting and list indexing
- Harvesting (search, favourites-only, duplicates)
"""

# Models
from .models import (
    MISSING_ID,
    IdentifiedTrack,
    Identifiers,
    missing_favourite,
    missing_playlist_track,
    missing_track,
)

# Sorting
from .sorting import (
    SortBy,
    SortDirection,
    SortPreference,
    assign_list_indexes,
    effective_sort,
    sort_and_index,
    sort_tracks,
)

# Identification
from .identify import FavouritePool, identify, is_now_playing

# Harvesting
from .harvest import (
    harvest,
    mark_favourites_only_hidden,
    now_playing_index,
    search_track_ids,
    select_tracks,
    track_key,
)

__all__ = [
    # Models
    "MISSING_ID",
    "IdentifiedTrack",
    "Identifiers",
    "missing_favourite",
    "missing_playlist_track",
    "missing_track",
    # Sorting
    "SortBy",
    "SortDirection",
    "SortPreference",
    "assign_list_indexes",
    "effective_sort",
    "sort_and_index",
    "sort_tracks",
    # Identification
    "FavouritePool",
    "identify",
    "is_now_playing",
    # Harvesting
    "harvest",
    "mark_favourites_only_hidden",
    "now_playing_index",
    "search_track_ids",
    "select_tracks",
    "track_key",
]
