"""
Music Curator CLI - Entry point

Inspect how a library snapshot is reconciled with favourites and playlists.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from loguru import logger
from rich.table import Table
from rich.text import Text

from music_curator.core.config import Config, get_log_file_path, load_config
from music_curator.core.console import get_console, print_error, safe_print
from music_curator.core.output import log, setup_loguru
from music_curator.domain.playlists import generate_directory_playlists
from music_curator.domain.tracks import (
    IdentifiedTrack,
    SortBy,
    SortDirection,
    harvest,
    search_track_ids,
)
from music_curator.snapshot import load_snapshot
from music_curator.state import set_sort, state_from_snapshot


def _flags(identified: IdentifiedTrack) -> str:
    identifiers = identified.identifiers
    flags = []
    if identifiers.is_now_playing:
        flags.append("▶")
    if identifiers.is_favourite:
        flags.append("♥")
    if identifiers.is_missing:
        flags.append("missing")
    return " ".join(flags)


def render_tracks(tracks: list[IdentifiedTrack], title: str) -> Table:
    """Build a Rich table for an identified track list."""
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Pos", justify="right")
    table.add_column("Artist")
    table.add_column("Title")
    table.add_column("Album")
    table.add_column("Flags")

    for identified in tracks:
        tags = identified.track.tags
        index_in_playlist = identified.identifiers.index_in_playlist
        table.add_row(
            str(identified.identifiers.index_in_list),
            "" if index_in_playlist is None else str(index_in_playlist),
            Text(tags.artist or ""),
            Text(tags.title or ""),
            Text(tags.album or ""),
            _flags(identified),
            style="dim" if identified.identifiers.is_missing else None,
        )

    return table


def run_identify(
    snapshot_path: str,
    config: Config,
    playlist_name: Optional[str] = None,
    sort_by: Optional[str] = None,
    direction: Optional[str] = None,
    favourites_only: bool = False,
    search: Optional[str] = None,
) -> int:
    """Identify and harvest a snapshot, printing the resulting list.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        snapshot = load_snapshot(Path(snapshot_path))
        selected = snapshot.playlist_by_name(playlist_name) if playlist_name else None
        state = state_from_snapshot(snapshot, config, selected_playlist=selected)

        if sort_by or direction:
            state = set_sort(
                state,
                SortBy.from_string(sort_by) if sort_by else state.sort_by,
                (
                    SortDirection.from_string(direction)
                    if direction
                    else state.sort_direction
                ),
            )
    except (OSError, ValueError) as e:
        logger.exception(f"Failed to identify {snapshot_path}")
        print_error(str(e))
        return 1

    search_results = (
        search_track_ids(search, state.identified) if search is not None else None
    )
    harvested = harvest(
        state.identified,
        search_results=search_results,
        favourites_only=favourites_only or config.view.favourites_only,
        hide_duplicates=config.view.hide_duplicates,
    )

    title = f"Playlist: {selected.name}" if selected else "Library"
    get_console().print(render_tracks(harvested, title))

    missing = sum(1 for t in state.identified if t.identifiers.is_missing)
    log(f"{len(harvested)} of {len(state.identified)} tracks shown, {missing} missing")
    return 0


def run_autoplaylists(snapshot_path: str) -> int:
    """Print the directory playlists generated for a snapshot.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        snapshot = load_snapshot(Path(snapshot_path))
    except (OSError, ValueError) as e:
        logger.exception(f"Failed to load {snapshot_path}")
        print_error(str(e))
        return 1

    playlists = generate_directory_playlists(snapshot.sources, snapshot.tracks)
    if not playlists:
        log("No directory playlists found")
        return 0

    for playlist in playlists:
        safe_print(
            f"📁 {playlist.name} ({len(playlist.tracks)} tracks)",
            style="bold",
            markup=False,
        )
        for playlist_track in playlist.tracks:
            safe_print(
                f"  {playlist_track.artist or '?'} - {playlist_track.title or '?'}",
                markup=False,
            )

    return 0


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the music-curator command."""
    parser = argparse.ArgumentParser(
        description="Music Curator - library and playlist reconciliation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="subcommand", help="Available commands")

    identify_parser = subparsers.add_parser(
        "identify", help="Show the identified track list for a snapshot"
    )
    identify_parser.add_argument("snapshot", help="Path to a library snapshot (JSON)")
    identify_parser.add_argument("--playlist", help="Name of the playlist to view")
    identify_parser.add_argument(
        "--sort-by", help="Sort key (artist, album, title, playlist_index)"
    )
    identify_parser.add_argument("--direction", help="Sort direction (asc, desc)")
    identify_parser.add_argument(
        "--favourites-only", action="store_true", help="Only show favourites"
    )
    identify_parser.add_argument("--search", help="Only show tracks matching a term")

    autoplaylists_parser = subparsers.add_parser(
        "autoplaylists", help="Show directory playlists generated for a snapshot"
    )
    autoplaylists_parser.add_argument(
        "snapshot", help="Path to a library snapshot (JSON)"
    )

    args = parser.parse_args(argv)

    if not args.subcommand:
        parser.print_help()
        sys.exit(1)

    config = load_config()
    setup_loguru(
        get_log_file_path(config),
        level=config.logging.level,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count,
        console_output=config.logging.console_output,
    )

    if args.subcommand == "identify":
        sys.exit(
            run_identify(
                args.snapshot,
                config,
                playlist_name=args.playlist,
                sort_by=args.sort_by,
                direction=args.direction,
                favourites_only=args.favourites_only,
                search=args.search,
            )
        )
    elif args.subcommand == "autoplaylists":
        sys.exit(run_autoplaylists(args.snapshot))


if __name__ == "__main__":
    main()
