"""
Configuration management for Music Curator
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

VALID_SORT_KEYS = {"artist", "album", "title", "playlist_index"}
VALID_SORT_DIRECTIONS = {"asc", "desc"}


@dataclass
class LibraryConfig:
    """Configuration for the library view."""

    sort_by: str = "artist"  # artist, album, title, playlist_index
    sort_direction: str = "asc"  # asc or desc
    enabled_sources: List[str] = field(default_factory=list)  # Empty = all

    def validate(self) -> None:
        """Validate library configuration values.

        Raises:
            ValueError: If the sort key or direction is unknown
        """
        if self.sort_by not in VALID_SORT_KEYS:
            raise ValueError(
                f"Invalid sort key: {self.sort_by!r}. "
                f"Valid keys are: {sorted(VALID_SORT_KEYS)}"
            )
        if self.sort_direction not in VALID_SORT_DIRECTIONS:
            raise ValueError(
                f"Invalid sort direction: {self.sort_direction!r}. Use 'asc' or 'desc'"
            )


@dataclass
class ViewConfig:
    """Configuration for the harvested (rendered) list."""

    favourites_only: bool = False
    hide_duplicates: bool = False


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/music-curator/music-curator.log)
    )
    max_file_size_mb: int = 10  # Maximum log file size before rotation
    backup_count: int = 5  # Number of backup files to keep
    console_output: bool = False  # Also output to console (for debugging)


@dataclass
class Config:
    """Main configuration object."""

    library: LibraryConfig = field(default_factory=LibraryConfig)
    view: ViewConfig = field(default_factory=ViewConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "music-curator"
    return Path.home() / ".config" / "music-curator"


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. MUSIC_CURATOR_CONFIG environment variable
    2. Current working directory
    3. XDG_CONFIG_HOME/music-curator (or ~/.config/music-curator)
    """
    env_config = os.environ.get("MUSIC_CURATOR_CONFIG")
    if env_config:
        return Path(env_config).expanduser()

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "music-curator"
    return Path.home() / ".local" / "share" / "music-curator"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Music Curator Configuration

[library]
# Sort key for the library and auto-generated playlists
# (artist, album, title, playlist_index)
sort_by = "artist"

# Sort direction (asc or desc)
sort_direction = "asc"

# Source ids whose tracks are shown (empty = all sources)
enabled_sources = []

[view]
# Only show favourites
favourites_only = false

# Hide tracks with the same artist and title as an earlier track
hide_duplicates = false

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/music-curator/music-curator.log)
# log_file = "/path/to/custom/music-curator.log"

# Maximum log file size in MB before rotation
max_file_size_mb = 10

# Number of backup log files to keep
backup_count = 5

# Also output logs to console (useful for debugging)
console_output = false
""".strip()


def load_config() -> Config:
    """Load configuration from file or create default.

    Environment variables override TOML values:
    - MUSIC_CURATOR_SORT_BY
    - MUSIC_CURATOR_SORT_DIRECTION
    - MUSIC_CURATOR_LOG_LEVEL
    """
    # Load .env file from config directory if it exists
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_default_config())
        print(f"Created default configuration at: {config_path}")
        return _apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        print(f"Error loading configuration from {config_path}: {e}")
        print("Using default configuration.")
        return _apply_env_overrides(Config())

    return _apply_env_overrides(parse_config(toml_data))


def parse_config(toml_data: dict) -> Config:
    """Build a Config from parsed TOML data, falling back to defaults."""
    config = Config()

    if "library" in toml_data:
        library_data = toml_data["library"]
        config.library = LibraryConfig(
            sort_by=library_data.get("sort_by", config.library.sort_by),
            sort_direction=library_data.get(
                "sort_direction", config.library.sort_direction
            ),
            enabled_sources=[
                str(s)
                for s in library_data.get(
                    "enabled_sources", config.library.enabled_sources
                )
            ],
        )
        # Validate library config
        try:
            config.library.validate()
        except ValueError as e:
            print(f"Warning: Invalid library configuration: {e}")
            print("Using default sort settings.")
            defaults = LibraryConfig()
            config.library.sort_by = defaults.sort_by
            config.library.sort_direction = defaults.sort_direction

    if "view" in toml_data:
        view_data = toml_data["view"]
        config.view = ViewConfig(
            favourites_only=view_data.get(
                "favourites_only", config.view.favourites_only
            ),
            hide_duplicates=view_data.get(
                "hide_duplicates", config.view.hide_duplicates
            ),
        )

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        log_file = logging_data.get("log_file")
        if log_file:
            log_file = str(Path(log_file).expanduser())
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level).upper(),
            log_file=log_file,
            max_file_size_mb=logging_data.get(
                "max_file_size_mb", config.logging.max_file_size_mb
            ),
            backup_count=logging_data.get(
                "backup_count", config.logging.backup_count
            ),
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )

    return config


def _apply_env_overrides(config: Config) -> Config:
    sort_by = os.environ.get("MUSIC_CURATOR_SORT_BY")
    sort_direction = os.environ.get("MUSIC_CURATOR_SORT_DIRECTION")
    log_level = os.environ.get("MUSIC_CURATOR_LOG_LEVEL")

    if sort_by:
        if sort_by.lower() in VALID_SORT_KEYS:
            config.library.sort_by = sort_by.lower()
        else:
            print(f"Warning: Ignoring invalid MUSIC_CURATOR_SORT_BY: {sort_by}")
    if sort_direction:
        if sort_direction.lower() in VALID_SORT_DIRECTIONS:
            config.library.sort_direction = sort_direction.lower()
        else:
            print(
                f"Warning: Ignoring invalid MUSIC_CURATOR_SORT_DIRECTION: {sort_direction}"
            )
    if log_level:
        config.logging.level = log_level.upper()

    return config


def get_log_file_path(config: Config) -> Path:
    """Get the log file path, honouring a custom path from the config."""
    if config.logging.log_file:
        return Path(config.logging.log_file)
    return get_data_dir() / "music-curator.log"
