"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging and user output (Loguru)
- Console management (Rich)
"""

# Configuration
from .config import (
    Config,
    LibraryConfig,
    LoggingConfig,
    ViewConfig,
    load_config,
    parse_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    get_log_file_path,
    create_default_config,
)

# Output
from .output import log, setup_loguru

# Console
from .console import get_console, print_error, safe_print

__all__ = [
    # Config
    "Config",
    "LibraryConfig",
    "LoggingConfig",
    "ViewConfig",
    "load_config",
    "parse_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "get_log_file_path",
    "create_default_config",
    # Output
    "log",
    "setup_loguru",
    # Console
    "get_console",
    "safe_print",
    "print_error",
]
