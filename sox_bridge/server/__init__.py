"""Server package - configuration and utilities for the MCP server."""

from .config import (
    VERSION,
    CONFIG_DIR,
    CONFIG_FILE,
    DEFAULT_BIN_DIR,
    _load_config,
    _save_config,
    get_bin_dir,
    get_log_level,
    get_timeout,
    to_dict,
)

__all__ = [
    "VERSION",
    "CONFIG_DIR",
    "CONFIG_FILE",
    "DEFAULT_BIN_DIR",
    "_load_config",
    "_save_config",
    "get_bin_dir",
    "get_log_level",
    "get_timeout",
    "to_dict",
]
