"""Server configuration utilities."""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional

# Server version
VERSION = "0.1.0"

# Configuration paths
CONFIG_DIR = Path.home() / ".config" / "sox-bridge"
CONFIG_FILE = CONFIG_DIR / "config.json"
DEFAULT_BIN_DIR = Path.home() / ".local" / "share" / "sox-bridge" / "bin"


def _load_config() -> dict:
    """Load configuration from file."""
    if CONFIG_FILE.exists():
        try:
            return json.loads(CONFIG_FILE.read_text())
        except (json.JSONDecodeError, IOError):
            pass
    return {}


def _save_config(config: dict) -> None:
    """Save configuration to file."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(config, indent=2))


def get_bin_dir() -> Path:
    """Get the directory the sox binary is installed in."""
    config = _load_config()
    return Path(config.get("bin_directory", str(DEFAULT_BIN_DIR))).expanduser()


def get_timeout() -> Optional[float]:
    """Get the per-invocation timeout in seconds, or None for no limit."""
    value = _load_config().get("timeout_seconds")
    if value is None:
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        return None
    return timeout if timeout > 0 else None


def get_log_level() -> Optional[str]:
    """Get the configured log level name, if any."""
    return _load_config().get("log_level")


def to_dict(obj) -> dict:
    """Convert dataclass to dict, handling nested objects."""
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    elif isinstance(obj, dict):
        return obj
    else:
        return {"value": obj}
