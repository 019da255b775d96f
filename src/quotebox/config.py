"""
Configuration management for Quotebox.

Uses XDG base directories:
- Config: ~/.config/quotebox/config.toml
- Data: ~/quotebox/ (the durable store)
- Session: $XDG_RUNTIME_DIR/quotebox/ (cleared on logout)
"""

from pathlib import Path
from typing import Any
import os
import tempfile

# XDG defaults
DEFAULT_CONFIG_HOME = Path.home() / ".config"
DEFAULT_DATA_HOME = Path.home() / "quotebox"

DEFAULT_REMOTE_URL = "https://jsonplaceholder.typicode.com/posts"
DEFAULT_SYNC_INTERVAL_S = 60


def get_config_dir() -> Path:
    """Get the config directory (XDG_CONFIG_HOME/quotebox)."""
    base = Path(os.environ.get("XDG_CONFIG_HOME", DEFAULT_CONFIG_HOME))
    return base / "quotebox"


def get_quotebox_home() -> Path:
    """Get the quotebox data directory (~/quotebox or QUOTEBOX_HOME)."""
    if env_home := os.environ.get("QUOTEBOX_HOME"):
        return Path(env_home)
    return DEFAULT_DATA_HOME


def get_session_dir() -> Path:
    """Get the per-login session directory (XDG_RUNTIME_DIR/quotebox)."""
    base = os.environ.get("XDG_RUNTIME_DIR") or tempfile.gettempdir()
    return Path(base) / "quotebox"


def get_config_path() -> Path:
    """Get the path to config.toml."""
    return get_config_dir() / "config.toml"


def get_db_path() -> Path:
    """Get the path to quotebox.db."""
    return get_quotebox_home() / "quotebox.db"


def get_session_path() -> Path:
    """Get the path to session.json."""
    return get_session_dir() / "session.json"


def ensure_dirs() -> None:
    """Ensure all required directories exist."""
    get_config_dir().mkdir(parents=True, exist_ok=True)
    get_quotebox_home().mkdir(parents=True, exist_ok=True)


def load_config() -> dict[str, Any]:
    """
    Load configuration from config.toml.

    Returns default config if file doesn't exist. Sections present in the
    file override the matching default section key by key.
    """
    config = get_default_config()
    config_path = get_config_path()

    if not config_path.exists():
        return config

    # Lazy import tomli only when needed
    import tomli

    with open(config_path, "rb") as f:
        user_config = tomli.load(f)

    for section, values in user_config.items():
        if isinstance(values, dict):
            config.setdefault(section, {}).update(values)
        else:
            config[section] = values
    return config


def get_default_config() -> dict[str, Any]:
    """Return default configuration."""
    return {
        "quotebox": {
            "home": str(get_quotebox_home()),
        },
        "remote": {
            "url": DEFAULT_REMOTE_URL,
            "timeout": 10.0,
        },
        "sync": {
            "enabled": True,
            "interval_s": DEFAULT_SYNC_INTERVAL_S,
        },
    }
