"""Well-known snapvc locations."""

from os import getenv
from pathlib import Path

import platformdirs


def get_log_dir() -> Path:
    """Get the directory snapvc log files are written to.

    Uses SNAPVC_LOG_DIR when set, otherwise the platform user log directory.
    """
    override = getenv("SNAPVC_LOG_DIR")
    if override:
        return Path(override)
    return platformdirs.user_log_path("snapvc")


def get_repository_log_file() -> Path:
    """Get the path to the repository log file."""
    return get_log_dir() / "repository.log"


def get_cli_log_file() -> Path:
    """Get the path to the CLI log file."""
    return get_log_dir() / "cli.log"


def get_user_config_path() -> Path:
    """Get the path to the user-level config file."""
    return platformdirs.user_config_path("snapvc") / "config.toml"
