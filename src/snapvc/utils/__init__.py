"""Shared utilities for snapvc."""

from ._hashing import DEFAULT_HASH_ALGORITHM, hash_bytes, is_supported_algorithm
from ._logging import (
    LogFormatType,
    close_log_files,
    create_cli_logger,
    create_repository_logger,
)
from ._paths import (
    get_cli_log_file,
    get_log_dir,
    get_repository_log_file,
    get_user_config_path,
)

__all__ = [
    "DEFAULT_HASH_ALGORITHM",
    "LogFormatType",
    "close_log_files",
    "create_cli_logger",
    "create_repository_logger",
    "get_cli_log_file",
    "get_log_dir",
    "get_repository_log_file",
    "get_user_config_path",
    "hash_bytes",
    "is_supported_algorithm",
]
