"""Default configuration values.

DEFAULT_CONFIG is a plain dict so it can be fed straight into deep_merge,
which never mutates its inputs.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
        "max_bytes": 0,
        "backup_count": 0,
    },
    "repository": {
        "hash_algorithm": "sha1",
        "clone_dir": "",
    },
}
