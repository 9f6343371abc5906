"""Logging utilities for snapvc.

Loggers are standalone structlog loggers: they never touch global structlog
configuration. Each log file is owned by one stdlib logger whose single
handler is replaced (and the old one closed) whenever a logger for that file
is created again, so repeated repositories share one open file per path.
"""

import logging
import threading
from logging.handlers import RotatingFileHandler
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, cast

import structlog

from ._paths import get_cli_log_file, get_repository_log_file

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]

_LOGGER_PREFIX = "snapvc.file"

_handlers_lock = threading.Lock()
_file_loggers: dict[str, logging.Logger] = {}


def _get_log_level() -> int:
    """Get the log level from environment variables.

    Checks SNAPVC_DEBUG first (sets DEBUG if present), then SNAPVC_LOG_LEVEL.
    Defaults to INFO if neither is set.
    """
    if getenv("SNAPVC_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(getenv("SNAPVC_LOG_LEVEL", "info").upper(), logging.INFO)


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, SNAPVC_DEBUG overrides to DEBUG level.
    """
    if respect_env and getenv("SNAPVC_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def _file_handler(log_path: Path, max_bytes: int, backup_count: int) -> logging.Handler:
    if max_bytes > 0:
        return RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    return logging.FileHandler(log_path, encoding="utf-8")


def _attach_file(log_path: Path, max_bytes: int, backup_count: int) -> logging.Logger:
    """Return the stdlib logger owning log_path, with a fresh handler."""
    key = str(log_path.resolve())
    with _handlers_lock:
        stdlib_logger = _file_loggers.get(key)
        if stdlib_logger is None:
            stdlib_logger = logging.getLogger(f"{_LOGGER_PREFIX}.{len(_file_loggers)}")
            stdlib_logger.propagate = False
            # structlog filters by level; the stdlib side passes everything
            stdlib_logger.setLevel(logging.DEBUG)
            _file_loggers[key] = stdlib_logger

        for old in list(stdlib_logger.handlers):
            stdlib_logger.removeHandler(old)
            old.close()

        handler = _file_handler(log_path, max_bytes, backup_count)
        # structlog renders the message; the handler only writes it
        handler.setFormatter(logging.Formatter("%(message)s"))
        stdlib_logger.addHandler(handler)
        return stdlib_logger


def close_log_files() -> None:
    """Close every log file opened by snapvc loggers.

    Loggers created earlier stay usable but drop events until a logger for
    the same file is created again.
    """
    with _handlers_lock:
        for stdlib_logger in _file_loggers.values():
            for handler in list(stdlib_logger.handlers):
                stdlib_logger.removeHandler(handler)
                handler.close()
            stdlib_logger.addHandler(logging.NullHandler())


def _create_logger(
    log_file_path: str,
    *,
    log_level: int | None = None,
    log_format: LogFormatType = "json",
    max_bytes: int = 0,
    backup_count: int = 0,
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a standalone structlog logger writing to the specified file.

    Args:
        log_file_path: Path to the log file (opened in append mode).
        log_level: Override log level (uses env vars if not specified).
        log_format: Output format, either "json" or "text".
        max_bytes: Rotate once the file reaches this size; 0 disables rotation.
        backup_count: Number of rotated files to keep.

    Returns:
        A configured FilteringBoundLogger instance.
    """
    log_path = Path(log_file_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    effective_level = log_level if log_level is not None else _get_log_level()

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Text format: "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            _attach_file(log_path, max_bytes, backup_count),
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(effective_level),
            context_class=dict,
        ),
    )


def create_repository_logger(
    level: str | None = None,
    *,
    log_format: LogFormatType = "json",
    log_file: str = "",
    max_bytes: int = 0,
    backup_count: int = 0,
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger for repository operations.

    Writes to ``log_file`` or, when empty, to repository.log in the snapvc
    log directory.

    The log level is determined by (in order of precedence):
    1. SNAPVC_DEBUG environment variable (if set, enables DEBUG level)
    2. The `level` parameter (if provided)
    3. SNAPVC_LOG_LEVEL environment variable
    4. Default: INFO

    Args:
        level: Optional log level string (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to log file (uses the default location if empty).
        max_bytes: Rotation size threshold; 0 disables rotation.
        backup_count: Number of rotated files to keep.
    """
    effective_file = log_file if log_file else str(get_repository_log_file())

    effective_level: int | None = None
    if level is not None:
        effective_level = _log_level_from_string(level, respect_env=True)

    return _create_logger(
        effective_file,
        log_level=effective_level,
        log_format=log_format,
        max_bytes=max_bytes,
        backup_count=backup_count,
    )


def create_cli_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "json",
    log_file: str = "",
    max_bytes: int = 0,
    backup_count: int = 0,
    command: str = "",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger for CLI commands.

    Writes to ``log_file`` or cli.log in the snapvc log directory. The
    command name, when given, is bound to every entry.
    """
    effective_file = log_file if log_file else str(get_cli_log_file())
    effective_level = _log_level_from_string(level, respect_env=True)

    logger = _create_logger(
        effective_file,
        log_level=effective_level,
        log_format=log_format,
        max_bytes=max_bytes,
        backup_count=backup_count,
    )

    if command:
        return logger.bind(command=command)
    return logger
