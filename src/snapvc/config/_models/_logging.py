"""Logging configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, NonNegativeInt

from snapvc.config._models._common import LogFormat, LogLevel


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty uses the default location).
        max_bytes: Rotate the log file at this size; 0 disables rotation.
        backup_count: Number of rotated log files to keep.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""
    max_bytes: NonNegativeInt = 0
    backup_count: NonNegativeInt = 0
