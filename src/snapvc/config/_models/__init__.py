"""Configuration models."""

from snapvc.config._models._common import (
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LogLevel,
)
from snapvc.config._models._config import Config
from snapvc.config._models._logging import LoggingConfig
from snapvc.config._models._repository import RepositoryConfig

__all__ = [
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "RepositoryConfig",
]
