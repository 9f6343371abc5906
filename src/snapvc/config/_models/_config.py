# pyright: reportExplicitAny=false, reportAny=false
"""Configuration container with typed access.

This module provides the main Config class that serves as the primary
interface for accessing snapvc configuration values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from snapvc.config._defaults import DEFAULT_CONFIG
from snapvc.config._loader import (
    deep_merge,
    parse_env_vars,
    read_toml_file,
    set_nested_key,
)
from snapvc.config._models._common import ConfigSource, ConfigSourceName
from snapvc.config._models._logging import LoggingConfig
from snapvc.config._models._repository import RepositoryConfig
from snapvc.exceptions import ConfigLoadError, ConfigValidationError
from snapvc.utils import get_user_config_path

if TYPE_CHECKING:
    from pathlib import Path


class Config(BaseModel):
    """Configuration container with typed access.

    Use the factory methods rather than the constructor so that defaults
    are merged and validation errors are translated.

    Example:
        >>> config = Config.from_dict({"repository": {"hash_algorithm": "sha256"}})
        >>> config.repository.hash_algorithm
        'sha256'
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    repository: RepositoryConfig = Field(default_factory=RepositoryConfig)

    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())

    @property
    def sources(self) -> tuple[ConfigSource, ...]:
        """Sources that contributed to this configuration, lowest first."""
        return self._sources

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        *,
        sources: tuple[ConfigSource, ...] = (),
    ) -> Self:
        """Create configuration from a dictionary merged over the defaults.

        Args:
            data: Dictionary of configuration values.
            sources: Sources recorded on the resulting configuration.

        Returns:
            Validated configuration object.

        Raises:
            ConfigValidationError: If a value fails validation.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        try:
            config = cls.model_validate(merged)
        except ValidationError as e:
            error = e.errors()[0]
            key = ".".join(str(part) for part in error["loc"])
            msg = f"Invalid configuration value for {key}: {error['msg']}"
            raise ConfigValidationError(
                msg,
                key=key,
                value=error.get("input"),
                expected=error["msg"],
            ) from e
        config._sources = sources
        return config

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Create configuration from a single TOML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If a value fails validation.
        """
        values = read_toml_file(path)
        source = ConfigSource(name=ConfigSourceName.FILE, path=path, values=values)
        return cls.from_dict(values, sources=(source,))

    @classmethod
    def load(
        cls,
        *,
        config_path: Path | None = None,
        include_user: bool = True,
        include_env: bool = True,
        cli_overrides: dict[str, object] | None = None,
    ) -> Self:
        """Load configuration from all sources in precedence order.

        Sources, lowest precedence first: defaults, user config file,
        explicit config file, SNAPVC_ environment variables, CLI overrides.

        Args:
            config_path: Explicit config file; must exist when given.
            include_user: Whether to read the user-level config file.
            include_env: Whether to read SNAPVC_ environment variables.
            cli_overrides: Dotted-key overrides (e.g. {"logging.level": "debug"}).

        Returns:
            Validated configuration object.

        Raises:
            ConfigLoadError: If a file is missing or cannot be parsed.
            ConfigValidationError: If a value fails validation.
        """
        sources: list[ConfigSource] = [
            ConfigSource(name=ConfigSourceName.DEFAULT, path=None, values=DEFAULT_CONFIG)
        ]

        if include_user:
            user_path = get_user_config_path()
            if user_path.is_file():
                sources.append(
                    ConfigSource(
                        name=ConfigSourceName.USER,
                        path=user_path,
                        values=read_toml_file(user_path),
                    )
                )

        if config_path is not None:
            if not config_path.is_file():
                msg = f"Config file not found: {config_path}"
                raise ConfigLoadError(msg, path=config_path)
            sources.append(
                ConfigSource(
                    name=ConfigSourceName.FILE,
                    path=config_path,
                    values=read_toml_file(config_path),
                )
            )

        if include_env:
            env_values = parse_env_vars()
            if env_values:
                sources.append(
                    ConfigSource(name=ConfigSourceName.ENV, path=None, values=env_values)
                )

        if cli_overrides:
            cli_values: dict[str, Any] = {}
            for key, value in cli_overrides.items():
                set_nested_key(cli_values, key, value)
            sources.append(
                ConfigSource(name=ConfigSourceName.CLI, path=None, values=cli_values)
            )

        merged: dict[str, Any] = {}
        for source in sources:
            merged = deep_merge(merged, source.values)
        return cls.from_dict(merged, sources=tuple(sources))

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as plain JSON-compatible data."""
        return self.model_dump(mode="json")
