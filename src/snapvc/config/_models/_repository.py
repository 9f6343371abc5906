"""Repository configuration model."""

from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, field_validator

from snapvc.utils import DEFAULT_HASH_ALGORITHM, is_supported_algorithm


class RepositoryConfig(BaseModel):
    """Repository configuration section.

    Attributes:
        hash_algorithm: hashlib algorithm used for change detection.
        clone_dir: Parent directory for checkout clones (empty uses the
            system temp directory).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    clone_dir: str = ""

    @field_validator("hash_algorithm")
    @classmethod
    def _check_hash_algorithm(cls, value: str) -> str:
        if not is_supported_algorithm(value):
            msg = f"unsupported hash algorithm: {value}"
            raise ValueError(msg)
        return value.lower()

    @property
    def clone_path(self) -> Path | None:
        """Clone directory as a Path, or None when unset."""
        return Path(self.clone_dir).expanduser() if self.clone_dir else None
