"""snapvc exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class SnapvcError(Exception):
    """Base exception for snapvc errors."""


# =============================================================================
# Working Tree Exceptions
# =============================================================================


class WorkTreeError(SnapvcError):
    """Raised when a working tree operation fails.

    Attributes:
        path: Relative path the operation was applied to, if any.
        operation: Name of the failed operation (read, write, remove, ...).
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        operation: str | None = None,
    ) -> None:
        """Initialize with error message and operation context.

        Args:
            message: Human-readable error message.
            path: Relative path the operation was applied to.
            operation: Name of the failed operation.
        """
        super().__init__(message)
        self.path: str | None = path
        self.operation: str | None = operation


# =============================================================================
# Repository Exceptions
# =============================================================================


class RepositoryError(SnapvcError):
    """Base exception for repository errors."""


class RepositoryInitError(RepositoryError):
    """Raised when the initial working tree walk fails.

    Attributes:
        path: The relative path that could not be read.
    """

    def __init__(self, message: str, *, path: str | None = None) -> None:
        """Initialize with error message and path context.

        Args:
            message: Human-readable error message.
            path: The relative path that could not be read.
        """
        super().__init__(message)
        self.path: str | None = path


class RevertError(RepositoryError):
    """Raised when the working tree cannot be reverted to a commit.

    Attributes:
        index: Index of the target commit.
        path: Relative path that failed, if known.
        rolled_back: True if the previous tree contents were restored.
    """

    def __init__(
        self,
        message: str,
        *,
        index: int,
        path: str | None = None,
        rolled_back: bool = False,
    ) -> None:
        """Initialize with error message and revert context.

        Args:
            message: Human-readable error message.
            index: Index of the target commit.
            path: Relative path that failed, if known.
            rolled_back: Whether the previous tree contents were restored.
        """
        super().__init__(message)
        self.index: int = index
        self.path: str | None = path
        self.rolled_back: bool = rolled_back


class CommitReferenceError(RepositoryError, ValueError):
    """Base exception for commit reference errors.

    Attributes:
        ref: The reference string that failed to resolve.
    """

    def __init__(self, message: str, *, ref: str | None = None) -> None:
        """Initialize with error message and reference context.

        Args:
            message: Human-readable error message.
            ref: The reference string that failed to resolve.
        """
        super().__init__(message)
        self.ref: str | None = ref


class InvalidReferenceError(CommitReferenceError):
    """Raised when a reference matches neither ``~N`` nor ``^...``."""


class ReferenceOutOfRangeError(CommitReferenceError):
    """Raised when a reference resolves outside the commit log.

    Attributes:
        index: The resolved (invalid) commit index.
        commit_count: Number of commits in the log at resolution time.
    """

    def __init__(
        self,
        message: str,
        *,
        ref: str | None = None,
        index: int,
        commit_count: int,
    ) -> None:
        """Initialize with error message and range context.

        Args:
            message: Human-readable error message.
            ref: The reference string, or None for a raw index.
            index: The resolved commit index.
            commit_count: Number of commits in the log.
        """
        super().__init__(message, ref=ref)
        self.index: int = index
        self.commit_count: int = commit_count


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(SnapvcError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
