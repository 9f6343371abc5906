# ruff: noqa: TC003  # Path needed at runtime for Protocol method bodies
"""Working tree protocol for type-safe dependency injection.

This module defines a runtime-checkable Protocol that both LocalWorkTree
and FakeWorkTree satisfy. The repository state machine depends only on
this interface and never touches storage directly.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class WorkTreeProtocol(Protocol):
    """Protocol for the storage collaborator of a repository.

    All paths are POSIX-style strings relative to ``root``.

    Example:
        >>> def snapshot(tree: WorkTreeProtocol) -> dict[str, bytes]:
        ...     return {path: tree.read_file(path) for path in tree.list_files()}
    """

    @property
    def root(self) -> Path:
        """Root directory of the working tree."""
        ...

    def list_files(self) -> list[str]:
        """Enumerate files under the root.

        Returns:
            Relative paths of every file (no directories) in walk order.
        """
        ...

    def read_file(self, path: str) -> bytes:
        """Read a file's content.

        Args:
            path: Relative path of the file.

        Returns:
            The complete file content.

        Raises:
            WorkTreeError: If the file is absent or unreadable.
        """
        ...

    def write_file(self, path: str, data: bytes) -> None:
        """Overwrite or create a file, creating parent directories.

        Args:
            path: Relative path of the file.
            data: New file content.

        Raises:
            WorkTreeError: On I/O failure.
        """
        ...

    def remove_file(self, path: str) -> None:
        """Remove a file.

        Args:
            path: Relative path of the file.

        Raises:
            WorkTreeError: If the file is absent or cannot be removed.
        """
        ...

    def clone(self, destination: Path | None = None) -> WorkTreeProtocol:
        """Copy the whole tree to a new, independent location.

        Args:
            destination: Target directory. If None, a fresh location is chosen.

        Returns:
            A working tree rooted at the copy.

        Raises:
            WorkTreeError: On I/O failure.
        """
        ...
