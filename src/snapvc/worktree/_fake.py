# ruff: noqa: TC003  # Path needed at runtime for dataclass fields
"""Fake working tree for testing.

This module provides a FakeWorkTree class that implements WorkTreeProtocol
entirely in memory, with hooks for injecting I/O failures.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from snapvc.exceptions import WorkTreeError
from snapvc.worktree._paths import normalize_relative_path


@dataclass(slots=True)
class FakeWorkTree:
    """In-memory working tree for testing.

    The fake keeps file contents in a dict keyed by relative path. Paths
    listed in the ``*_failures`` sets make the matching operation raise
    WorkTreeError, which lets tests exercise partial-failure handling.

    Example:
        >>> tree = FakeWorkTree()
        >>> tree.set_file("a.txt", "hello")
        >>> tree.read_file("a.txt")
        b'hello'
        >>> tree.read_failures.add("a.txt")
        >>> tree.read_file("a.txt")
        Traceback (most recent call last):
        ...
        snapvc.exceptions.WorkTreeError: Injected read failure: a.txt
    """

    root: Path = field(default_factory=lambda: Path("/fake/worktree"))
    files: dict[str, bytes] = field(default_factory=dict)
    read_failures: set[str] = field(default_factory=set)
    write_failures: set[str] = field(default_factory=set)
    remove_failures: set[str] = field(default_factory=set)
    clones: list[FakeWorkTree] = field(default_factory=list)
    fail_clone: bool = False

    # =========================================================================
    # WorkTreeProtocol Methods
    # =========================================================================

    def list_files(self) -> list[str]:
        """Enumerate files in sorted order."""
        return sorted(self.files)

    def read_file(self, path: str) -> bytes:
        """Read a file's bytes.

        Raises:
            WorkTreeError: If the file is missing or a read failure is injected.
        """
        key = normalize_relative_path(path)
        if key in self.read_failures:
            msg = f"Injected read failure: {key}"
            raise WorkTreeError(msg, path=key, operation="read")
        try:
            return self.files[key]
        except KeyError:
            msg = f"No such file: {key}"
            raise WorkTreeError(msg, path=key, operation="read") from None

    def write_file(self, path: str, data: bytes) -> None:
        """Overwrite or create a file.

        Raises:
            WorkTreeError: If a write failure is injected.
        """
        key = normalize_relative_path(path)
        if key in self.write_failures:
            msg = f"Injected write failure: {key}"
            raise WorkTreeError(msg, path=key, operation="write")
        self.files[key] = bytes(data)

    def remove_file(self, path: str) -> None:
        """Remove a file.

        Raises:
            WorkTreeError: If the file is missing or a remove failure is injected.
        """
        key = normalize_relative_path(path)
        if key in self.remove_failures:
            msg = f"Injected remove failure: {key}"
            raise WorkTreeError(msg, path=key, operation="remove")
        if self.files.pop(key, None) is None:
            msg = f"No such file: {key}"
            raise WorkTreeError(msg, path=key, operation="remove")

    def clone(self, destination: Path | None = None) -> FakeWorkTree:
        """Copy the file dict into a new, independent fake.

        Clones are recorded in ``clones`` so tests can inspect them.

        Raises:
            WorkTreeError: If ``fail_clone`` is set.
        """
        if self.fail_clone:
            msg = f"Injected clone failure: {self.root}"
            raise WorkTreeError(msg, operation="clone")
        if destination is None:
            destination = self.root.with_name(
                f"{self.root.name}-clone-{len(self.clones) + 1}"
            )
        copy = FakeWorkTree(root=destination, files=dict(self.files))
        self.clones.append(copy)
        return copy

    # =========================================================================
    # Test Helper Methods
    # =========================================================================

    def set_file(self, path: str, content: str | bytes) -> None:
        """Set a file's content, bypassing injected failures.

        Args:
            path: Relative path of the file.
            content: Bytes, or text encoded as UTF-8.
        """
        data = content.encode() if isinstance(content, str) else content
        self.files[normalize_relative_path(path)] = data
