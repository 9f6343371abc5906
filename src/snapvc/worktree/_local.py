# ruff: noqa: TC003  # Path needed at runtime for method bodies
"""Directory-backed working tree.

This module provides the LocalWorkTree class, the filesystem implementation
of WorkTreeProtocol. Every OSError is translated into WorkTreeError with the
relative path and operation attached.
"""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path, PurePosixPath
from typing import Final, Self

from snapvc.exceptions import WorkTreeError
from snapvc.worktree._paths import escapes_root, normalize_relative_path

_WORKTREE_PREFIX: Final = "snapvc-worktree-"
_CLONE_PREFIX: Final = "snapvc-clone-"


class LocalWorkTree:
    """A working tree rooted at one directory on disk.

    Attributes:
        root: The resolved root directory.
        clone_dir: Parent directory for clones created without an explicit
            destination (system temp directory when None).

    Example:
        >>> tree = LocalWorkTree.create_temporary()
        >>> tree.write_file("notes/todo.txt", b"ship it")
        >>> tree.list_files()
        ['notes/todo.txt']
    """

    __slots__ = ("_clone_dir", "_root")

    def __init__(self, root: Path | str, *, clone_dir: Path | None = None) -> None:
        """Open a working tree at an existing directory.

        Args:
            root: Path to the root directory.
            clone_dir: Parent directory for clones without explicit destination.

        Raises:
            WorkTreeError: If root is not an existing directory.
        """
        resolved = Path(root).resolve()
        if not resolved.is_dir():
            msg = f"Working tree root is not a directory: {resolved}"
            raise WorkTreeError(msg, operation="open")
        self._root: Path = resolved
        self._clone_dir: Path | None = clone_dir

    @classmethod
    def create_temporary(
        cls,
        base_dir: Path | None = None,
        *,
        prefix: str = _WORKTREE_PREFIX,
        clone_dir: Path | None = None,
    ) -> Self:
        """Create an empty working tree in a fresh temporary directory.

        Args:
            base_dir: Parent directory (created if missing). Uses the system
                temp directory when None.
            prefix: Name prefix for the new directory.
            clone_dir: Parent directory for clones of the new tree.

        Returns:
            A LocalWorkTree rooted at the new, empty directory.

        Raises:
            WorkTreeError: If the directory cannot be created.
        """
        try:
            if base_dir is not None:
                base_dir.mkdir(parents=True, exist_ok=True)
            path = tempfile.mkdtemp(prefix=prefix, dir=base_dir)
        except OSError as e:
            msg = f"Failed to create temporary working tree: {e}"
            raise WorkTreeError(msg, operation="create") from e
        return cls(path, clone_dir=clone_dir)

    @property
    def root(self) -> Path:
        """Root directory of the working tree."""
        return self._root

    @property
    def clone_dir(self) -> Path | None:
        """Parent directory for clones without an explicit destination."""
        return self._clone_dir

    def __repr__(self) -> str:
        return f"LocalWorkTree({str(self._root)!r})"

    # =========================================================================
    # WorkTreeProtocol Methods
    # =========================================================================

    def list_files(self) -> list[str]:
        """Enumerate files under the root in sorted walk order.

        Returns:
            Relative POSIX paths of every regular file.

        Raises:
            WorkTreeError: If the directory walk fails.
        """
        return self._walk(self._root, operation="list")

    def read_file(self, path: str) -> bytes:
        """Read a file's bytes.

        Raises:
            WorkTreeError: If the file is absent or unreadable.
        """
        target = self._resolve(path, operation="read")
        try:
            return target.read_bytes()
        except OSError as e:
            msg = f"Failed to read {path}: {e}"
            raise WorkTreeError(msg, path=path, operation="read") from e

    def write_file(self, path: str, data: bytes) -> None:
        """Overwrite or create a file, creating parent directories.

        A symlink at path is replaced by a regular file, never written through.

        Raises:
            WorkTreeError: On I/O failure.
        """
        target = self._resolve(path, operation="write")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            if target.is_symlink():
                target.unlink()
            target.write_bytes(data)
        except OSError as e:
            msg = f"Failed to write {path}: {e}"
            raise WorkTreeError(msg, path=path, operation="write") from e

    def remove_file(self, path: str) -> None:
        """Remove a file. Directories are never removed.

        A symlink is removed itself; its target is left alone.

        Raises:
            WorkTreeError: If the file is absent or cannot be removed.
        """
        target = self._resolve(path, operation="remove")
        try:
            target.unlink()
        except OSError as e:
            msg = f"Failed to remove {path}: {e}"
            raise WorkTreeError(msg, path=path, operation="remove") from e

    def clone(self, destination: Path | None = None) -> LocalWorkTree:
        """Deep-copy the tree to a new location.

        Args:
            destination: Target directory (created if missing). When None, a
                fresh temporary directory under ``clone_dir`` is used.

        Returns:
            A LocalWorkTree rooted at the copy, sharing this tree's clone_dir.

        Raises:
            WorkTreeError: If the destination lies inside the tree or the
                copy fails.
        """
        parent = destination if destination is not None else self._clone_dir
        if parent is not None and parent.resolve().is_relative_to(self._root):
            msg = f"Cannot clone working tree {self._root} into itself: {parent}"
            raise WorkTreeError(msg, operation="clone")
        try:
            if destination is None:
                if self._clone_dir is not None:
                    self._clone_dir.mkdir(parents=True, exist_ok=True)
                destination = Path(
                    tempfile.mkdtemp(prefix=_CLONE_PREFIX, dir=self._clone_dir)
                )
            _ = shutil.copytree(
                self._root, destination, symlinks=True, dirs_exist_ok=True
            )
        except OSError as e:
            msg = f"Failed to clone working tree {self._root}: {e}"
            raise WorkTreeError(msg, operation="clone") from e
        return LocalWorkTree(destination, clone_dir=self._clone_dir)

    # =========================================================================
    # Convenience Methods
    # =========================================================================

    def create_file(self, path: str) -> None:
        """Create an empty file, truncating any existing content.

        The parent directory must already exist.

        Raises:
            WorkTreeError: On I/O failure.
        """
        target = self._resolve(path, operation="create")
        try:
            with target.open("wb"):
                pass
        except OSError as e:
            msg = f"Failed to create {path}: {e}"
            raise WorkTreeError(msg, path=path, operation="create") from e

    def create_dir(self, path: str) -> None:
        """Create a single directory.

        Raises:
            WorkTreeError: If it already exists or the parent is missing.
        """
        target = self._resolve(path, operation="mkdir")
        try:
            target.mkdir()
        except OSError as e:
            msg = f"Failed to create directory {path}: {e}"
            raise WorkTreeError(msg, path=path, operation="mkdir") from e

    def append_file(self, path: str, data: bytes | str) -> None:
        """Append to an existing file.

        Args:
            path: Relative path of an existing file.
            data: Bytes, or text encoded as UTF-8.

        Raises:
            WorkTreeError: If the file does not exist or cannot be written.
        """
        target = self._resolve(path, operation="append")
        if not target.is_file():
            msg = f"Cannot append to missing file: {path}"
            raise WorkTreeError(msg, path=path, operation="append")
        payload = data.encode() if isinstance(data, str) else data
        try:
            with target.open("ab") as f:
                _ = f.write(payload)
        except OSError as e:
            msg = f"Failed to append to {path}: {e}"
            raise WorkTreeError(msg, path=path, operation="append") from e

    def cat_file(self, path: str) -> str:
        """Read a file as UTF-8 text.

        Raises:
            WorkTreeError: If the file is absent, unreadable or not UTF-8.
        """
        data = self.read_file(path)
        try:
            return data.decode()
        except UnicodeDecodeError as e:
            msg = f"File is not valid UTF-8: {path}"
            raise WorkTreeError(msg, path=path, operation="read") from e

    def list_files_in(self, directory: str) -> list[str]:
        """Enumerate files under a subdirectory.

        Args:
            directory: Relative path of the subdirectory.

        Returns:
            Paths relative to the tree root (not to ``directory``).

        Raises:
            WorkTreeError: If the directory does not exist.
        """
        target = self._resolve(directory, operation="list", allow_root=True)
        if not target.is_dir():
            msg = f"Not a directory: {directory}"
            raise WorkTreeError(msg, path=directory, operation="list")
        return self._walk(target, operation="list")

    # =========================================================================
    # Private Helpers
    # =========================================================================

    def _walk(self, start: Path, *, operation: str) -> list[str]:
        try:
            files = [
                candidate.relative_to(self._root).as_posix()
                for candidate in start.rglob("*")
                if candidate.is_file()
            ]
        except OSError as e:
            msg = f"Failed to walk {start}: {e}"
            raise WorkTreeError(msg, operation=operation) from e
        return sorted(files)

    def _resolve(self, path: str, *, operation: str, allow_root: bool = False) -> Path:
        relative = normalize_relative_path(path)
        if not relative and not allow_root:
            msg = "Empty path does not name a file"
            raise WorkTreeError(msg, path=path, operation=operation)
        if not relative:
            return self._root
        # Only the parent is resolved so a symlink names itself, not its target
        parent = (self._root / relative).parent.resolve()
        if escapes_root(relative) or not parent.is_relative_to(self._root):
            msg = f"Path escapes working tree root: {path}"
            raise WorkTreeError(msg, path=path, operation=operation)
        return parent / PurePosixPath(relative).name
