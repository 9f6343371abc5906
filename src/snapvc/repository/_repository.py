# ruff: noqa: TC003  # Path needed at runtime for method bodies
"""Repository state machine.

This module provides the Repository class, which owns staging, hash-based
change detection, the commit log, reference resolution and checkout for one
working tree. All storage access goes through WorkTreeProtocol.
"""

from __future__ import annotations

import threading
from pathlib import Path, PurePath
from typing import TYPE_CHECKING, Self

from snapvc.config import Config, RepositoryConfig
from snapvc.exceptions import RepositoryInitError, RevertError, WorkTreeError
from snapvc.repository._models import (
    Commit,
    CommitResult,
    PathFailure,
    RepositoryState,
    StageResult,
    StatusResult,
)
from snapvc.repository._refs import check_commit_index, resolve_commit_ref
from snapvc.utils import create_repository_logger, hash_bytes
from snapvc.worktree import LocalWorkTree, escapes_root, normalize_relative_path

if TYPE_CHECKING:
    from collections.abc import Iterable

    from structlog.typing import FilteringBoundLogger

    from snapvc.worktree import WorkTreeProtocol


class Repository:
    """Version-control state for a single working tree.

    On construction the whole tree is walked once: every file's hash is
    cached and its staged flag set to False. State lives in memory only
    and is tied to the lifetime of this object.

    Public operations hold an internal re-entrant lock, so one repository
    may be shared between threads of a process.

    Attributes:
        worktree: The working tree this repository tracks.
        state: Staged/modified flags, hash cache and commit log.

    Example:
        >>> repo = Repository(LocalWorkTree("/path/to/project"))
        >>> _ = repo.stage(["a.txt"])
        >>> result = repo.commit("Add a.txt")
        >>> clone = repo.checkout("~0")
    """

    __slots__ = ("_hash_algorithm", "_lock", "_logger", "_state", "_worktree")

    def __init__(
        self,
        worktree: WorkTreeProtocol,
        *,
        config: RepositoryConfig | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the repository from the current tree contents.

        Args:
            worktree: Working tree to track.
            config: Repository settings. Uses defaults when None.
            logger: Structured logger. Uses the repository log file when None.

        Raises:
            RepositoryInitError: If any file cannot be enumerated or read.
        """
        if config is None:
            config = RepositoryConfig()
        self._worktree: WorkTreeProtocol = worktree
        self._hash_algorithm: str = config.hash_algorithm
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else create_repository_logger()
        )
        self._lock: threading.RLock = threading.RLock()
        self._state: RepositoryState = RepositoryState()
        self._scan()

    @classmethod
    def from_path(
        cls,
        root: Path | str,
        *,
        config: Config | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> Self:
        """Open a repository over a directory on disk.

        Args:
            root: Working tree root directory.
            config: Full configuration; supplies clone_dir, hash algorithm
                and logging settings. Uses defaults when None.
            logger: Structured logger overriding the configured one.

        Returns:
            A repository tracking a LocalWorkTree at root.

        Raises:
            WorkTreeError: If root is not a directory.
            RepositoryInitError: If any file cannot be read.
        """
        if config is None:
            config = Config.from_dict({})
        worktree = LocalWorkTree(root, clone_dir=config.repository.clone_path)
        if logger is None:
            logger = create_repository_logger(
                config.logging.level.value,
                log_format=config.logging.format.value,  # type: ignore[arg-type]
                log_file=config.logging.file,
                max_bytes=config.logging.max_bytes,
                backup_count=config.logging.backup_count,
            )
        return cls(worktree, config=config.repository, logger=logger)

    @property
    def worktree(self) -> WorkTreeProtocol:
        """The working tree this repository tracks."""
        return self._worktree

    @property
    def state(self) -> RepositoryState:
        """Staged/modified flags, hash cache and commit log."""
        return self._state

    @property
    def commits(self) -> tuple[Commit, ...]:
        """All commits, oldest first."""
        with self._lock:
            return tuple(self._state.commits)

    @property
    def head(self) -> Commit | None:
        """The most recent commit, or None if nothing has been committed."""
        with self._lock:
            return self._state.commits[-1] if self._state.commits else None

    # =========================================================================
    # Staging
    # =========================================================================

    def stage_all(self) -> StageResult:
        """Stage every file currently in the working tree.

        Files deleted since the last walk are left untouched.

        Returns:
            StageResult with staged paths and any unreadable files.

        Raises:
            WorkTreeError: If the tree cannot be enumerated.
        """
        with self._lock:
            return self._stage_paths(self._worktree.list_files())

    def stage(self, paths: Iterable[str | PurePath]) -> StageResult:
        """Stage specific files.

        Each path is rehashed from the working tree. A path that cannot be
        read is not staged and is reported in ``StageResult.failures``.

        Args:
            paths: Paths relative to the working tree root.

        Returns:
            StageResult with staged paths and per-path failures.
        """
        with self._lock:
            normalized = dict.fromkeys(normalize_relative_path(p) for p in paths)
            return self._stage_paths(normalized)

    def _stage_paths(self, paths: Iterable[str]) -> StageResult:
        staged: list[str] = []
        failures: list[PathFailure] = []
        for path in paths:
            if not path:
                failures.append(PathFailure(path=path, reason="empty path"))
                continue
            if escapes_root(path):
                failures.append(
                    PathFailure(path=path, reason="path escapes working tree root")
                )
                self._logger.warning("stage_failed", path=path, reason="escapes root")
                continue
            try:
                digest = self._hash_path(path)
            except WorkTreeError as e:
                failures.append(PathFailure(path=path, reason=str(e)))
                self._logger.warning("stage_failed", path=path, reason=str(e))
                continue
            self._state.mark_staged(path, digest)
            staged.append(path)

        self._logger.info("files_staged", staged=len(staged), failed=len(failures))
        return StageResult(staged=tuple(staged), failures=tuple(failures))

    # =========================================================================
    # Commit
    # =========================================================================

    def commit(self, message: str) -> CommitResult:
        """Record a snapshot of every staged file.

        Content is read at commit time, not stage time. Unreadable files are
        left out of the snapshot and reported in ``CommitResult.skipped``.
        Afterwards every path is unstaged. Committing with nothing staged
        records an empty snapshot.

        Args:
            message: Commit message; empty and duplicate messages are allowed.

        Returns:
            CommitResult with the new commit, its index and skipped paths.
        """
        with self._lock:
            snapshot: dict[str, bytes] = {}
            skipped: list[PathFailure] = []
            for path in self._state.staged_paths():
                try:
                    snapshot[path] = self._worktree.read_file(path)
                except WorkTreeError as e:
                    skipped.append(PathFailure(path=path, reason=str(e)))
                    self._logger.warning(
                        "commit_file_skipped", path=path, reason=str(e)
                    )

            self._state.clear_staged()
            commit = Commit.create(message, snapshot)
            self._state.commits.append(commit)
            index = len(self._state.commits) - 1

            self._logger.info(
                "commit_created",
                index=index,
                message=message,
                files=len(snapshot),
                skipped=len(skipped),
            )
            return CommitResult(commit=commit, index=index, skipped=tuple(skipped))

    # =========================================================================
    # Status and History
    # =========================================================================

    def status(self) -> StatusResult:
        """Compare the working tree against the hash cache.

        A file is modified when its current hash differs from the cached
        one, including files that were never hashed. Staged flags and the
        hash cache are not changed.

        Returns:
            StatusResult with modified and staged paths in walk order.

        Raises:
            WorkTreeError: If the tree cannot be enumerated or a file read.
        """
        with self._lock:
            modified: list[str] = []
            staged: list[str] = []
            for path in self._worktree.list_files():
                changed = self._state.hashes.get(path) != self._hash_path(path)
                self._state.modified[path] = changed
                if changed:
                    modified.append(path)
                if self._state.staged.get(path, False):
                    staged.append(path)

            self._logger.debug(
                "status_computed", modified=len(modified), staged=len(staged)
            )
            return StatusResult(modified=tuple(modified), staged=tuple(staged))

    def log(self) -> list[str]:
        """Commit messages, newest first."""
        with self._lock:
            return [commit.message for commit in reversed(self._state.commits)]

    def resolve(self, ref: str) -> int:
        """Resolve a ``~N`` or ``^...`` reference to a commit index.

        Raises:
            InvalidReferenceError: If the syntax is not recognized.
            ReferenceOutOfRangeError: If no commit exists at that distance.
        """
        with self._lock:
            return resolve_commit_ref(ref, len(self._state.commits))

    def get_commit(self, ref: str) -> Commit:
        """Return the commit a reference points at.

        Raises:
            InvalidReferenceError: If the syntax is not recognized.
            ReferenceOutOfRangeError: If no commit exists at that distance.
        """
        with self._lock:
            return self._state.commits[self.resolve(ref)]

    # =========================================================================
    # Revert and Checkout
    # =========================================================================

    def revert(self, index: int) -> None:
        """Replace the working tree contents with a commit's snapshot.

        Every current file is removed (directories are kept) and every
        snapshot file is written. Uncommitted work is discarded. If removing
        or writing fails, the previous contents are restored on a best-effort
        basis before RevertError is raised. State maps are left unchanged.

        Args:
            index: Commit index, 0 being the oldest.

        Raises:
            ReferenceOutOfRangeError: If index is outside the commit log.
            RevertError: If the tree could not be reverted.
        """
        with self._lock:
            check_commit_index(index, len(self._state.commits))
            commit = self._state.commits[index]
            self._logger.info(
                "revert_started", index=index, files=len(commit.snapshot)
            )

            try:
                backup = {
                    path: self._worktree.read_file(path)
                    for path in self._worktree.list_files()
                }
            except WorkTreeError as e:
                msg = f"Cannot revert to commit {index}: failed to back up tree: {e}"
                raise RevertError(msg, index=index, path=e.path) from e

            try:
                self._clear_tree()
                for path, data in commit.snapshot.items():
                    self._worktree.write_file(path, data)
            except WorkTreeError as e:
                rolled_back = self._restore_tree(backup)
                msg = f"Cannot revert to commit {index}: {e}"
                raise RevertError(
                    msg, index=index, path=e.path, rolled_back=rolled_back
                ) from e

    def checkout(self, ref: str) -> WorkTreeProtocol:
        """Revert to a referenced commit and return a clone of the result.

        The original working tree is left in the reverted state.

        Args:
            ref: ``~N`` or ``^...`` reference.

        Returns:
            An independent working tree at a new location.

        Raises:
            InvalidReferenceError: If the syntax is not recognized.
            ReferenceOutOfRangeError: If no commit exists at that distance.
            RevertError: If the tree could not be reverted.
            WorkTreeError: If the clone fails.
        """
        with self._lock:
            index = self.resolve(ref)
            self.revert(index)
            clone = self._worktree.clone()
            self._logger.info(
                "checkout_completed", ref=ref, index=index, clone=str(clone.root)
            )
            return clone

    # =========================================================================
    # Private Helpers
    # =========================================================================

    def _scan(self) -> None:
        try:
            files = self._worktree.list_files()
            for path in files:
                self._state.track(path, self._hash_path(path))
        except WorkTreeError as e:
            msg = f"Failed to initialize repository at {self._worktree.root}: {e}"
            raise RepositoryInitError(msg, path=e.path) from e

        self._logger.info(
            "repository_initialized", root=str(self._worktree.root), files=len(files)
        )

    def _hash_path(self, path: str) -> str:
        return hash_bytes(self._worktree.read_file(path), self._hash_algorithm)

    def _clear_tree(self) -> None:
        for path in self._worktree.list_files():
            try:
                self._worktree.remove_file(path)
            except WorkTreeError:
                # Already gone is fine; anything else aborts the clear
                if path in self._worktree.list_files():
                    raise
                self._logger.debug("remove_skipped_missing", path=path)

    def _restore_tree(self, backup: dict[str, bytes]) -> bool:
        # Backed-up paths are overwritten, so only extras need removing
        try:
            for path in self._worktree.list_files():
                if path not in backup:
                    self._worktree.remove_file(path)
            for path, data in backup.items():
                self._worktree.write_file(path, data)
        except WorkTreeError as e:
            self._logger.exception("revert_rollback_failed", path=e.path)
            return False
        self._logger.warning("revert_rolled_back", files=len(backup))
        return True
