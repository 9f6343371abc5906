"""snapvc repository models.

This module defines data structures for representing repository state and
the results of repository operations.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class PathFailure:
    """A path an operation could not apply to.

    Attributes:
        path: Relative path of the file.
        reason: Human-readable failure reason.
    """

    path: str
    reason: str


@dataclass(frozen=True, slots=True)
class Commit:
    """An immutable snapshot of staged content.

    Attributes:
        message: Commit message (arbitrary text, may be empty).
        snapshot: Read-only mapping of relative path to file content.
        timestamp: Creation time as UTC datetime.
    """

    message: str
    snapshot: Mapping[str, bytes]
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, message: str, snapshot: Mapping[str, bytes]) -> Commit:
        """Create a commit holding a private, read-only copy of a snapshot.

        Args:
            message: Commit message.
            snapshot: Path to content mapping; copied so later changes to
                the argument do not leak into the commit.

        Returns:
            The new commit.
        """
        return cls(message=message, snapshot=MappingProxyType(dict(snapshot)))

    @property
    def files(self) -> frozenset[str]:
        """Relative paths recorded in the snapshot."""
        return frozenset(self.snapshot)


@dataclass(frozen=True, slots=True)
class StageResult:
    """Result of a staging operation.

    Attributes:
        staged: Paths that were staged, in processing order.
        failures: Paths that could not be hashed and were not staged.
    """

    staged: tuple[str, ...]
    failures: tuple[PathFailure, ...] = ()

    @property
    def ok(self) -> bool:
        """True if every requested path was staged."""
        return not self.failures


@dataclass(frozen=True, slots=True)
class CommitResult:
    """Result of a commit operation.

    A commit is always recorded; unreadable staged files are reported in
    ``skipped`` instead of failing the whole commit.

    Attributes:
        commit: The commit appended to the log.
        index: Position of the commit in the log.
        skipped: Staged paths left out of the snapshot, with reasons.
    """

    commit: Commit
    index: int
    skipped: tuple[PathFailure, ...] = ()

    @property
    def files(self) -> frozenset[str]:
        """Relative paths recorded in the snapshot."""
        return self.commit.files

    @property
    def partial(self) -> bool:
        """True if any staged path was skipped."""
        return bool(self.skipped)


@dataclass(frozen=True, slots=True)
class StatusResult:
    """File status snapshot of the working tree.

    Both sequences follow working tree walk order.

    Attributes:
        modified: Files whose content differs from the last staged hash.
        staged: Files marked for the next commit.
    """

    modified: tuple[str, ...]
    staged: tuple[str, ...]

    @property
    def clean(self) -> bool:
        """True if nothing is modified or staged."""
        return not self.modified and not self.staged


@dataclass(slots=True)
class RepositoryState:
    """Mutable bookkeeping owned by one Repository.

    Attributes:
        staged: Per-path staged flag.
        modified: Per-path modified flag from the last status query.
        hashes: Per-path content hash recorded at the last stage.
        commits: Append-only commit log, oldest first.
    """

    staged: dict[str, bool] = field(default_factory=dict)
    modified: dict[str, bool] = field(default_factory=dict)
    hashes: dict[str, str] = field(default_factory=dict)
    commits: list[Commit] = field(default_factory=list)

    def track(self, path: str, content_hash: str) -> None:
        """Record a newly discovered path as unstaged with its hash."""
        self.hashes[path] = content_hash
        _ = self.staged.setdefault(path, False)

    def mark_staged(self, path: str, content_hash: str) -> None:
        """Mark a path staged and unmodified, refreshing its hash."""
        self.staged[path] = True
        self.modified[path] = False
        self.hashes[path] = content_hash

    def staged_paths(self) -> list[str]:
        """Paths currently marked for the next commit."""
        return [path for path, is_staged in self.staged.items() if is_staged]

    def clear_staged(self) -> None:
        """Reset every staged flag to False."""
        for path in self.staged:
            self.staged[path] = False
