"""snapvc repository state machine.

This package tracks one working tree: staging, hash-based change detection,
an in-memory commit log, reference resolution and checkout.

Classes:
    Repository: The state machine over a WorkTreeProtocol.
    RepositoryState: Staged/modified flags, hash cache and commit log.

Models:
    Commit: Immutable message plus file snapshot.
    CommitResult: Result of commit, including skipped paths.
    StageResult: Result of staging, including per-path failures.
    StatusResult: Modified and staged paths.
    PathFailure: A path an operation could not apply to.

Example:
    >>> from snapvc.repository import Repository
    >>> repo = Repository.from_path("/path/to/project")
    >>> _ = repo.stage_all()
    >>> _ = repo.commit("Initial snapshot")
    >>> repo.log()
    ['Initial snapshot']
"""

from snapvc.repository._models import (
    Commit,
    CommitResult,
    PathFailure,
    RepositoryState,
    StageResult,
    StatusResult,
)
from snapvc.repository._refs import (
    check_commit_index,
    parse_commit_ref,
    resolve_commit_ref,
)
from snapvc.repository._repository import Repository

__all__ = [
    "Commit",
    "CommitResult",
    "PathFailure",
    "Repository",
    "RepositoryState",
    "StageResult",
    "StatusResult",
    "check_commit_index",
    "parse_commit_ref",
    "resolve_commit_ref",
]
