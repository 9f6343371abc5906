"""Working tree providers.

This package provides the storage collaborator used by the repository
state machine. The repository depends only on WorkTreeProtocol.

Classes:
    WorkTreeProtocol: Runtime-checkable protocol for dependency injection.
    LocalWorkTree: Working tree rooted at a directory on disk.
    FakeWorkTree: In-memory working tree for tests.

Example:
    >>> from snapvc.worktree import LocalWorkTree
    >>> tree = LocalWorkTree.create_temporary()
    >>> tree.write_file("a.txt", b"hello")
    >>> copy = tree.clone()
    >>> copy.read_file("a.txt")
    b'hello'
"""

from snapvc.worktree._fake import FakeWorkTree
from snapvc.worktree._local import LocalWorkTree
from snapvc.worktree._paths import escapes_root, normalize_relative_path
from snapvc.worktree._protocol import WorkTreeProtocol

__all__ = [
    "FakeWorkTree",
    "LocalWorkTree",
    "WorkTreeProtocol",
    "escapes_root",
    "normalize_relative_path",
]
