"""snapvc: a minimal local version-control engine."""

from snapvc.repository import Repository
from snapvc.worktree import LocalWorkTree

__version__ = "0.1.0"

__all__ = ["LocalWorkTree", "Repository", "__version__"]
