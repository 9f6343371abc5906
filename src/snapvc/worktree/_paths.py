"""Relative path normalization shared by working tree implementations."""

import posixpath
from pathlib import PurePath


def normalize_relative_path(path: str | PurePath) -> str:
    """Convert a path to the POSIX relative form used as a tracking key.

    Backslashes become forward slashes, empty and ``.`` components are
    dropped and ``..`` is collapsed lexically, so ``"./docs\\\\a.txt"``,
    ``"docs/tmp/../a.txt"`` and ``"docs/a.txt"`` name the same file. A path
    that climbs above the root keeps its leading ``..``; see
    ``escapes_root``.

    Args:
        path: A relative path as a string or PurePath.

    Returns:
        The normalized relative path (empty string for the root itself).

    Example:
        >>> normalize_relative_path("./src//main.py")
        'src/main.py'
        >>> normalize_relative_path("src/../README")
        'README'
    """
    text = path.as_posix() if isinstance(path, PurePath) else path.replace("\\", "/")
    text = text.lstrip("/")
    if not text:
        return ""
    normalized = posixpath.normpath(text)
    return "" if normalized == "." else normalized


def escapes_root(path: str) -> bool:
    """Return True if a normalized relative path points above the root."""
    return path == ".." or path.startswith("../")
