"""Commit reference parsing.

Two spellings select a commit relative to HEAD:

- ``~N``: N commits before HEAD (``~0`` is HEAD).
- ``^`` repeated K times: the K-th parent of HEAD.

History is linear, so ``^`` chained K times and ``~K`` name the same commit.
They are kept as alias spellings of one "N commits back" operation.
"""

import re
from typing import Final

from snapvc.exceptions import InvalidReferenceError, ReferenceOutOfRangeError

_TILDE_PATTERN: Final = re.compile(r"~([0-9]+)")
_CARET_PATTERN: Final = re.compile(r"\^+")


def parse_commit_ref(ref: str) -> int:
    """Parse a reference into a distance back from HEAD.

    Args:
        ref: ``~N`` or a non-empty run of ``^``.

    Returns:
        Number of commits before HEAD.

    Raises:
        InvalidReferenceError: If the reference matches neither form.

    Example:
        >>> parse_commit_ref("~2")
        2
        >>> parse_commit_ref("^^^")
        3
    """
    if match := _TILDE_PATTERN.fullmatch(ref):
        return int(match.group(1))
    if _CARET_PATTERN.fullmatch(ref):
        return len(ref)
    msg = f"Invalid commit reference: {ref!r} (expected '~N' or '^...')"
    raise InvalidReferenceError(msg, ref=ref)


def resolve_commit_ref(ref: str, commit_count: int) -> int:
    """Resolve a reference to an index into the commit log.

    Args:
        ref: ``~N`` or a non-empty run of ``^``.
        commit_count: Number of commits in the log.

    Returns:
        Index of the referenced commit (0 is the oldest).

    Raises:
        InvalidReferenceError: If the reference matches neither form.
        ReferenceOutOfRangeError: If the index falls outside the log.
    """
    index = commit_count - 1 - parse_commit_ref(ref)
    check_commit_index(index, commit_count, ref=ref)
    return index


def check_commit_index(index: int, commit_count: int, *, ref: str | None = None) -> None:
    """Ensure an index addresses an existing commit.

    Raises:
        ReferenceOutOfRangeError: If index is outside ``[0, commit_count - 1]``.
    """
    if 0 <= index < commit_count:
        return
    target = repr(ref) if ref is not None else f"index {index}"
    msg = f"Commit reference out of range: {target} ({commit_count} commit(s) in log)"
    raise ReferenceOutOfRangeError(
        msg, ref=ref, index=index, commit_count=commit_count
    )
