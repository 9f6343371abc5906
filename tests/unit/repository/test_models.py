from types import MappingProxyType

import pytest

from snapvc.repository import (
    Commit,
    CommitResult,
    PathFailure,
    RepositoryState,
    StageResult,
    StatusResult,
)


class TestCommit:
    def test_create_copies_snapshot(self) -> None:
        snapshot = {"a.txt": b"a"}

        commit = Commit.create("msg", snapshot)
        snapshot["b.txt"] = b"b"

        assert commit.files == frozenset({"a.txt"})

    def test_snapshot_is_read_only(self) -> None:
        commit = Commit.create("msg", {"a.txt": b"a"})

        assert isinstance(commit.snapshot, MappingProxyType)
        with pytest.raises(TypeError):
            commit.snapshot["a.txt"] = b"changed"  # pyright: ignore[reportIndexIssue]

    def test_timestamp_is_utc(self) -> None:
        commit = Commit.create("msg", {})
        assert commit.timestamp.utcoffset() is not None
        assert commit.timestamp.utcoffset().total_seconds() == 0  # pyright: ignore[reportOptionalMemberAccess]


class TestResults:
    def test_stage_result_ok(self) -> None:
        assert StageResult(staged=("a.txt",)).ok is True
        failed = StageResult(staged=(), failures=(PathFailure("a.txt", "gone"),))
        assert failed.ok is False

    def test_commit_result_partial(self) -> None:
        commit = Commit.create("msg", {"a.txt": b"a"})

        complete = CommitResult(commit=commit, index=0)
        partial = CommitResult(
            commit=commit, index=0, skipped=(PathFailure("b.txt", "gone"),)
        )

        assert complete.partial is False
        assert partial.partial is True
        assert partial.files == frozenset({"a.txt"})

    def test_status_result_clean(self) -> None:
        assert StatusResult(modified=(), staged=()).clean is True
        assert StatusResult(modified=("a.txt",), staged=()).clean is False
        assert StatusResult(modified=(), staged=("a.txt",)).clean is False


class TestRepositoryState:
    def test_track_keeps_existing_staged_flag(self) -> None:
        state = RepositoryState()
        state.mark_staged("a.txt", "h1")

        state.track("a.txt", "h2")

        assert state.staged["a.txt"] is True
        assert state.hashes["a.txt"] == "h2"

    def test_mark_staged_clears_modified(self) -> None:
        state = RepositoryState(modified={"a.txt": True})

        state.mark_staged("a.txt", "h1")

        assert state.modified["a.txt"] is False
        assert state.staged_paths() == ["a.txt"]

    def test_clear_staged_keeps_keys(self) -> None:
        state = RepositoryState()
        state.mark_staged("a.txt", "h1")
        state.mark_staged("b.txt", "h2")

        state.clear_staged()

        assert state.staged == {"a.txt": False, "b.txt": False}
        assert state.staged_paths() == []
