"""Consumer tests for FakeWorkTree."""

from pathlib import Path

import pytest

from snapvc.exceptions import WorkTreeError
from snapvc.worktree import FakeWorkTree, WorkTreeProtocol

# =============================================================================
# Protocol Conformance Tests
# =============================================================================


class TestFakeWorkTreeProtocolConformance:
    def test_isinstance_worktree_protocol_returns_true(self) -> None:
        assert isinstance(FakeWorkTree(), WorkTreeProtocol) is True

    def test_has_default_root(self) -> None:
        assert FakeWorkTree().root == Path("/fake/worktree")


# =============================================================================
# File Operation Tests
# =============================================================================


class TestFakeWorkTreeFiles:
    def test_list_files_is_sorted(self, fake_tree: FakeWorkTree) -> None:
        fake_tree.set_file("b.txt", "b")
        fake_tree.set_file("a/c.txt", "c")
        fake_tree.set_file("a.txt", "a")

        assert fake_tree.list_files() == ["a.txt", "a/c.txt", "b.txt"]

    def test_read_returns_bytes(self, fake_tree: FakeWorkTree) -> None:
        fake_tree.set_file("a.txt", "hello")
        assert fake_tree.read_file("a.txt") == b"hello"

    def test_read_normalizes_path(self, fake_tree: FakeWorkTree) -> None:
        fake_tree.set_file("docs/a.txt", b"x")
        assert fake_tree.read_file("./docs\\a.txt") == b"x"

    def test_read_missing_raises(self, fake_tree: FakeWorkTree) -> None:
        with pytest.raises(WorkTreeError) as exc_info:
            _ = fake_tree.read_file("missing.txt")

        assert exc_info.value.path == "missing.txt"
        assert exc_info.value.operation == "read"

    def test_write_creates_file(self, fake_tree: FakeWorkTree) -> None:
        fake_tree.write_file("new.txt", b"data")
        assert fake_tree.files == {"new.txt": b"data"}

    def test_remove_deletes_file(self, fake_tree: FakeWorkTree) -> None:
        fake_tree.set_file("a.txt", "a")
        fake_tree.remove_file("a.txt")
        assert fake_tree.list_files() == []

    def test_remove_missing_raises(self, fake_tree: FakeWorkTree) -> None:
        with pytest.raises(WorkTreeError, match="No such file"):
            fake_tree.remove_file("a.txt")


# =============================================================================
# Failure Injection Tests
# =============================================================================


class TestFakeWorkTreeFailureInjection:
    def test_read_failure(self, fake_tree: FakeWorkTree) -> None:
        fake_tree.set_file("a.txt", "a")
        fake_tree.read_failures.add("a.txt")

        with pytest.raises(WorkTreeError, match="Injected read failure"):
            _ = fake_tree.read_file("a.txt")

    def test_write_failure_leaves_content(self, fake_tree: FakeWorkTree) -> None:
        fake_tree.set_file("a.txt", "old")
        fake_tree.write_failures.add("a.txt")

        with pytest.raises(WorkTreeError):
            fake_tree.write_file("a.txt", b"new")

        assert fake_tree.files["a.txt"] == b"old"

    def test_remove_failure_keeps_file(self, fake_tree: FakeWorkTree) -> None:
        fake_tree.set_file("a.txt", "a")
        fake_tree.remove_failures.add("a.txt")

        with pytest.raises(WorkTreeError):
            fake_tree.remove_file("a.txt")

        assert "a.txt" in fake_tree.files

    def test_set_file_bypasses_write_failures(self, fake_tree: FakeWorkTree) -> None:
        fake_tree.write_failures.add("a.txt")
        fake_tree.set_file("a.txt", "a")
        assert fake_tree.files["a.txt"] == b"a"


# =============================================================================
# Clone Tests
# =============================================================================


class TestFakeWorkTreeClone:
    def test_clone_copies_files(self, fake_tree: FakeWorkTree) -> None:
        fake_tree.set_file("a.txt", "a")

        clone = fake_tree.clone()

        assert clone.files == {"a.txt": b"a"}
        assert clone.root == Path("/fake/worktree-clone-1")
        assert fake_tree.clones == [clone]

    def test_clone_is_independent(self, fake_tree: FakeWorkTree) -> None:
        fake_tree.set_file("a.txt", "a")
        clone = fake_tree.clone()

        clone.write_file("a.txt", b"changed")

        assert fake_tree.read_file("a.txt") == b"a"

    def test_clone_uses_destination(self, fake_tree: FakeWorkTree) -> None:
        clone = fake_tree.clone(Path("/elsewhere"))
        assert clone.root == Path("/elsewhere")

    def test_clone_failure(self, fake_tree: FakeWorkTree) -> None:
        fake_tree.fail_clone = True

        with pytest.raises(WorkTreeError) as exc_info:
            _ = fake_tree.clone()

        assert exc_info.value.operation == "clone"
        assert fake_tree.clones == []
