"""Unit tests for the session command interpreter."""

import pytest
from rich.console import Console
from structlog.testing import CapturingLogger
from structlog.typing import FilteringBoundLogger

from snapvc.cli._commands._session import HELP_TEXT, SessionRunner
from snapvc.repository import Repository
from snapvc.worktree import FakeWorkTree


@pytest.fixture
def runner(
    fake_tree: FakeWorkTree, console: Console, logger: FilteringBoundLogger
) -> SessionRunner:
    fake_tree.set_file("a.txt", "a")
    fake_tree.set_file("b.txt", "b")
    repository = Repository(fake_tree, logger=logger)
    return SessionRunner(repository=repository, console=console, logger=logger)


class TestSessionRunnerParsing:
    def test_blank_and_comment_lines_are_ignored(
        self, runner: SessionRunner, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert runner.execute("") is True
        assert runner.execute("   # nothing here") is True
        assert capsys.readouterr().out == ""
        assert runner.errors == 0

    @pytest.mark.parametrize("line", ["quit", "exit", "  quit  "])
    def test_quit_ends_session(self, runner: SessionRunner, line: str) -> None:
        assert runner.execute(line) is False

    def test_unknown_command_is_an_error(
        self, runner: SessionRunner, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert runner.execute("push") is True
        assert "Unknown command: push" in capsys.readouterr().out
        assert runner.errors == 1

    def test_unbalanced_quotes_are_an_error(self, runner: SessionRunner) -> None:
        _ = runner.execute('commit "unterminated')
        assert runner.errors == 1

    def test_run_stops_at_quit(self, runner: SessionRunner) -> None:
        errors = runner.run(["add a.txt", "quit", "commit never"])

        assert errors == 0
        assert runner.repository.log() == []

    def test_commands_are_logged(
        self, runner: SessionRunner, log_capture: CapturingLogger
    ) -> None:
        _ = runner.execute("status")

        commands = [
            c.kwargs for c in log_capture.calls if c.kwargs["event"] == "session_command"
        ]
        assert commands[-1]["name"] == "status"


class TestSessionRunnerCommands:
    def test_add_stages_paths(self, runner: SessionRunner) -> None:
        _ = runner.execute("add a.txt")
        assert runner.repository.state.staged_paths() == ["a.txt"]

    def test_add_dot_stages_everything(self, runner: SessionRunner) -> None:
        _ = runner.execute("add .")
        assert runner.repository.state.staged_paths() == ["a.txt", "b.txt"]

    def test_add_all(self, runner: SessionRunner) -> None:
        _ = runner.execute("add-all")
        assert runner.repository.state.staged_paths() == ["a.txt", "b.txt"]

    def test_add_without_paths_is_an_error(self, runner: SessionRunner) -> None:
        _ = runner.execute("add")
        assert runner.errors == 1

    def test_add_missing_file_reports_failure(
        self, runner: SessionRunner, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _ = runner.execute("add missing.txt")

        assert "not staged: missing.txt" in capsys.readouterr().out
        assert runner.errors == 1

    def test_commit_joins_message_words(self, runner: SessionRunner) -> None:
        _ = runner.execute("add a.txt")
        _ = runner.execute("commit first change")

        assert runner.repository.log() == ["first change"]

    def test_commit_prints_index(
        self, runner: SessionRunner, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _ = runner.execute("add a.txt")
        _ = runner.execute('commit "[wip] first"')

        out = capsys.readouterr().out
        assert "#0" in out
        assert "[wip] first" in out

    def test_status_lists_modified_and_staged(
        self,
        runner: SessionRunner,
        fake_tree: FakeWorkTree,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        _ = runner.execute("add a.txt")
        fake_tree.set_file("b.txt", "changed")
        _ = capsys.readouterr()

        _ = runner.execute("status")

        out = capsys.readouterr().out
        assert "+ a.txt" in out
        assert "~ b.txt" in out

    def test_status_clean(
        self, runner: SessionRunner, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _ = runner.execute("status")
        assert "Nothing modified or staged" in capsys.readouterr().out

    def test_log_newest_first(
        self, runner: SessionRunner, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _ = runner.run(["commit one", "commit two"])
        _ = capsys.readouterr()

        _ = runner.execute("log")

        lines = capsys.readouterr().out.splitlines()
        assert lines == ["~0 two", "~1 one"]

    def test_log_empty(
        self, runner: SessionRunner, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _ = runner.execute("log")
        assert "No commits yet" in capsys.readouterr().out

    def test_checkout_reverts_and_clones(
        self, runner: SessionRunner, fake_tree: FakeWorkTree
    ) -> None:
        _ = runner.run(["add a.txt", "commit one"])
        fake_tree.set_file("a.txt", "edited")

        _ = runner.execute("checkout ~0")

        assert runner.errors == 0
        assert fake_tree.files == {"a.txt": b"a"}
        assert fake_tree.clones[-1].files == {"a.txt": b"a"}

    def test_checkout_bad_reference_is_an_error(
        self, runner: SessionRunner, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _ = runner.execute("checkout ~3")

        assert runner.errors == 1
        assert "out of range" in capsys.readouterr().out

    def test_checkout_requires_one_argument(self, runner: SessionRunner) -> None:
        _ = runner.execute("checkout")
        _ = runner.execute("checkout ~0 ~1")
        assert runner.errors == 2

    def test_help_lists_every_command(
        self, runner: SessionRunner, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _ = runner.execute("help")

        out = capsys.readouterr().out
        for usage, _description in HELP_TEXT:
            assert usage in out
