"""Integration tests for the session command."""

import io
from collections.abc import Callable
from pathlib import Path

import pytest

from snapvc.cli._commands._shared import ExitCode


class TestSessionScript:
    def test_commit_and_checkout(
        self,
        workdir: Path,
        tmp_path: Path,
        config_file: Path,
        write_script: Callable[..., Path],
        snapvc_cli: Callable[..., int],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        script = write_script(
            "add a.txt",
            "commit first",
            "add .",
            "commit second",
            "log",
            "checkout ~1",
        )

        exit_code = snapvc_cli(
            "--config", str(config_file), "session", str(workdir), "--script", str(script)
        )

        assert exit_code == ExitCode.SUCCESS
        out = capsys.readouterr().out
        assert "~0 second" in out
        assert "~1 first" in out
        assert "Checked out ~1" in out

        clones = list((tmp_path / "clones").iterdir())
        assert len(clones) == 1
        assert sorted(p.name for p in clones[0].rglob("*") if p.is_file()) == ["a.txt"]
        assert not (workdir / "docs" / "b.txt").exists()

    def test_failed_command_sets_exit_code(
        self,
        workdir: Path,
        write_script: Callable[..., Path],
        snapvc_cli: Callable[..., int],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        script = write_script("checkout ~0", "status")

        exit_code = snapvc_cli("session", str(workdir), "-s", str(script))

        assert exit_code == ExitCode.COMMAND_ERROR
        captured = capsys.readouterr()
        assert "out of range" in captured.out
        assert "1 command(s) failed" in captured.out

    def test_quit_stops_script(
        self,
        workdir: Path,
        write_script: Callable[..., Path],
        snapvc_cli: Callable[..., int],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        script = write_script("quit", "bogus")

        exit_code = snapvc_cli("session", str(workdir), "--script", str(script))

        assert exit_code == ExitCode.SUCCESS
        assert "Unknown command" not in capsys.readouterr().out

    def test_missing_script(
        self,
        workdir: Path,
        tmp_path: Path,
        snapvc_cli: Callable[..., int],
    ) -> None:
        exit_code = snapvc_cli(
            "session", str(workdir), "--script", str(tmp_path / "missing.txt")
        )

        assert exit_code == ExitCode.NOT_FOUND


class TestSessionErrors:
    def test_missing_workdir(
        self,
        tmp_path: Path,
        snapvc_cli: Callable[..., int],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        exit_code = snapvc_cli("session", str(tmp_path / "missing"))

        assert exit_code == ExitCode.NOT_FOUND
        assert "not a directory" in capsys.readouterr().err


class TestSessionInteractive:
    def test_reads_commands_until_eof(
        self,
        workdir: Path,
        snapvc_cli: Callable[..., int],
        capsys: pytest.CaptureFixture[str],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("add-all\ncommit snapshot\nlog\n"))

        exit_code = snapvc_cli("session", str(workdir))

        assert exit_code == ExitCode.SUCCESS
        out = capsys.readouterr().out
        assert "Tracking 2 file(s)" in out
        assert "Staged 2 file(s)" in out
        assert "~0 snapshot" in out

    def test_verbose_logs_commands_at_debug(
        self,
        workdir: Path,
        isolated_environment: Path,
        snapvc_cli: Callable[..., int],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("status\nquit\n"))

        _ = snapvc_cli("--verbose", "session", str(workdir))

        cli_log = (isolated_environment / "cli.log").read_text()
        repository_log = (isolated_environment / "repository.log").read_text()
        assert "session_command" in cli_log
        assert "status_computed" in repository_log
