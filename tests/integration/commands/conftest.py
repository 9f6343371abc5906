from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from snapvc.cli import create_app


@pytest.fixture
def snapvc_cli(console: Console) -> Callable[..., int]:
    """Run the CLI, including global options, and return the exit code."""

    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        try:
            app.meta(list(args))
        except SystemExit as e:
            if e.code is None:
                return 0
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """A working directory with two files."""
    root = tmp_path / "workdir"
    root.mkdir()
    _ = (root / "a.txt").write_text("alpha\n")
    _ = (root / "docs").mkdir()
    _ = (root / "docs" / "b.txt").write_text("beta\n")
    return root


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A config file sending clones to a known directory."""
    path = tmp_path / "snapvc.toml"
    _ = path.write_text(
        f'[repository]\nclone_dir = "{(tmp_path / "clones").as_posix()}"\n'
    )
    return path


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[..., Path]:
    def _write(*lines: str) -> Path:
        path = tmp_path / "session.txt"
        _ = path.write_text("\n".join(lines) + "\n")
        return path

    return _write
