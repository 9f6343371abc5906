"""Shared test fixtures for snapvc tests."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog
from rich.console import Console
from structlog.testing import CapturingLogger
from structlog.typing import FilteringBoundLogger

from snapvc.cli._commands._context import CLIContext
from snapvc.utils import close_log_files
from snapvc.worktree import FakeWorkTree, LocalWorkTree


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path]:
    """Keep log files and user config out of the real home directory."""
    log_dir = tmp_path_factory.mktemp("logs")
    monkeypatch.setenv("SNAPVC_LOG_DIR", str(log_dir))
    for name in ("SNAPVC_DEBUG", "SNAPVC_LOG_LEVEL", "SNAPVC_STRICT_CONFIG"):
        monkeypatch.delenv(name, raising=False)

    user_config = tmp_path_factory.mktemp("user_config") / "config.toml"
    monkeypatch.setattr(
        "snapvc.config._models._config.get_user_config_path", lambda: user_config
    )

    yield log_dir

    CLIContext.reset()
    close_log_files()


@pytest.fixture
def user_config_path(isolated_environment: Path) -> Path:
    """Path the user-level config file is read from during tests."""
    from snapvc.config._models import _config

    return _config.get_user_config_path()


@pytest.fixture
def log_capture() -> CapturingLogger:
    """Records every call made through the `logger` fixture."""
    return CapturingLogger()


@pytest.fixture
def logger(log_capture: CapturingLogger) -> FilteringBoundLogger:
    """A logger that passes every event dict to `log_capture` unrendered."""
    return structlog.wrap_logger(
        log_capture,
        processors=[structlog.stdlib.add_log_level],
        wrapper_class=structlog.make_filtering_bound_logger(0),
    )


@pytest.fixture
def fake_tree() -> FakeWorkTree:
    return FakeWorkTree()


@pytest.fixture
def local_tree(tmp_path: Path) -> LocalWorkTree:
    root = tmp_path / "worktree"
    root.mkdir()
    return LocalWorkTree(root, clone_dir=tmp_path / "clones")


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def logged_events(log_capture: CapturingLogger) -> Callable[[], list[str]]:
    """Return a function listing event names logged so far, in call order."""

    def _events() -> list[str]:
        return [str(call.kwargs["event"]) for call in log_capture.calls]

    return _events
