"""snapvc CLI commands."""
# pyright: reportUnusedCallResult=false

from __future__ import annotations

from typing import TYPE_CHECKING

from ._config import app as config_app
from ._context import CLIContext
from ._session import app as session_app
from ._shared import (
    ExitCode,
    FormattableData,
    exit_with_error,
    format_json,
    get_error_console,
)

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "CLIContext",
    "ExitCode",
    "FormattableData",
    "config_app",
    "exit_with_error",
    "format_json",
    "get_error_console",
    "register_commands",
    "session_app",
]


def register_commands(app: App) -> None:
    app.command(config_app)
    app.command(session_app)
