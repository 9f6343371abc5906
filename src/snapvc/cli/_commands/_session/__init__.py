# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing
"""Session command: drive one in-memory repository from a prompt or script."""

from collections.abc import Iterator
from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from snapvc.cli._commands._context import CLIContext
from snapvc.cli._commands._shared import ExitCode, exit_with_error
from snapvc.exceptions import RepositoryInitError, WorkTreeError
from snapvc.repository import Repository

from ._runner import HELP_TEXT, SessionRunner

__all__ = ["HELP_TEXT", "SessionRunner", "app"]

_PROMPT = "snapvc> "

app = App(
    name="session",
    help="Open a repository session over a working directory",
    help_on_error=True,
)


def _prompt_lines(console: Console) -> Iterator[str]:
    while True:
        try:
            yield console.input(_PROMPT)
        except (EOFError, KeyboardInterrupt):
            console.print()
            return


@app.default
def _session(
    workdir: Annotated[Path, Parameter(help="Working directory to track")],
    *,
    script: Annotated[
        Path | None,
        Parameter(
            name=["--script", "-s"],
            help="Read commands from a file instead of the prompt",
        ),
    ] = None,
) -> None:
    """Track WORKDIR and run session commands against it.

    Without --script, commands are read from an interactive prompt until
    'quit' or end of input. With --script, each line of the file is one
    command and the exit code is non-zero if any command failed.
    """
    ctx = CLIContext.get_current()
    console = Console()

    if ctx.config_error:
        console.print(f"[yellow]Warning:[/yellow] {ctx.config_error}")

    try:
        repository = Repository.from_path(workdir, config=ctx.config)
    except RepositoryInitError as e:
        exit_with_error(str(e), ExitCode.IO_ERROR)
    except WorkTreeError as e:
        exit_with_error(str(e), ExitCode.NOT_FOUND)

    if ctx.logger is not None:
        ctx.logger.info(
            "session_started",
            workdir=str(workdir),
            script=str(script) if script is not None else None,
        )

    runner = SessionRunner(repository=repository, console=console, logger=ctx.logger)

    if script is None:
        console.print(
            f"[dim]Tracking {len(repository.state.hashes)} file(s) in "
            f"{repository.worktree.root}. Type 'help' for commands.[/dim]"
        )
        runner.run(_prompt_lines(console))
        return

    try:
        lines = script.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        exit_with_error(f"Cannot read script {script}: {e}", ExitCode.NOT_FOUND)

    errors = runner.run(lines)
    if errors:
        exit_with_error(
            f"{errors} command(s) failed", ExitCode.COMMAND_ERROR, console=console
        )
