"""Line-oriented command interpreter for a repository session.

Repository state lives in memory, so the CLI drives one Repository for the
lifetime of a session. Each input line is one command.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from rich.markup import escape

from snapvc.exceptions import SnapvcError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from rich.console import Console
    from structlog.typing import FilteringBoundLogger

    from snapvc.repository import PathFailure, Repository

_QUIT_COMMANDS: Final = frozenset({"quit", "exit"})

HELP_TEXT: Final = (
    ("add PATH...", "Stage files ('add .' stages everything)"),
    ("add-all", "Stage every file in the working tree"),
    ("commit MESSAGE...", "Commit staged files"),
    ("status", "Show modified and staged files"),
    ("log", "Show commit messages, newest first"),
    ("checkout REF", "Revert to ~N or ^... and clone the result"),
    ("help", "Show this list"),
    ("quit", "End the session"),
)


@dataclass(slots=True)
class SessionRunner:
    """Execute session commands against one repository.

    Errors raised by the repository are printed and counted; the session
    keeps going so a script reports every failing line.

    Attributes:
        repository: Repository the commands operate on.
        console: Console for command output.
        logger: Optional CLI logger; each command is logged.
        errors: Number of commands that failed so far.
    """

    repository: Repository
    console: Console
    logger: FilteringBoundLogger | None = None
    errors: int = field(default=0)

    def run(self, lines: Iterable[str]) -> int:
        """Execute lines until input ends or a quit command is read.

        Returns:
            Number of failed commands.
        """
        for line in lines:
            if not self.execute(line):
                break
        return self.errors

    def execute(self, line: str) -> bool:
        """Execute a single command line.

        Blank lines and ``#`` comments are ignored.

        Returns:
            False if the session should end, True otherwise.
        """
        try:
            tokens = shlex.split(line, comments=True)
        except ValueError as e:
            self._error(f"Cannot parse command: {e}")
            return True
        if not tokens:
            return True

        name, args = tokens[0], tokens[1:]
        if name in _QUIT_COMMANDS:
            return False

        handler = self._handlers().get(name)
        if handler is None:
            self._error(f"Unknown command: {name} (type 'help' for a list)")
            return True

        if self.logger is not None:
            self.logger.info("session_command", name=name, args=args)
        try:
            handler(args)
        except SnapvcError as e:
            self._error(str(e))
        return True

    def _handlers(self) -> dict[str, Callable[[list[str]], None]]:
        return {
            "add": self._add,
            "add-all": self._add_all,
            "commit": self._commit,
            "status": self._status,
            "log": self._log,
            "checkout": self._checkout,
            "help": self._help,
        }

    # =========================================================================
    # Command Handlers
    # =========================================================================

    def _add(self, args: list[str]) -> None:
        if not args:
            self._error("add requires at least one path")
            return
        if args == ["."]:
            self._add_all([])
            return
        result = self.repository.stage(args)
        self._report_staged(len(result.staged), result.failures)

    def _add_all(self, args: list[str]) -> None:
        _ = args
        result = self.repository.stage_all()
        self._report_staged(len(result.staged), result.failures)

    def _report_staged(self, count: int, failures: Iterable[PathFailure]) -> None:
        self.console.print(f"[green]Staged {count} file(s)[/green]")
        for failure in failures:
            self._error(f"not staged: {failure.path}: {failure.reason}")

    def _commit(self, args: list[str]) -> None:
        result = self.repository.commit(" ".join(args))
        message = escape(result.commit.message) or "(no message)"
        self.console.print(
            f"[yellow]#{result.index}[/yellow] {message} "
            f"[dim]({len(result.files)} file(s))[/dim]"
        )
        for skipped in result.skipped:
            self.console.print(
                f"  [yellow]skipped {escape(skipped.path)}:[/yellow] "
                f"{escape(skipped.reason)}"
            )

    def _status(self, args: list[str]) -> None:
        _ = args
        status = self.repository.status()
        if status.clean:
            self.console.print("[dim]Nothing modified or staged[/dim]")
            return

        if status.staged:
            self.console.print("[bold green]Staged files:[/bold green]")
            for path in status.staged:
                self.console.print(f"  [green]+ {escape(path)}[/green]")

        if status.modified:
            self.console.print("[bold yellow]Modified files:[/bold yellow]")
            for path in status.modified:
                self.console.print(f"  [yellow]~ {escape(path)}[/yellow]")

    def _log(self, args: list[str]) -> None:
        _ = args
        messages = self.repository.log()
        if not messages:
            self.console.print("[dim]No commits yet[/dim]")
            return
        for distance, message in enumerate(messages):
            self.console.print(f"[yellow]~{distance}[/yellow] {escape(message)}")

    def _checkout(self, args: list[str]) -> None:
        if len(args) != 1:
            self._error("checkout requires exactly one reference")
            return
        clone = self.repository.checkout(args[0])
        self.console.print(
            f"[green]Checked out {escape(args[0])}[/green] into {escape(str(clone.root))}"
        )

    def _help(self, args: list[str]) -> None:
        _ = args
        width = max(len(usage) for usage, _ in HELP_TEXT)
        for usage, description in HELP_TEXT:
            self.console.print(f"  {usage.ljust(width)}  [dim]{description}[/dim]")

    def _error(self, message: str) -> None:
        self.errors += 1
        self.console.print(f"[red]Error:[/red] {escape(message)}")
