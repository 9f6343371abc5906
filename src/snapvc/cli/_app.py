"""The command-line interface for snapvc."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from snapvc.config import safe_load_config
from snapvc.utils import close_log_files, create_cli_logger

from ._commands import register_commands
from ._commands._context import CLIContext

_HELP = "A minimal local version-control engine."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Build the snapvc application with global options.

    Global options are handled by the meta app; invoke ``app.meta(tokens)``
    to load configuration before dispatching to a command.

    Args:
        console: Console for help and normal output.
        error_console: Console for parse errors.
        exit_on_error: Whether cyclopts exits on parse errors.

    Returns:
        The configured application.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="snapvc",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Enable debug logging")] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
    ) -> None:
        """Launch snapvc with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Log at debug level.
            config: Explicit path to config file.
        """
        cli_overrides: dict[str, object] | None = None
        if verbose:
            cli_overrides = {"logging.level": "debug"}

        loaded_config, config_error = safe_load_config(
            config_path=config,
            cli_overrides=cli_overrides,
        )

        cli_logger = create_cli_logger(
            level=loaded_config.logging.level.value,
            log_format=loaded_config.logging.format.value,  # type: ignore[arg-type]
            log_file=loaded_config.logging.file,
            max_bytes=loaded_config.logging.max_bytes,
            backup_count=loaded_config.logging.backup_count,
        )

        ctx = CLIContext(
            config=loaded_config,
            verbose=verbose,
            config_path=config,
            config_error=config_error,
            logger=cli_logger,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()
            close_log_files()

    register_commands(app)
    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `snapvc` CLI."""
    app.meta()


if __name__ == "__main__":
    main()
