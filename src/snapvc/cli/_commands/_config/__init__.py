# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
"""Config command for inspecting snapvc configuration."""

from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from snapvc.cli._commands._context import CLIContext
from snapvc.cli._commands._shared import format_json

app = App(name="config", help="Show the effective configuration", help_on_error=True)


@app.default
def _show(
    sources: Annotated[  # noqa: FBT002
        bool,
        Parameter(name=["--sources"], help="List the sources that were merged"),
    ] = False,
) -> None:
    """Print the effective configuration as JSON."""
    ctx = CLIContext.get_current()
    console = Console()

    if ctx.config_error:
        console.print(f"[yellow]Warning:[/yellow] {ctx.config_error}")

    console.print_json(format_json(ctx.config.to_dict()))

    if sources:
        console.print("[bold]Sources (lowest precedence first):[/bold]")
        for source in ctx.config.sources:
            location = f" {source.path}" if source.path is not None else ""
            console.print(f"  {source.name.value}{location}")
