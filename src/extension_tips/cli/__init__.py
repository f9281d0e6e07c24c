"""
extension-tips CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
from pathlib import Path

import typer
from rich.console import Console

from extension_tips import __version__
from extension_tips.cli import state, tips

app = typer.Typer(
    name="extension-tips",
    help="Inspect and drive file-based extension recommendations",
    no_args_is_help=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"extension-tips {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
    workspace_dir: Path | None = typer.Option(
        None,
        "--workspace-dir",
        "-w",
        help="Workspace root (defaults to the current directory)",
        file_okay=False,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    extension-tips - recommend extensions for the files you open.

    Examples:
        extension-tips match README.md src/app.ts   # Observe documents
        extension-tips workspace                    # Workspace recommendations
        extension-tips state                        # Show persisted state
        extension-tips reset --ignore               # Forget "don't show again"
    """
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    ctx.obj = {
        "debug": debug,
        "workspace_dir": workspace_dir or Path.cwd(),
    }


app.command(name="match")(tips.match)
app.command(name="workspace")(tips.workspace)
app.command(name="state")(state.show_state)
app.command(name="reset")(state.reset)


def cli_main() -> None:
    """Console script entry point."""
    app()


__all__ = ["app", "cli_main"]
