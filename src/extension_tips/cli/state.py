"""
extension-tips CLI - state and reset commands.

Show or clear the persisted recommendation state.
"""

import json as json_module

import typer
from rich.console import Console
from rich.table import Table

from extension_tips.core.exceptions import StorageError
from extension_tips.core.storage import JsonFileStorage, StorageScope, load_string_list
from extension_tips.core.tips import (
    IMPORTANT_IGNORE_KEY,
    RECOMMENDATIONS_KEY,
    WORKSPACE_IGNORE_KEY,
)

console = Console()


def show_state(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output state as JSON",
    ),
) -> None:
    """Show persisted recommendations, ignore list and workspace dismissal."""
    storage = JsonFileStorage.default(ctx.obj["workspace_dir"])

    recommendations = load_string_list(storage, RECOMMENDATIONS_KEY, StorageScope.GLOBAL)
    ignored = load_string_list(storage, IMPORTANT_IGNORE_KEY, StorageScope.GLOBAL)
    dismissed = storage.get_boolean(WORKSPACE_IGNORE_KEY, StorageScope.WORKSPACE, False)

    if json_output:
        console.print(
            json_module.dumps(
                {
                    "recommendations": recommendations,
                    "important_ignore": ignored,
                    "workspace_dismissed": dismissed,
                    "files": {
                        scope.value: str(storage.path_for(scope)) for scope in StorageScope
                    },
                },
                indent=2,
            ),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        raise typer.Exit(0)

    table = Table(show_header=True, show_lines=True)
    table.add_column("Entry", style="bold")
    table.add_column("Value")
    table.add_row("Recommendations", ", ".join(recommendations) or "[dim]none[/dim]")
    table.add_row("Never show again", ", ".join(ignored) or "[dim]none[/dim]")
    table.add_row(
        "Workspace dismissed",
        "[yellow]yes[/yellow]" if dismissed else "[green]no[/green]",
    )
    for scope in StorageScope:
        table.add_row(f"{scope.value.capitalize()} state file", str(storage.path_for(scope)))
    console.print(table)


def reset(
    ctx: typer.Context,
    ignore: bool = typer.Option(
        False,
        "--ignore",
        help="Forget ignored important recommendations",
    ),
    workspace: bool = typer.Option(
        False,
        "--workspace",
        help="Forget the workspace dismissal",
    ),
    recommendations: bool = typer.Option(
        False,
        "--recommendations",
        help="Forget accumulated recommendations",
    ),
) -> None:
    """
    Clear persisted state.

    Without flags everything is cleared.
    """
    storage = JsonFileStorage.default(ctx.obj["workspace_dir"])

    if not (ignore or workspace or recommendations):
        ignore = workspace = recommendations = True

    targets = []
    if recommendations:
        targets.append((RECOMMENDATIONS_KEY, StorageScope.GLOBAL))
    if ignore:
        targets.append((IMPORTANT_IGNORE_KEY, StorageScope.GLOBAL))
    if workspace:
        targets.append((WORKSPACE_IGNORE_KEY, StorageScope.WORKSPACE))

    try:
        for key, scope in targets:
            storage.remove(key, scope)
    except StorageError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Cleared {len(targets)} entr{'y' if len(targets) == 1 else 'ies'}.[/green]")
