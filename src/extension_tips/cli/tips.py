"""
extension-tips CLI - match and workspace commands.

Run the engine against documents given on the command line, or run the
one-shot workspace check, using the persisted state of the real stores.
"""

import asyncio
import json as json_module
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from extension_tips.core.config import TipsConfig, load_config
from extension_tips.core.exceptions import ConfigError
from extension_tips.core.extensions import ExtensionsDirectory
from extension_tips.core.notifications import (
    CollectingMessageService,
    ConsoleMessageService,
    MessageService,
)
from extension_tips.core.storage import JsonFileStorage
from extension_tips.core.tips import ExtensionTipsService

console = Console()

DEFAULT_EXTENSIONS_DIR = Path.home() / ".vscode" / "extensions"


def _load(workspace_dir: Path) -> TipsConfig:
    try:
        return load_config(workspace_dir)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def build_service(
    workspace_dir: Path,
    interactive: bool = False,
    messages: MessageService | None = None,
) -> ExtensionTipsService:
    """
    Create a tips service backed by the on-disk stores.

    Args:
        workspace_dir: Workspace root
        interactive: Prompt for an action on every notification
        messages: Notification sink (defaults to the console)

    Returns:
        Configured ExtensionTipsService (not started)
    """
    config = _load(workspace_dir)
    extensions_dir = config.extensions_dir or DEFAULT_EXTENSIONS_DIR

    def show_recommendations() -> None:
        console.print("[cyan]Recommended:[/cyan] " + ", ".join(service.get_recommendations()))

    def show_workspace_recommendations() -> None:
        console.print(
            "[cyan]Workspace recommends:[/cyan] "
            + ", ".join(service.get_workspace_recommendations())
        )

    service = ExtensionTipsService(
        config=config,
        storage=JsonFileStorage.default(workspace_dir),
        extensions=ExtensionsDirectory(extensions_dir),
        messages=messages or ConsoleMessageService(console=console, interactive=interactive),
        show_recommendations=show_recommendations,
        show_workspace_recommendations=show_workspace_recommendations,
    )
    return service


async def _observe_all(service: ExtensionTipsService, paths: list[str]) -> None:
    for path in paths:
        service.observe(path)
    await service.wait_idle()


async def _run_workspace(service: ExtensionTipsService) -> None:
    service.run_once()
    await service.wait_idle()


def match(
    ctx: typer.Context,
    paths: list[str] = typer.Argument(..., help="Document paths to observe"),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output recommendations as JSON",
    ),
    interactive: bool = typer.Option(
        False,
        "--interactive",
        "-i",
        help="Prompt for an action on each notification",
    ),
) -> None:
    """
    Observe documents and show the accumulated recommendations.

    With --json, notifications are collected into the JSON document instead
    of being rendered, and no action prompt is shown.

    Examples:
        extension-tips match README.md
        extension-tips match src/*.ts --json
        extension-tips match notes.md -i
    """
    collected = CollectingMessageService() if json_output else None
    service = build_service(
        ctx.obj["workspace_dir"],
        interactive=interactive and not json_output,
        messages=collected,
    )

    if not service.enabled:
        console.print("[yellow]Extension gallery is disabled; nothing to do.[/yellow]")
        raise typer.Exit(0)

    if not service.tips_enabled:
        console.print("[yellow]No extension tips configured.[/yellow]")
        raise typer.Exit(0)

    asyncio.run(_observe_all(service, paths))
    recommendations = service.get_recommendations()

    if collected is not None:
        console.print(
            json_module.dumps(
                {
                    "observed": paths,
                    "recommendations": recommendations,
                    "notifications": collected.to_dicts(),
                },
                indent=2,
            ),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        raise typer.Exit(0)

    if not recommendations:
        console.print("[yellow]No recommendations yet.[/yellow]")
        raise typer.Exit(0)

    table = Table(show_header=True)
    table.add_column("#", style="dim", width=3)
    table.add_column("Extension", style="bold")
    for idx, extension_id in enumerate(sorted(recommendations), start=1):
        table.add_row(str(idx), extension_id)
    console.print(table)


def workspace(
    ctx: typer.Context,
    interactive: bool = typer.Option(
        False,
        "--interactive",
        "-i",
        help="Prompt for an action on the notification",
    ),
) -> None:
    """
    Run the one-shot workspace recommendation check.

    Shows a notification when the workspace recommends extensions that are
    not installed, unless it was dismissed before.
    """
    service = build_service(ctx.obj["workspace_dir"], interactive=interactive)

    if not service.enabled:
        console.print("[yellow]Extension gallery is disabled; nothing to do.[/yellow]")
        raise typer.Exit(0)

    if service.workspace_gate.dismissed:
        console.print("[dim]Workspace recommendations were dismissed.[/dim]")
        raise typer.Exit(0)

    asyncio.run(_run_workspace(service))
