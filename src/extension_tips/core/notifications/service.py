"""
Notification sinks.

The engine emits notifications through a ``MessageService``; the console
implementation renders them with rich and can ask the user to pick one of
the offered actions.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt

from extension_tips.core.notifications.models import Notification

logger = logging.getLogger(__name__)


@runtime_checkable
class MessageService(Protocol):
    """Protocol for anything that can show a notification."""

    def show(self, notification: Notification) -> None:
        """Display notification to the user."""
        ...


class CollectingMessageService:
    """Keeps notifications in memory instead of showing them."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def show(self, notification: Notification) -> None:
        self.notifications.append(notification)

    def to_dicts(self) -> list[dict[str, object]]:
        """Collected notifications as JSON-serializable dicts."""
        return [
            {
                "severity": n.severity.value,
                "message": n.message,
                "recommendations": list(n.recommendations),
                "actions": [action.id for action in n.actions],
            }
            for n in self.notifications
        ]


class ConsoleMessageService:
    """
    Renders notifications on a rich console.

    In interactive mode the user is prompted to choose one of the
    notification's actions by number, and the chosen action is run
    immediately. The prompt blocks the calling thread, and with it the
    event loop running the tips service, so interactive mode is meant for
    the CLI only. Otherwise the available actions are only listed.

    Example:
        >>> messages = ConsoleMessageService(interactive=True)
        >>> messages.show(notification)
    """

    def __init__(self, console: Console | None = None, interactive: bool = False) -> None:
        self.console = console or Console()
        self.interactive = interactive

    def show(self, notification: Notification) -> None:
        """Render notification and, when interactive, run the chosen action."""
        style = notification.severity.style
        lines = [escape(notification.message)]
        if len(notification.recommendations) > 1:
            lines.extend(f"  • {escape(ext_id)}" for ext_id in notification.recommendations)
        if notification.actions:
            lines.append("")
            for idx, action in enumerate(notification.actions, start=1):
                lines.append(f"[dim]{idx}.[/dim] {escape(action.label)}")

        self.console.print(
            Panel(
                "\n".join(lines),
                title=f"[{style}]{notification.severity.value}[/{style}]",
                border_style=style,
            )
        )

        if not self.interactive or not notification.actions:
            return

        choices = [str(idx) for idx in range(1, len(notification.actions) + 1)]
        answer = Prompt.ask(
            "Choose an action",
            choices=choices,
            default=choices[-1],
            console=self.console,
        )
        action = notification.actions[int(answer) - 1]
        logger.debug("User chose action %s", action.id)
        action.run()
