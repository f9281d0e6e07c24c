"""
Notification types passed to the message sink.

Actions are opaque callbacks supplied by the engine; the sink only shows
their labels and calls ``run()`` when the user picks one.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum


class Severity(str, Enum):
    """Severity of a notification."""

    IGNORE = "ignore"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def style(self) -> str:
        """Rich style used when rendering this severity."""
        return {
            Severity.IGNORE: "dim",
            Severity.INFO: "cyan",
            Severity.WARNING: "yellow",
            Severity.ERROR: "red",
        }[self]


@dataclass(frozen=True)
class Action:
    """
    A user-selectable action attached to a notification.

    Attributes:
        id: Stable identifier (e.g. "neverShowAgain")
        label: Text shown to the user
        run: Callback executed when chosen; returns True when handled
    """

    id: str
    label: str
    run: Callable[[], bool]


@dataclass(frozen=True)
class Notification:
    """
    A message with its actions.

    Attributes:
        severity: How prominently to show the message
        message: Text shown to the user
        actions: Actions offered, in display order
        recommendations: Extension ids the notification recommends
    """

    severity: Severity
    message: str
    actions: list[Action] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def action(self, action_id: str) -> Action | None:
        """Find an attached action by id."""
        for action in self.actions:
            if action.id == action_id:
                return action
        return None
