"""Notification models and sinks."""

from extension_tips.core.notifications.models import Action, Notification, Severity
from extension_tips.core.notifications.service import (
    CollectingMessageService,
    ConsoleMessageService,
    MessageService,
)

__all__ = [
    "Action",
    "CollectingMessageService",
    "ConsoleMessageService",
    "MessageService",
    "Notification",
    "Severity",
]
