"""
Notification gates for important and workspace recommendations.

Both gates drop recommendations that are already installed and honour a
persisted "don't show again" choice: per extension id for important tips
(global scope), per workspace for workspace recommendations.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from extension_tips.core.exceptions import StorageError
from extension_tips.core.extensions import (
    ExtensionManagementService,
    ExtensionType,
    installed_identifiers,
)
from extension_tips.core.notifications import Action, MessageService, Notification, Severity
from extension_tips.core.storage import (
    StorageScope,
    StorageService,
    load_string_list,
    store_string_list,
)
from extension_tips.core.tips import messages
from extension_tips.core.tips.glob import GlobMatcher, match_glob

logger = logging.getLogger(__name__)

IMPORTANT_IGNORE_KEY = "extensionsAssistant/importantRecommendationsIgnore"
WORKSPACE_IGNORE_KEY = "extensionsAssistant/workspaceRecommendationsIgnore"

ShowRecommendations = Callable[[], object]


async def query_installed(extensions: ExtensionManagementService) -> set[str]:
    """
    Get ``publisher.name`` keys of installed user extensions.

    A failing query counts as nothing installed, so recommendations are
    still offered.
    """
    try:
        installed = await extensions.get_installed(ExtensionType.USER)
    except Exception as e:
        logger.warning("Installed extensions query failed, assuming none: %s", e)
        return set()
    return installed_identifiers(installed)


def _show_action(action_id: str, delegate: ShowRecommendations | None) -> Action:
    def run() -> bool:
        if delegate is not None:
            delegate()
        return True

    return Action(id=action_id, label=messages.SHOW_RECOMMENDATIONS_LABEL, run=run)


def _close_action() -> Action:
    return Action(id=messages.CLOSE_ACTION_ID, label=messages.CLOSE_LABEL, run=lambda: True)


def _show(sink: MessageService, notification: Notification) -> None:
    try:
        sink.show(notification)
    except Exception:
        logger.exception("Notification sink failed for: %s", notification.message)


class ImportantRecommendationGate:
    """
    Decides which important tips notify for an observed document.

    A tip notifies when its id is not ignored, not installed, and its
    pattern matches the document path.
    """

    def __init__(
        self,
        storage: StorageService,
        important_tips: Mapping[str, str],
        messages_service: MessageService,
        matcher: GlobMatcher = match_glob,
        show_recommendations: ShowRecommendations | None = None,
    ) -> None:
        """
        Initialize and hydrate the ignore list from storage.

        Args:
            storage: Store holding the persisted ignore list
            important_tips: Extension id -> glob pattern
            messages_service: Notification sink
            matcher: Glob matcher (pattern, path) -> bool
            show_recommendations: Host callback behind "Show Recommendations"
        """
        self._storage = storage
        self._tips = dict(important_tips)
        self._messages = messages_service
        self._matcher = matcher
        self._show_recommendations = show_recommendations
        self._ignored: list[str] = load_string_list(
            storage, IMPORTANT_IGNORE_KEY, StorageScope.GLOBAL
        )

    @property
    def ignore_list(self) -> list[str]:
        """Ids the user asked never to be recommended again."""
        return list(self._ignored)

    def candidates(self, path: str, installed: set[str]) -> list[str]:
        """
        Ids of important tips that should notify for path.

        Args:
            path: Path of the observed document
            installed: ``publisher.name`` keys of installed extensions

        Returns:
            Ids in tip order
        """
        result: list[str] = []
        for extension_id, pattern in self._tips.items():
            if extension_id in self._ignored:
                continue
            if extension_id in installed:
                continue
            if not self._matcher(pattern, path):
                continue
            result.append(extension_id)
        return result

    def evaluate(self, path: str, installed: set[str]) -> list[Notification]:
        """
        Notify for every candidate tip.

        Returns:
            The notifications shown
        """
        shown: list[Notification] = []
        for extension_id in self.candidates(path, installed):
            notification = self._build_notification(extension_id)
            _show(self._messages, notification)
            shown.append(notification)
        return shown

    def ignore(self, extension_id: str) -> bool:
        """
        Never recommend extension_id again.

        Returns:
            True (the notification is dismissed)
        """
        if extension_id not in self._ignored:
            self._ignored.append(extension_id)
        try:
            store_string_list(
                self._storage, IMPORTANT_IGNORE_KEY, self._ignored, StorageScope.GLOBAL
            )
        except StorageError as e:
            logger.warning("Could not persist ignored recommendation %s: %s", extension_id, e)
        return True

    def _build_notification(self, extension_id: str) -> Notification:
        return Notification(
            severity=Severity.INFO,
            message=messages.important_recommendation_message(extension_id),
            actions=[
                _show_action(
                    messages.SHOW_RECOMMENDATIONS_ACTION_ID, self._show_recommendations
                ),
                Action(
                    id=messages.NEVER_SHOW_AGAIN_ACTION_ID,
                    label=messages.NEVER_SHOW_AGAIN_LABEL,
                    run=lambda: self.ignore(extension_id),
                ),
                _close_action(),
            ],
            recommendations=[extension_id],
        )


class WorkspaceRecommendationGate:
    """
    One-shot check of the workspace's recommended extensions.

    Runs at most once per instance. Nothing is shown when the workspace was
    dismissed, when it recommends nothing, or when everything it
    recommends is already installed.
    """

    def __init__(
        self,
        storage: StorageService,
        recommendations: list[str],
        extensions: ExtensionManagementService,
        messages_service: MessageService,
        show_recommendations: ShowRecommendations | None = None,
    ) -> None:
        self._storage = storage
        self._recommendations = list(recommendations)
        self._extensions = extensions
        self._messages = messages_service
        self._show_recommendations = show_recommendations
        self._ran = False

    @property
    def dismissed(self) -> bool:
        """Whether the user dismissed workspace recommendations for good."""
        return self._storage.get_boolean(WORKSPACE_IGNORE_KEY, StorageScope.WORKSPACE, False)

    @property
    def has_run(self) -> bool:
        return self._ran

    async def run(self) -> Notification | None:
        """
        Check workspace recommendations and notify once if any are missing.

        Returns:
            The notification shown, or None
        """
        if self._ran:
            return None
        self._ran = True

        if self.dismissed:
            logger.debug("Workspace recommendations dismissed, skipping")
            return None

        if not self._recommendations:
            return None

        installed = await query_installed(self._extensions)
        missing = [ext_id for ext_id in self._recommendations if ext_id not in installed]
        if not missing:
            logger.debug("All workspace recommendations are installed")
            return None

        notification = Notification(
            severity=Severity.INFO,
            message=messages.WORKSPACE_RECOMMENDED_MESSAGE,
            actions=[
                _show_action(
                    messages.SHOW_WORKSPACE_RECOMMENDATIONS_ACTION_ID,
                    self._show_recommendations,
                ),
                Action(
                    id=messages.NEVER_SHOW_AGAIN_ACTION_ID,
                    label=messages.NEVER_SHOW_AGAIN_LABEL,
                    run=self.dismiss,
                ),
                _close_action(),
            ],
            recommendations=missing,
        )
        _show(self._messages, notification)
        return notification

    def dismiss(self) -> bool:
        """Stop showing workspace recommendations for this workspace."""
        try:
            self._storage.store(WORKSPACE_IGNORE_KEY, True, StorageScope.WORKSPACE)
        except StorageError as e:
            logger.warning("Could not persist workspace dismissal: %s", e)
        return True
