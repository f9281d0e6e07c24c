"""
Extension tips service: the host-facing facade of the tips engine.

Wires the pattern index, recommendation accumulator and notification
gates to the host's collaborators, and schedules the work for each
observed document off the caller's path.

Usage:
    >>> service = ExtensionTipsService(
    ...     config=load_config(),
    ...     storage=JsonFileStorage.default(),
    ...     extensions=ExtensionsDirectory(Path("~/.vscode/extensions").expanduser()),
    ...     messages=ConsoleMessageService(),
    ...     documents=events,
    ... )
    >>> service.start()            # inside a running event loop
    >>> await service.wait_idle()
    >>> service.get_recommendations()
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

from extension_tips.core.config import TipsConfig
from extension_tips.core.extensions import ExtensionManagementService
from extension_tips.core.notifications import MessageService
from extension_tips.core.storage import StorageService
from extension_tips.core.tips.accumulator import RecommendationAccumulator
from extension_tips.core.tips.documents import Disposable, DocumentEventSource
from extension_tips.core.tips.gates import (
    ImportantRecommendationGate,
    ShowRecommendations,
    WorkspaceRecommendationGate,
    query_installed,
)
from extension_tips.core.tips.glob import GlobMatcher, match_glob
from extension_tips.core.tips.index import build_pattern_index

logger = logging.getLogger(__name__)


class ExtensionTipsService:
    """
    Recommends extensions for opened documents and for the workspace.

    The service is inert when the gallery is disabled. Without a tip map
    document observation does nothing, while the workspace check still
    runs.

    Each observed document is handled by one asyncio task that matches
    patterns, persists new recommendations, awaits the installed-extension
    query and then notifies for important tips. The query is the only
    suspension point inside a task. A failure inside one task is logged
    and does not affect other tasks.
    """

    def __init__(
        self,
        config: TipsConfig,
        storage: StorageService,
        extensions: ExtensionManagementService,
        messages: MessageService,
        documents: DocumentEventSource | None = None,
        *,
        matcher: GlobMatcher | None = None,
        show_recommendations: ShowRecommendations | None = None,
        show_workspace_recommendations: ShowRecommendations | None = None,
    ) -> None:
        """
        Initialize the service and hydrate persisted state.

        Args:
            config: Tip data and workspace recommendations
            storage: Key-value store for persisted state
            extensions: Installed-extension query service
            messages: Notification sink
            documents: Source of document-observed events (optional)
            matcher: Glob matcher (defaults to pathspec-based matching)
            show_recommendations: Callback behind "Show Recommendations"
            show_workspace_recommendations: Same, for workspace notifications
        """
        self.config = config
        self._extensions = extensions
        self._documents = documents
        self._subscription: Disposable | None = None
        self._pending: set[asyncio.Task[None]] = set()
        self._workspace_task: asyncio.Task[None] | None = None

        matcher = matcher or match_glob
        tips_active = config.gallery_enabled and config.has_tips
        self._index = build_pattern_index(config.extension_tips if tips_active else None)

        self._accumulator: RecommendationAccumulator | None = None
        self._important_gate: ImportantRecommendationGate | None = None
        if self._index:
            self._accumulator = RecommendationAccumulator(storage, self._index, matcher)
            self._important_gate = ImportantRecommendationGate(
                storage,
                config.extension_important_tips,
                messages,
                matcher=matcher,
                show_recommendations=show_recommendations,
            )

        self._workspace_gate = WorkspaceRecommendationGate(
            storage,
            config.recommendations,
            extensions,
            messages,
            show_recommendations=show_workspace_recommendations,
        )

    @property
    def enabled(self) -> bool:
        """Whether the gallery is enabled (otherwise nothing ever happens)."""
        return self.config.gallery_enabled

    @property
    def tips_enabled(self) -> bool:
        """Whether observed documents are matched against tips."""
        return self._accumulator is not None

    @property
    def important_gate(self) -> ImportantRecommendationGate | None:
        return self._important_gate

    @property
    def workspace_gate(self) -> WorkspaceRecommendationGate:
        return self._workspace_gate

    # ==========================================================================
    # Host API
    # ==========================================================================

    def get_recommendations(self) -> list[str]:
        """Extension ids recommended so far (persisted ones included)."""
        if self._accumulator is None:
            return []
        return self._accumulator.recommendations

    def get_workspace_recommendations(self) -> list[str]:
        """Workspace-configured recommendations, unfiltered."""
        return list(self.config.recommendations)

    def start(self) -> None:
        """
        Subscribe to documents, observe open ones, run the workspace check.

        Must be called from within a running event loop.
        """
        if not self.enabled:
            logger.debug("Extension gallery disabled, tips service inactive")
            return

        if self.tips_enabled and self._documents is not None and self._subscription is None:
            self._subscription = self._documents.on_document_added(self.observe)
            for path in self._documents.documents():
                self.observe(path)

        self.run_once()

    def observe(self, path: str) -> asyncio.Task[None] | None:
        """
        Schedule tip processing for an observed document and return at once.

        Args:
            path: File system path of the document

        Returns:
            The scheduled task (awaiting it is optional), or None when
            nothing was scheduled
        """
        if not path or self._accumulator is None:
            return None
        return self._schedule(self._suggest(path), name=f"extension-tips:{path}")

    def run_once(self) -> asyncio.Task[None] | None:
        """
        Schedule the one-shot workspace recommendation check.

        Returns:
            The scheduled task on the first call, None afterwards
        """
        if not self.enabled or self._workspace_task is not None:
            return None
        self._workspace_task = self._schedule(
            self._suggest_workspace(), name="extension-tips:workspace"
        )
        return self._workspace_task

    async def wait_idle(self) -> None:
        """Wait until every scheduled task has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def dispose(self) -> None:
        """Release the document subscription. Persisted state is already durable."""
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None

    # ==========================================================================
    # Deferred units
    # ==========================================================================

    def _schedule(
        self, coro: Coroutine[Any, Any, None], name: str
    ) -> asyncio.Task[None]:
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _suggest(self, path: str) -> None:
        assert self._accumulator is not None and self._important_gate is not None
        try:
            self._accumulator.add_matches(path)
            installed = await query_installed(self._extensions)
            self._important_gate.evaluate(path, installed)
        except Exception:
            logger.exception("Failed to process extension tips for %s", path)

    async def _suggest_workspace(self) -> None:
        try:
            await self._workspace_gate.run()
        except Exception:
            logger.exception("Failed to check workspace recommendations")
