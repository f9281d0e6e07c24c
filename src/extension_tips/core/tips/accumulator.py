"""
Recommendation accumulator.

Holds every extension id recommended so far. The set is seeded from
storage, only ever grows, and is written back whenever a document adds
new ids.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from extension_tips.core.exceptions import StorageError
from extension_tips.core.storage import (
    StorageScope,
    StorageService,
    load_string_list,
    store_string_list,
)
from extension_tips.core.tips.glob import GlobMatcher, match_glob

logger = logging.getLogger(__name__)

RECOMMENDATIONS_KEY = "extensionsAssistant/recommendations"


class RecommendationAccumulator:
    """
    Accumulates recommendations for observed documents.

    Example:
        >>> index = build_pattern_index({"foo.bar": "**/*.md"})
        >>> accumulator = RecommendationAccumulator(InMemoryStorage(), index)
        >>> accumulator.add_matches("README.md")
        ['foo.bar']
        >>> accumulator.recommendations
        ['foo.bar']
    """

    def __init__(
        self,
        storage: StorageService,
        index: Mapping[str, tuple[str, ...]],
        matcher: GlobMatcher = match_glob,
    ) -> None:
        """
        Initialize and hydrate from storage.

        Args:
            storage: Store holding the persisted recommendation list
            index: Pattern index built from the tip map
            matcher: Glob matcher (pattern, path) -> bool
        """
        self._storage = storage
        self._index = index
        self._matcher = matcher
        # dict keys keep the set ordered by first recommendation
        self._recommendations: dict[str, None] = dict.fromkeys(
            load_string_list(storage, RECOMMENDATIONS_KEY, StorageScope.GLOBAL)
        )

    @property
    def recommendations(self) -> list[str]:
        """Ids recommended so far."""
        return list(self._recommendations)

    def __contains__(self, extension_id: object) -> bool:
        return extension_id in self._recommendations

    def add_matches(self, path: str) -> list[str]:
        """
        Add the ids of every pattern matching path, then persist if grown.

        Matcher exceptions propagate; nothing is persisted in that case.

        Args:
            path: Path of the observed document

        Returns:
            Ids newly added by this document (empty if none)
        """
        added: list[str] = []
        for pattern, ids in self._index.items():
            if not self._matcher(pattern, path):
                continue
            for extension_id in ids:
                if extension_id not in self._recommendations:
                    self._recommendations[extension_id] = None
                    added.append(extension_id)

        if added:
            logger.debug("Recommending %s for %s", ", ".join(added), path)
            self._persist()

        return added

    def _persist(self) -> None:
        try:
            store_string_list(
                self._storage, RECOMMENDATIONS_KEY, self.recommendations, StorageScope.GLOBAL
            )
        except StorageError as e:
            logger.warning("Could not persist recommendations: %s", e)
