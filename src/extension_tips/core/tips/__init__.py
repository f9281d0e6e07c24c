"""
Extension tips engine.

Matches observed documents against glob-pattern tips, accumulates the
recommended extension ids, and notifies for important and workspace
recommendations unless they are installed or were dismissed for good.
"""

from extension_tips.core.tips.accumulator import RECOMMENDATIONS_KEY, RecommendationAccumulator
from extension_tips.core.tips.documents import (
    Disposable,
    DocumentEvents,
    DocumentEventSource,
)
from extension_tips.core.tips.gates import (
    IMPORTANT_IGNORE_KEY,
    WORKSPACE_IGNORE_KEY,
    ImportantRecommendationGate,
    WorkspaceRecommendationGate,
)
from extension_tips.core.tips.glob import expand_braces, match_glob
from extension_tips.core.tips.index import build_pattern_index
from extension_tips.core.tips.service import ExtensionTipsService

__all__ = [
    # Storage keys
    "IMPORTANT_IGNORE_KEY",
    "RECOMMENDATIONS_KEY",
    "WORKSPACE_IGNORE_KEY",
    # Components
    "ImportantRecommendationGate",
    "RecommendationAccumulator",
    "WorkspaceRecommendationGate",
    "build_pattern_index",
    "expand_braces",
    "match_glob",
    # Documents
    "Disposable",
    "DocumentEventSource",
    "DocumentEvents",
    # Service
    "ExtensionTipsService",
]
