"""
Pattern index: glob pattern -> extension ids recommended for it.
"""

from collections.abc import Mapping
from types import MappingProxyType


def build_pattern_index(
    tip_map: Mapping[str, str] | None,
) -> Mapping[str, tuple[str, ...]]:
    """
    Group a flat ``extension id -> pattern`` mapping by pattern.

    Ids sharing a pattern keep the order they appear in ``tip_map``. The
    result is read-only. No glob validation happens here.

    Args:
        tip_map: Extension id to glob pattern (None or empty = no tips)

    Returns:
        Read-only mapping of pattern to the ids it recommends

    Example:
        >>> index = build_pattern_index({"ext.foo1": "**/*.md", "ext.bar2": "**/*.md"})
        >>> index["**/*.md"]
        ('ext.foo1', 'ext.bar2')
    """
    grouped: dict[str, list[str]] = {}
    for extension_id, pattern in (tip_map or {}).items():
        grouped.setdefault(pattern, []).append(extension_id)

    return MappingProxyType({pattern: tuple(ids) for pattern, ids in grouped.items()})
