"""
Key-value storage for persisted tip state.

Values are stored as strings in one of two scopes: GLOBAL (shared by every
workspace of the user) and WORKSPACE (the currently open workspace only).
List-valued entries are JSON-encoded arrays of strings.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class StorageScope(str, Enum):
    """Where a stored value lives."""

    GLOBAL = "global"
    WORKSPACE = "workspace"


def to_storage_value(value: str | bool | int) -> str:
    """Convert a value to the string form kept by stores."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@runtime_checkable
class StorageService(Protocol):
    """
    Protocol for key-value stores holding persisted state.

    Implementations are the single source of truth for hydration and the
    single sink for every mutation of engine state.
    """

    def get(self, key: str, scope: StorageScope, default: str | None = None) -> str | None:
        """Return the stored string for key, or default when missing."""
        ...

    def get_boolean(self, key: str, scope: StorageScope, default: bool = False) -> bool:
        """Return the stored value for key interpreted as a boolean."""
        ...

    def store(self, key: str, value: str | bool | int, scope: StorageScope) -> None:
        """Persist value under key in scope."""
        ...

    def remove(self, key: str, scope: StorageScope) -> None:
        """Delete key from scope (no-op when missing)."""
        ...


class InMemoryStorage:
    """
    Storage kept in process memory.

    Useful for tests and for hosts that manage durability themselves.
    Two engines sharing one instance behave like two process runs sharing
    the same on-disk state.
    """

    def __init__(self) -> None:
        self._data: dict[StorageScope, dict[str, str]] = {
            StorageScope.GLOBAL: {},
            StorageScope.WORKSPACE: {},
        }

    def get(self, key: str, scope: StorageScope, default: str | None = None) -> str | None:
        return self._data[scope].get(key, default)

    def get_boolean(self, key: str, scope: StorageScope, default: bool = False) -> bool:
        value = self._data[scope].get(key)
        if value is None:
            return default
        return value == "true"

    def store(self, key: str, value: str | bool | int, scope: StorageScope) -> None:
        self._data[scope][key] = to_storage_value(value)

    def remove(self, key: str, scope: StorageScope) -> None:
        self._data[scope].pop(key, None)

    def snapshot(self, scope: StorageScope) -> dict[str, str]:
        """Return a copy of all values held in scope."""
        return dict(self._data[scope])


def load_string_list(storage: StorageService, key: str, scope: StorageScope) -> list[str]:
    """
    Read a JSON array of strings from storage.

    Missing keys, invalid JSON and values that are not arrays all read as
    an empty list. Non-string entries are dropped.

    Args:
        storage: Store to read from
        key: Storage key
        scope: Storage scope

    Returns:
        The stored list, or [] when absent or malformed
    """
    raw = storage.get(key, scope, "[]")
    try:
        data = json.loads(raw or "[]")
    except (json.JSONDecodeError, TypeError):
        logger.debug("Discarding unparseable value for %s (%s scope)", key, scope.value)
        return []

    if not isinstance(data, list):
        logger.debug("Discarding non-list value for %s (%s scope)", key, scope.value)
        return []

    return [item for item in data if isinstance(item, str)]


def store_string_list(
    storage: StorageService, key: str, values: list[str], scope: StorageScope
) -> None:
    """Write values to storage as a JSON array of strings."""
    storage.store(key, json.dumps(values), scope)
