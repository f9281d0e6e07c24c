"""
JSON file backed key-value storage.

Each scope is a flat JSON object on disk:

    GLOBAL    -> $XDG_DATA_HOME/extension-tips/state.json
    WORKSPACE -> <workspace>/.extension-tips/state.json

Writes go through a temp file in the same directory followed by a rename,
so a failed write never leaves a truncated state file behind.

Example:
    >>> store = JsonFileStorage.default(workspace_dir=Path.cwd())
    >>> store.store("extensionsAssistant/recommendations", '["foo.bar"]', StorageScope.GLOBAL)
    >>> store.get("extensionsAssistant/recommendations", StorageScope.GLOBAL)
    '["foo.bar"]'
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from extension_tips.core.exceptions import StorageError
from extension_tips.core.storage.service import StorageScope, to_storage_value

logger = logging.getLogger(__name__)

STATE_FILE = "state.json"


def get_xdg_data_home() -> Path:
    """
    Get XDG data home directory.

    Returns:
        Path to data directory (defaults to ~/.local/share)
    """
    if xdg_home := os.environ.get("XDG_DATA_HOME"):
        return Path(xdg_home)
    return Path.home() / ".local" / "share"


class JsonFileStorage:
    """
    Storage persisting each scope to its own JSON file.

    Files are read once, lazily, on first access to a scope; afterwards the
    in-memory copy is authoritative and every mutation is written through.
    A state file that can't be parsed is treated as empty.
    """

    def __init__(self, global_path: Path, workspace_path: Path) -> None:
        """
        Initialize storage with one file per scope.

        Args:
            global_path: JSON file for GLOBAL scope
            workspace_path: JSON file for WORKSPACE scope
        """
        self._paths = {
            StorageScope.GLOBAL: Path(global_path),
            StorageScope.WORKSPACE: Path(workspace_path),
        }
        self._cache: dict[StorageScope, dict[str, str]] = {}

    @classmethod
    def default(cls, workspace_dir: Path | None = None) -> JsonFileStorage:
        """
        Create storage at the standard locations.

        Args:
            workspace_dir: Workspace root (defaults to cwd)

        Returns:
            JsonFileStorage for the user data dir and the workspace
        """
        workspace_dir = workspace_dir or Path.cwd()
        return cls(
            global_path=get_xdg_data_home() / "extension-tips" / STATE_FILE,
            workspace_path=workspace_dir / ".extension-tips" / STATE_FILE,
        )

    def path_for(self, scope: StorageScope) -> Path:
        """Get the file backing scope."""
        return self._paths[scope]

    def get(self, key: str, scope: StorageScope, default: str | None = None) -> str | None:
        return self._load(scope).get(key, default)

    def get_boolean(self, key: str, scope: StorageScope, default: bool = False) -> bool:
        value = self._load(scope).get(key)
        if value is None:
            return default
        return value == "true"

    def store(self, key: str, value: str | bool | int, scope: StorageScope) -> None:
        """
        Persist value under key, writing the scope file atomically.

        The in-memory value is updated before the write so the current
        process keeps a correct view even if the disk write fails.

        Raises:
            StorageError: If the scope file cannot be written
        """
        data = self._load(scope)
        data[key] = to_storage_value(value)
        self._write(scope, data)

    def remove(self, key: str, scope: StorageScope) -> None:
        data = self._load(scope)
        if data.pop(key, None) is not None:
            self._write(scope, data)

    def _load(self, scope: StorageScope) -> dict[str, str]:
        if scope in self._cache:
            return self._cache[scope]

        path = self._paths[scope]
        data: dict[str, str] = {}
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                if isinstance(raw, dict):
                    data = {str(k): to_storage_value(v) for k, v in raw.items()}
                else:
                    logger.debug("State file %s is not an object, starting empty", path)
            except (json.JSONDecodeError, OSError) as e:
                logger.debug("Could not read state file %s: %s", path, e)

        self._cache[scope] = data
        return data

    def _write(self, scope: StorageScope, data: dict[str, str]) -> None:
        path = self._paths[scope]
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=path.parent,
                delete=False,
                suffix=".tmp",
            ) as tmp:
                json.dump(data, tmp, indent=2, sort_keys=True)
                tmp.flush()
                tmp_path = Path(tmp.name)

            tmp_path.replace(path)
        except OSError as e:
            raise StorageError(
                f"Failed to write {scope.value} state to {path}: {e}",
                path=str(path),
                scope=scope.value,
            ) from e
