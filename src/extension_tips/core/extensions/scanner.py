"""
Installed-extension queries.

Defines the protocol the engine uses to ask which extensions are
installed, and an implementation that scans an extensions directory laid
out as one folder per extension, each holding a package.json manifest.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import ValidationError

from extension_tips.core.extensions.models import (
    ExtensionManifest,
    ExtensionType,
    LocalExtension,
)

logger = logging.getLogger(__name__)

MANIFEST_FILE = "package.json"


@runtime_checkable
class ExtensionManagementService(Protocol):
    """Protocol for asynchronous installed-extension queries."""

    async def get_installed(
        self, type: ExtensionType | None = None
    ) -> list[LocalExtension]:
        """
        List installed extensions.

        Args:
            type: Restrict to one extension type (None = all)

        Returns:
            Installed extensions in discovery order
        """
        ...


class StaticExtensions:
    """Fixed list of installed extensions, for hosts that already know them."""

    def __init__(self, extensions: list[LocalExtension] | None = None) -> None:
        self.extensions = list(extensions or [])

    async def get_installed(
        self, type: ExtensionType | None = None
    ) -> list[LocalExtension]:
        if type is None:
            return list(self.extensions)
        return [ext for ext in self.extensions if ext.type == type]


class ExtensionsDirectory:
    """
    Scans an extensions directory for installed user extensions.

    Each immediate subdirectory containing a readable package.json with a
    publisher and name counts as one installed extension. Anything else is
    skipped.

    Example:
        >>> extensions = ExtensionsDirectory(Path.home() / ".vscode" / "extensions")
        >>> installed = await extensions.get_installed(ExtensionType.USER)
    """

    def __init__(self, extensions_dir: Path) -> None:
        """
        Initialize scanner.

        Args:
            extensions_dir: Directory holding one folder per extension
        """
        self.extensions_dir = Path(extensions_dir)

    async def get_installed(
        self, type: ExtensionType | None = None
    ) -> list[LocalExtension]:
        """Scan the directory in a worker thread."""
        if type is not None and type != ExtensionType.USER:
            return []
        return await asyncio.to_thread(self.scan)

    def scan(self) -> list[LocalExtension]:
        """
        Read manifests synchronously.

        Returns:
            Installed extensions sorted by folder name
        """
        if not self.extensions_dir.is_dir():
            logger.debug("Extensions directory %s does not exist", self.extensions_dir)
            return []

        extensions: list[LocalExtension] = []
        for folder in sorted(self.extensions_dir.iterdir()):
            manifest_path = folder / MANIFEST_FILE
            if not manifest_path.is_file():
                continue

            manifest = self._read_manifest(manifest_path)
            if manifest is not None:
                extensions.append(
                    LocalExtension(manifest=manifest, type=ExtensionType.USER, path=folder)
                )

        return extensions

    def _read_manifest(self, path: Path) -> ExtensionManifest | None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return ExtensionManifest.model_validate(data)
        except (json.JSONDecodeError, OSError, ValidationError) as e:
            logger.debug("Skipping unreadable manifest %s: %s", path, e)
            return None
