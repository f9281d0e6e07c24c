"""Installed-extension models and queries."""

from extension_tips.core.extensions.models import (
    ExtensionManifest,
    ExtensionType,
    LocalExtension,
    installed_identifiers,
)
from extension_tips.core.extensions.scanner import (
    ExtensionManagementService,
    ExtensionsDirectory,
    StaticExtensions,
)

__all__ = [
    "ExtensionManagementService",
    "ExtensionManifest",
    "ExtensionType",
    "ExtensionsDirectory",
    "LocalExtension",
    "StaticExtensions",
    "installed_identifiers",
]
