"""
Data models for installed extensions.

Only the parts of an extension manifest needed to decide whether a
recommendation is already satisfied are modelled.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ExtensionType(str, Enum):
    """Where an installed extension comes from."""

    SYSTEM = "system"  # Bundled with the host
    USER = "user"  # Installed by the user


class ExtensionManifest(BaseModel):
    """The identifying fields of an extension's package.json."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    publisher: str = Field(..., min_length=1, description="Publisher id")
    name: str = Field(..., min_length=1, description="Extension name")
    version: str = Field(default="0.0.0", description="Extension version")


class LocalExtension(BaseModel):
    """
    An extension installed on this machine.

    Example:
        >>> ext = LocalExtension(manifest=ExtensionManifest(publisher="pub", name="ext1"))
        >>> ext.identifier
        'pub.ext1'
    """

    model_config = ConfigDict(frozen=True)

    manifest: ExtensionManifest
    type: ExtensionType = Field(default=ExtensionType.USER)
    path: Path | None = Field(default=None, description="Install folder, when known")

    @property
    def identifier(self) -> str:
        """Recommendation key for this extension (``publisher.name``)."""
        return f"{self.manifest.publisher}.{self.manifest.name}"


def installed_identifiers(extensions: list[LocalExtension]) -> set[str]:
    """Collect the ``publisher.name`` keys of installed extensions."""
    return {ext.identifier for ext in extensions}
