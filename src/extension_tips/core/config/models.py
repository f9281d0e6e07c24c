"""
Configuration data models for extension-tips.

These models define the structure of ~/.config/extension-tips/config.json
and <workspace>/.extension-tips.json files, with validation via Pydantic.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TipsConfig(BaseModel):
    """
    Tip data and workspace recommendations driving the engine.

    ``extension_tips`` and ``extension_important_tips`` are flat mappings of
    extension id (``publisher.name``) to a glob pattern. When
    ``extension_tips`` is absent or empty, observed documents are ignored
    (important tips included); the workspace check still runs.

    Example:
        >>> config = TipsConfig(
        ...     extension_tips={"foo.bar": "**/*.md"},
        ...     recommendations=["pub.ext1"],
        ... )
        >>> config.has_tips
        True
    """

    extension_tips: Optional[dict[str, str]] = Field(
        default=None,
        description="Extension id -> glob pattern; ids sharing a pattern are grouped"
    )
    extension_important_tips: dict[str, str] = Field(
        default_factory=dict,
        description="Extension id -> glob pattern for individually notified tips"
    )
    recommendations: list[str] = Field(
        default_factory=list,
        description="Extension ids recommended by the current workspace"
    )
    gallery_enabled: bool = Field(
        default=True,
        description="When false the whole tips service stays inert"
    )
    extensions_dir: Optional[Path] = Field(
        default=None,
        description="Directory holding installed user extensions (one folder each)"
    )

    model_config = ConfigDict(
        extra="allow",  # Allow extra fields for forward compatibility
        validate_assignment=True,
    )

    @field_validator("extension_important_tips", mode="before")
    @classmethod
    def validate_important_tips(cls, v: Optional[dict[str, str]]) -> dict[str, str]:
        """Treat an explicit null as an empty mapping."""
        return v or {}

    @field_validator("recommendations", mode="before")
    @classmethod
    def validate_recommendations(cls, v: Optional[list[str]]) -> list[str]:
        """Treat an explicit null as no recommendations."""
        return v or []

    @field_validator("extensions_dir")
    @classmethod
    def expand_extensions_dir(cls, v: Optional[Path]) -> Optional[Path]:
        """Expand a leading ~ in the extensions directory."""
        return v.expanduser() if v is not None else None

    @property
    def has_tips(self) -> bool:
        """Whether any file-based tips are configured."""
        return bool(self.extension_tips)
