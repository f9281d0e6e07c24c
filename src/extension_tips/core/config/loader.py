"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < workspace config < env vars
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from extension_tips.core.exceptions import ConfigError

from .models import TipsConfig

logger = logging.getLogger(__name__)

# Global cache to avoid reloading config multiple times per session
_config_cache: TipsConfig | None = None


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """
    Get path to user configuration file.

    Returns:
        Path to ~/.config/extension-tips/config.json (or XDG equivalent)
    """
    return get_xdg_config_home() / "extension-tips" / "config.json"


def get_workspace_config_path(workspace_dir: Path | None = None) -> Path:
    """
    Get path to workspace configuration file.

    Args:
        workspace_dir: Workspace root (defaults to current directory)

    Returns:
        Path to .extension-tips.json in the workspace root
    """
    if workspace_dir is None:
        workspace_dir = Path.cwd()
    return workspace_dir / ".extension-tips.json"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`. Nested
    dicts are merged, everything else is replaced.

    Example:
        >>> deep_merge({"a": 1, "b": {"x": 10}}, {"b": {"y": 20}})
        {'a': 1, 'b': {'x': 10, 'y': 20}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            logger.warning("Ignoring config at %s: top-level value is not an object", path)
            return None
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        EXTENSION_TIPS_GALLERY_ENABLED - overrides gallery_enabled
        EXTENSION_TIPS_EXTENSIONS_DIR - overrides extensions_dir

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if enabled_str := os.environ.get("EXTENSION_TIPS_GALLERY_ENABLED"):
        result["gallery_enabled"] = enabled_str.lower() not in ("false", "0", "no")

    if extensions_dir := os.environ.get("EXTENSION_TIPS_EXTENSIONS_DIR"):
        result["extensions_dir"] = extensions_dir

    return result


def get_default_config() -> dict[str, Any]:
    """
    Get hardcoded default configuration.

    Returns:
        Dictionary with default configuration values
    """
    return {
        "extension_tips": None,
        "extension_important_tips": {},
        "recommendations": [],
        "gallery_enabled": True,
        "extensions_dir": None,
    }


def load_config(workspace_dir: Path | None = None, use_cache: bool = True) -> TipsConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (EXTENSION_TIPS_*)
        2. Workspace config (.extension-tips.json)
        3. User config (~/.config/extension-tips/config.json)
        4. Hardcoded defaults

    Args:
        workspace_dir: Workspace to load .extension-tips.json from (defaults to cwd)
        use_cache: If True, return cached config from previous load

    Returns:
        Validated TipsConfig instance

    Raises:
        ConfigError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = get_default_config()

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if workspace_config := load_json_file(get_workspace_config_path(workspace_dir)):
        merged = deep_merge(merged, workspace_config)

    merged = apply_env_overrides(merged)

    try:
        config = TipsConfig(**merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid extension-tips configuration: {e}") from e

    _config_cache = config

    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
