"""
Configuration models and loading.

This module provides Pydantic models for extension-tips configuration
with multi-layer merging: defaults < user < workspace < env vars.
"""

from .loader import (
    clear_cache,
    get_user_config_path,
    get_workspace_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import TipsConfig

__all__ = [
    # Models
    "TipsConfig",
    # Loader functions
    "clear_cache",
    "get_user_config_path",
    "get_workspace_config_path",
    "get_xdg_config_home",
    "load_config",
]
