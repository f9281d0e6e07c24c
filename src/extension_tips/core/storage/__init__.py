"""
Persisted state for extension-tips.

Provides the storage protocol, scopes, and two implementations: an
in-memory store and a JSON file store.
"""

from extension_tips.core.storage.json_store import JsonFileStorage, get_xdg_data_home
from extension_tips.core.storage.service import (
    InMemoryStorage,
    StorageScope,
    StorageService,
    load_string_list,
    store_string_list,
)

__all__ = [
    "InMemoryStorage",
    "JsonFileStorage",
    "StorageScope",
    "StorageService",
    "get_xdg_data_home",
    "load_string_list",
    "store_string_list",
]
