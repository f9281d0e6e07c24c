"""
Pytest configuration and shared fixtures.

Provides in-memory collaborators for the tips engine (storage, installed
extensions, notification sink), sample configuration, and isolated
config/data directories.
"""

import json
import os
from pathlib import Path

import pytest

from extension_tips.core.config import TipsConfig, clear_cache
from extension_tips.core.extensions import (
    ExtensionManifest,
    ExtensionType,
    LocalExtension,
    StaticExtensions,
)
from extension_tips.core.notifications import Notification
from extension_tips.core.storage import InMemoryStorage
from extension_tips.core.tips import DocumentEvents, ExtensionTipsService

# ==============================================================================
# Collaborator Fakes
# ==============================================================================


class RecordingMessages:
    """Notification sink that remembers everything it was asked to show."""

    def __init__(self) -> None:
        self.shown: list[Notification] = []

    def show(self, notification: Notification) -> None:
        self.shown.append(notification)

    def for_extension(self, extension_id: str) -> list[Notification]:
        return [n for n in self.shown if extension_id in n.recommendations]


def make_extension(identifier: str) -> LocalExtension:
    """Build an installed user extension from a ``publisher.name`` id."""
    publisher, name = identifier.split(".", 1)
    return LocalExtension(
        manifest=ExtensionManifest(publisher=publisher, name=name),
        type=ExtensionType.USER,
    )


# ==============================================================================
# Fixtures
# ==============================================================================


@pytest.fixture
def storage():
    """Provide an empty in-memory store."""
    return InMemoryStorage()


@pytest.fixture
def messages():
    """Provide a recording notification sink."""
    return RecordingMessages()


@pytest.fixture
def extensions():
    """Provide an installed-extension query with nothing installed."""
    return StaticExtensions()


@pytest.fixture
def documents():
    """Provide a document event emitter with no open documents."""
    return DocumentEvents()


@pytest.fixture
def sample_config():
    """Provide a TipsConfig with regular, important and workspace tips."""
    return TipsConfig(
        extension_tips={
            "foo.bar": "**/*.md",
            "foo.baz": "**/*.md",
            "py.lint": "**/*.py",
        },
        extension_important_tips={"ms.typescript": "**/*.ts"},
        recommendations=["pub.ext1", "pub.ext2"],
    )


@pytest.fixture
def make_service(storage, extensions, messages, documents):
    """
    Provide a factory for ExtensionTipsService wired to the shared fakes.

    Calling it twice with the same fixtures simulates a process restart
    against the same persisted state.
    """

    def factory(config: TipsConfig, **kwargs) -> ExtensionTipsService:
        kwargs.setdefault("storage", storage)
        kwargs.setdefault("extensions", extensions)
        kwargs.setdefault("messages", messages)
        kwargs.setdefault("documents", documents)
        return ExtensionTipsService(config=config, **kwargs)

    return factory


# ==============================================================================
# Environment Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """
    Provide a clean environment without EXTENSION_TIPS_* env vars.

    Points XDG config/data homes at temporary locations and clears the
    config cache so tests never read the user's real state.
    """
    for key in list(os.environ.keys()):
        if key.startswith("EXTENSION_TIPS_"):
            monkeypatch.delenv(key, raising=False)

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    clear_cache()
    yield monkeypatch
    clear_cache()


@pytest.fixture
def workspace_dir(tmp_path):
    """Provide an empty workspace directory."""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return workspace


@pytest.fixture
def user_config_dir(tmp_path):
    """Provide the XDG_CONFIG_HOME/extension-tips directory."""
    config_dir = tmp_path / "xdg-config" / "extension-tips"
    config_dir.mkdir(parents=True)
    return config_dir


def write_json(path: Path, data: object) -> Path:
    """Helper to write JSON data to a file, creating parents."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))
    return path
