"""
Tests for the extension-tips CLI.

Commands run end to end against JSON stores under temporary XDG and
workspace directories.
"""

import json
from unittest.mock import patch

import pytest
from conftest import write_json
from typer.testing import CliRunner

from extension_tips import __version__
from extension_tips.cli import app
from extension_tips.core.storage import JsonFileStorage, StorageScope
from extension_tips.core.tips import (
    IMPORTANT_IGNORE_KEY,
    RECOMMENDATIONS_KEY,
    WORKSPACE_IGNORE_KEY,
)

runner = CliRunner()


@pytest.fixture
def configured_workspace(workspace_dir, tmp_path):
    """Provide a workspace with tips and one installed extension."""
    extensions_dir = tmp_path / "extensions"
    write_json(
        extensions_dir / "pub.ext1-1.0.0" / "package.json",
        {"publisher": "pub", "name": "ext1", "version": "1.0.0"},
    )
    write_json(
        workspace_dir / ".extension-tips.json",
        {
            "extension_tips": {"foo.bar": "**/*.md", "py.lint": "**/*.py"},
            "extension_important_tips": {"ms.typescript": "**/*.ts"},
            "recommendations": ["pub.ext1", "pub.ext2"],
            "extensions_dir": str(extensions_dir),
        },
    )
    return workspace_dir


def invoke(workspace_dir, *args):
    return runner.invoke(app, ["-w", str(workspace_dir), *args])


class TestRoot:
    """Test the root command."""

    def test_version(self):
        """Test --version prints the version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestMatch:
    """Test the match command."""

    def test_match_json(self, configured_workspace):
        """Test matching documents outputs recommendations as JSON."""
        result = invoke(configured_workspace, "match", "README.md", "--json")

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data == {
            "observed": ["README.md"],
            "recommendations": ["foo.bar"],
            "notifications": [],
        }

    def test_match_json_with_important_tip(self, configured_workspace):
        """Test notifications go into the JSON document, not around it."""
        result = invoke(configured_workspace, "match", "app.ts", "--json")

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["recommendations"] == []
        [notification] = data["notifications"]
        assert notification["recommendations"] == ["ms.typescript"]
        assert notification["message"] == (
            "It is recommended to install the 'ms.typescript' extension."
        )

    def test_match_json_never_prompts(self, configured_workspace):
        """Test --json ignores --interactive."""
        with patch("extension_tips.core.notifications.service.Prompt.ask") as ask:
            result = invoke(configured_workspace, "match", "app.ts", "--json", "-i")

        assert result.exit_code == 0
        ask.assert_not_called()
        json.loads(result.stdout)

    def test_match_persists(self, configured_workspace):
        """Test recommendations accumulate across invocations."""
        invoke(configured_workspace, "match", "README.md")
        result = invoke(configured_workspace, "match", "tool.py", "--json")

        data = json.loads(result.stdout)
        assert data["recommendations"] == ["foo.bar", "py.lint"]

    def test_match_table(self, configured_workspace):
        """Test the default output lists recommendations."""
        result = invoke(configured_workspace, "match", "README.md")

        assert result.exit_code == 0
        assert "foo.bar" in result.stdout

    def test_match_nothing(self, configured_workspace):
        """Test a document matching no tip."""
        result = invoke(configured_workspace, "match", "main.go")

        assert result.exit_code == 0
        assert "No recommendations yet." in result.stdout

    def test_match_important_tip(self, configured_workspace):
        """Test an important tip prints its notification."""
        result = invoke(configured_workspace, "match", "app.ts")

        assert result.exit_code == 0
        assert "ms.typescript" in result.stdout
        assert "Don't show again" in result.stdout

    def test_match_interactive_never_show_again(self, configured_workspace):
        """Test choosing "Don't show again" persists the ignore list."""
        with patch("extension_tips.core.notifications.service.Prompt.ask", return_value="2"):
            result = invoke(configured_workspace, "match", "app.ts", "-i")

        assert result.exit_code == 0
        storage = JsonFileStorage.default(configured_workspace)
        assert json.loads(storage.get(IMPORTANT_IGNORE_KEY, StorageScope.GLOBAL)) == [
            "ms.typescript"
        ]

    def test_match_without_tips(self, workspace_dir):
        """Test the command exits cleanly with no tips configured."""
        result = invoke(workspace_dir, "match", "README.md")

        assert result.exit_code == 0
        assert "No extension tips configured." in result.stdout

    def test_match_gallery_disabled(self, configured_workspace, monkeypatch):
        """Test nothing happens when the gallery is disabled."""
        monkeypatch.setenv("EXTENSION_TIPS_GALLERY_ENABLED", "false")

        result = invoke(configured_workspace, "match", "README.md")

        assert result.exit_code == 0
        assert "Extension gallery is disabled" in result.stdout

    def test_invalid_config(self, workspace_dir):
        """Test an invalid config file exits with an error."""
        write_json(workspace_dir / ".extension-tips.json", {"recommendations": 42})

        result = invoke(workspace_dir, "match", "README.md")

        assert result.exit_code == 1
        assert "Error" in result.stdout


class TestWorkspace:
    """Test the workspace command."""

    def test_workspace_lists_missing(self, configured_workspace):
        """Test only uninstalled recommendations are shown."""
        result = invoke(configured_workspace, "workspace")

        assert result.exit_code == 0
        assert "This workspace has extension recommendations." in result.stdout
        assert "pub.ext2" in result.stdout

    def test_workspace_dismiss(self, configured_workspace):
        """Test dismissing interactively silences later runs."""
        with patch("extension_tips.core.notifications.service.Prompt.ask", return_value="2"):
            invoke(configured_workspace, "workspace", "-i")

        result = invoke(configured_workspace, "workspace")

        assert result.exit_code == 0
        assert "Workspace recommendations were dismissed." in result.stdout


class TestState:
    """Test the state and reset commands."""

    def test_state_json(self, configured_workspace):
        """Test state reflects persisted entries."""
        invoke(configured_workspace, "match", "README.md")

        result = invoke(configured_workspace, "state", "--json")

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["recommendations"] == ["foo.bar"]
        assert data["important_ignore"] == []
        assert data["workspace_dismissed"] is False
        assert data["files"]["workspace"] == str(
            configured_workspace / ".extension-tips" / "state.json"
        )

    def test_state_table(self, workspace_dir):
        """Test the default state output."""
        result = invoke(workspace_dir, "state")

        assert result.exit_code == 0
        assert "Workspace dismissed" in result.stdout

    def test_reset_all(self, workspace_dir):
        """Test reset without flags clears every entry."""
        storage = JsonFileStorage.default(workspace_dir)
        storage.store(RECOMMENDATIONS_KEY, '["foo.bar"]', StorageScope.GLOBAL)
        storage.store(IMPORTANT_IGNORE_KEY, '["ms.typescript"]', StorageScope.GLOBAL)
        storage.store(WORKSPACE_IGNORE_KEY, True, StorageScope.WORKSPACE)

        result = invoke(workspace_dir, "reset")

        assert result.exit_code == 0
        assert "Cleared 3 entries." in result.stdout
        reopened = JsonFileStorage.default(workspace_dir)
        assert reopened.get(RECOMMENDATIONS_KEY, StorageScope.GLOBAL) is None
        assert reopened.get(IMPORTANT_IGNORE_KEY, StorageScope.GLOBAL) is None
        assert reopened.get(WORKSPACE_IGNORE_KEY, StorageScope.WORKSPACE) is None

    def test_reset_workspace_only(self, workspace_dir):
        """Test --workspace clears only the dismissal flag."""
        storage = JsonFileStorage.default(workspace_dir)
        storage.store(RECOMMENDATIONS_KEY, '["foo.bar"]', StorageScope.GLOBAL)
        storage.store(WORKSPACE_IGNORE_KEY, True, StorageScope.WORKSPACE)

        result = invoke(workspace_dir, "reset", "--workspace")

        assert result.exit_code == 0
        assert "Cleared 1 entry." in result.stdout
        reopened = JsonFileStorage.default(workspace_dir)
        assert reopened.get(RECOMMENDATIONS_KEY, StorageScope.GLOBAL) == '["foo.bar"]'
        assert reopened.get_boolean(WORKSPACE_IGNORE_KEY, StorageScope.WORKSPACE) is False
