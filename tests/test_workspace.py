"""Tests for oratory.workspace module."""

from __future__ import annotations

from pathlib import Path

from oratory.config import load_config
from oratory.workspace import Workspace, find_workspace_dir


class TestWorkspace:
    def test_create(self, tmp_path: Path) -> None:
        workspace = Workspace(tmp_path / "talks")
        assert not workspace.exists()

        workspace.create(language="es")

        assert workspace.exists()
        assert workspace.sessions_dir.is_dir()
        config = load_config(workspace.path)
        assert config.workspace_name == "talks"
        assert config.default_language == "es"

    def test_paths(self, tmp_path: Path) -> None:
        workspace = Workspace(tmp_path)
        assert workspace.config_path == tmp_path / "oratory.yaml"
        assert workspace.sessions_dir == tmp_path / "sessions"


class TestFindWorkspaceDir:
    def test_finds_in_current(self, tmp_workspace: Path) -> None:
        assert find_workspace_dir(tmp_workspace) == tmp_workspace.resolve()

    def test_finds_from_subdirectory(self, tmp_workspace: Path) -> None:
        nested = tmp_workspace / "recordings" / "march"
        nested.mkdir(parents=True)
        assert find_workspace_dir(nested) == tmp_workspace.resolve()

    def test_none_outside_workspace(self, tmp_path: Path) -> None:
        assert find_workspace_dir(tmp_path) is None
