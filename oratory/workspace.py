"""
oratory.workspace - Workspace directory management.

A workspace holds the oratory.yaml configuration and the session store.
"""

from __future__ import annotations

from pathlib import Path

from oratory.config import CONFIG_FILENAME, create_default_config, write_config


class Workspace:
    """Represents an Oratory workspace directory."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.config_path = path / CONFIG_FILENAME

    @property
    def sessions_dir(self) -> Path:
        return self.path / "sessions"

    def exists(self) -> bool:
        return self.config_path.exists()

    def create(self, language: str = "en") -> None:
        """Create the workspace directory structure and default config."""
        self.path.mkdir(parents=True, exist_ok=True)
        self.sessions_dir.mkdir(exist_ok=True)

        config = create_default_config(self.path.name, language)
        write_config(config, self.config_path)


def find_workspace_dir(start: Path | None = None) -> Path | None:
    """Find the workspace directory by looking for oratory.yaml upwards."""
    current = (start or Path.cwd()).resolve()
    while True:
        if (current / CONFIG_FILENAME).exists():
            return current
        if current == current.parent:
            return None
        current = current.parent
