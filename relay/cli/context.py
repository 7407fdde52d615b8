"""
Click context extension for relay CLI.

Provides RelayContext dataclass that holds relay-specific data
passed through the Click command chain via ctx.obj.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..architect.workspace import Workspace, discover_workspace, find_workspace_file
from ..core.exceptions import ConfigFileError


@dataclass
class RelayContext:
    """Extended context passed through Click command chain.

    Attributes:
        cwd: Current working directory
        workspace_file: Path to the enclosing workspace file (None if absent)
        config: Loaded configuration dictionary
    """

    cwd: Path
    workspace_file: Path | None
    config: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, cwd: Path | None = None) -> RelayContext:
        """Create a RelayContext for the current environment.

        Args:
            cwd: Working directory override (defaults to Path.cwd())
        """
        if cwd is None:
            cwd = Path.cwd()

        config = cls._load_config(cwd)
        file_name = config.get("workspace", {}).get("file", "workspace.toml")

        return cls(
            cwd=cwd,
            workspace_file=find_workspace_file(cwd, file_name),
            config=config,
        )

    @staticmethod
    def _load_config(start_dir: Path) -> dict[str, Any]:
        """Load relay configuration (empty if not found or invalid)."""
        try:
            from ..config import load_config

            return load_config(start_dir=str(start_dir))
        except (ConfigFileError, ValueError):
            return {}

    @property
    def has_workspace(self) -> bool:
        return self.workspace_file is not None

    def load_workspace(self, required: bool = True) -> Workspace:
        """
        Load the enclosing workspace.

        When `required` is False and no workspace file exists, an empty
        workspace rooted at cwd is returned instead of raising.

        Raises:
            WorkspaceNotFoundError: If required and no workspace file exists
            ConfigFileError: If the workspace file is invalid
        """
        if self.workspace_file is None and not required:
            return Workspace.empty(self.cwd)
        file_name = self.config.get("workspace", {}).get("file", "workspace.toml")
        return discover_workspace(self.cwd, file_name)
