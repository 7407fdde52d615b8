"""Workspace file discovery and loading."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from pydantic import ValidationError

from ..core.exceptions import ConfigFileError, WorkspaceNotFoundError
from ..core.models.workspace import WorkspaceDefinition

DEFAULT_WORKSPACE_FILE = "workspace.toml"


@dataclass(frozen=True)
class Workspace:
    """A loaded workspace rooted at the directory holding its file."""

    root: Path
    definition: WorkspaceDefinition

    @classmethod
    def empty(cls, root: Path) -> Workspace:
        """A workspace with no projects, for runs driven purely by CLI flags."""
        return cls(root=root, definition=WorkspaceDefinition())


def find_workspace_file(
    start_dir: str | Path | None = None,
    file_name: str = DEFAULT_WORKSPACE_FILE,
) -> Path | None:
    """
    Find the workspace file by walking up from start_dir (or cwd).

    Returns:
        Path to the workspace file, or None if not found.
    """
    start = Path(start_dir) if start_dir else Path.cwd()
    for parent in [start, *list(start.parents)]:
        candidate = parent / file_name
        if candidate.is_file():
            return candidate
    return None


def load_workspace(path: Path) -> Workspace:
    """
    Load and validate a workspace file.

    Raises:
        ConfigFileError: If the file cannot be read, parsed or validated
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigFileError(
            f"Failed to parse workspace file: {e}", file_path=str(path), cause=e
        ) from e
    except OSError as e:
        raise ConfigFileError(
            f"Failed to read workspace file: {e}", file_path=str(path), cause=e
        ) from e

    try:
        definition = WorkspaceDefinition.model_validate(data)
    except ValidationError as e:
        raise ConfigFileError(
            "Workspace file is invalid",
            file_path=str(path),
            context={"errors": [err["msg"] for err in e.errors()]},
            cause=e,
        ) from e

    return Workspace(root=path.parent.resolve(), definition=definition)


def discover_workspace(
    start_dir: str | Path | None = None,
    file_name: str = DEFAULT_WORKSPACE_FILE,
) -> Workspace:
    """
    Find and load the workspace enclosing start_dir.

    Raises:
        WorkspaceNotFoundError: If no workspace file exists up the tree
    """
    path = find_workspace_file(start_dir, file_name)
    if path is None:
        raise WorkspaceNotFoundError(
            f"No {file_name} found in {start_dir or Path.cwd()} or any parent directory",
            hint=f"Create a {file_name} declaring your projects, or pass options as flags.",
        )
    return load_workspace(path)
