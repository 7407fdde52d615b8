"""
Workspace models.

A workspace file declares projects, their targets, and the builder each
target runs:

    [projects.app]
    root = "."

    [projects.app.targets.serve]
    builder = "relay:dev-server"
    options = { command = ["python", "-m", "http.server", "{port}"], port = 4200 }

    [projects.app.targets.serve.configurations.production]
    ssl = true
"""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field

from .base import RelayBaseModel


class WorkspaceBaseModel(RelayBaseModel):
    """Workspace sections are read from TOML, so coercion is allowed."""

    model_config = ConfigDict(
        strict=False,
        validate_assignment=True,
        extra="forbid",
        populate_by_name=True,
        revalidate_instances="never",
    )


class TargetDefinition(WorkspaceBaseModel):
    """One runnable target of a project."""

    builder: str = Field(min_length=1)
    options: dict[str, Any] = Field(default_factory=dict)
    configurations: dict[str, dict[str, Any]] = Field(default_factory=dict)


class ProjectDefinition(WorkspaceBaseModel):
    """A project and its targets."""

    root: str = ""
    targets: dict[str, TargetDefinition] = Field(default_factory=dict)


class WorkspaceDefinition(WorkspaceBaseModel):
    """Top-level workspace file contents."""

    projects: dict[str, ProjectDefinition] = Field(default_factory=dict)
