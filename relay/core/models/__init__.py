"""
Pydantic models for relay.

Configuration sections, workspace definitions and the base classes
builder options derive from.
"""

from .base import ImmutableModel, OptionsModel, RelayBaseModel
from .config import (
    DevServerConfig,
    E2EConfig,
    LoggingConfig,
    RelayConfig,
    WorkspaceConfig,
)
from .workspace import ProjectDefinition, TargetDefinition, WorkspaceDefinition

__all__ = [
    "DevServerConfig",
    "E2EConfig",
    "ImmutableModel",
    "LoggingConfig",
    "OptionsModel",
    "ProjectDefinition",
    "RelayBaseModel",
    "RelayConfig",
    "TargetDefinition",
    "WorkspaceConfig",
    "WorkspaceDefinition",
]
