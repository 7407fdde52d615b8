"""
Core infrastructure for relay.

This module provides:
- ServiceContainer: DI container using dependency-injector, plus the builder registry
- Application bootstrap for initialization
- Interface definitions for services and builders
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container
from .exceptions import (
    ConfigFileError,
    ConfigurationConflict,
    DriverUpdateFailure,
    InvalidServiceConfig,
    RelayConfigError,
    RelayException,
    RelayExecutionError,
    ServiceStartFailure,
    StageFailure,
    SubprocessFailure,
    ToolNotFound,
    WorkspaceNotFoundError,
)

__all__ = [
    "ConfigFileError",
    "ConfigurationConflict",
    "DriverUpdateFailure",
    "InvalidServiceConfig",
    "RelayConfigError",
    "RelayException",
    "RelayExecutionError",
    "ServiceContainer",
    "ServiceStartFailure",
    "StageFailure",
    "SubprocessFailure",
    "ToolNotFound",
    "WorkspaceNotFoundError",
    "bootstrap",
    "get_container",
    "is_initialized",
    "reset",
]
