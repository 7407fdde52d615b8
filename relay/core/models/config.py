"""
Configuration models.

Provides Pydantic models for relay configuration with validation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import ConfigDict, Field, field_validator

from .base import RelayBaseModel

LogLevel = Literal["debug", "info", "warning", "error"]

# Driver-manager module candidates, tried in order: nested under the
# e2e tool's own package first, then as a top-level install.
DEFAULT_DRIVER_MODULES = [
    "protractor._vendor.webdriver_manager.cmds.update",
    "webdriver_manager.cmds.update",
]


class ConfigBaseModel(RelayBaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML types
        validate_assignment=True,
        extra="ignore",  # Ignore unknown fields in config files
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = False
    file: bool = True
    # None means ~/.relay/relay.log
    file_path: Path | None = None


class E2EConfig(ConfigBaseModel):
    """Defaults for the e2e builder."""

    tool_entry_point: str = "protractor.launcher"
    tool_invocation: str = "init"
    driver_modules: list[str] = Field(default_factory=lambda: list(DEFAULT_DRIVER_MODULES))
    host: str = "localhost"

    @field_validator("driver_modules", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: Any) -> list[str]:
        """Parse comma-separated string to list."""
        if isinstance(v, str):
            return [x.strip() for x in v.split(",") if x.strip()]
        return v if v else []


class DevServerConfig(ConfigBaseModel):
    """Defaults for the dev-server builder readiness probe."""

    ready_timeout: float = Field(default=30.0, gt=0)
    poll_interval: float = Field(default=0.1, gt=0)


class WorkspaceConfig(ConfigBaseModel):
    """Workspace file lookup."""

    file: str = "workspace.toml"


class RelayConfig(ConfigBaseModel):
    """Complete relay configuration.

    This model represents the full configuration with all sections.
    It can be loaded from TOML files or constructed programmatically.
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    e2e: E2EConfig = Field(default_factory=E2EConfig)
    dev_server: DevServerConfig = Field(default_factory=DevServerConfig)
    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)

    def get(self, key: str, default: Any = None) -> Any:
        """Get config value by dot-notation key (e.g. 'logging.level')."""
        parts = key.split(".")
        obj: Any = self
        for part in parts:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            elif isinstance(obj, dict) and part in obj:
                obj = obj[part]
            else:
                return default
        return obj

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return self.model_dump()
