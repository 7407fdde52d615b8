"""
Target resolution and builder execution.

The architect turns a `project:target[:configuration]` reference into a
validated BuilderConfiguration, finds the registered builder for it, and
runs it. Builders that need other targets (the e2e builder starting a dev
server) go back through the architect they were handed in their context.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from ..core.container import get_container
from ..core.di import get_logger
from ..core.exceptions import InvalidServiceConfig
from ..core.interfaces.builder import (
    BuildEvent,
    BuilderConfiguration,
    BuilderContext,
    BuilderDescription,
    IBuilder,
    TargetSpecifier,
)
from ..services.runner.registry import ProcessRegistry

if TYPE_CHECKING:
    from ..core.container import ServiceContainer
    from ..core.interfaces.logger import ILogger
    from .workspace import Workspace


def _format_validation_errors(error: ValidationError) -> list[str]:
    messages = []
    for err in error.errors():
        loc = ".".join(str(part) for part in err["loc"]) or "<options>"
        messages.append(f"{loc}: {err['msg']}")
    return messages


class Architect:
    """
    Resolves workspace targets and runs their builders.

    Usage:
        architect = Architect(discover_workspace())
        spec = Architect.parse_target_string("app:serve:production")
        async for event in architect.run(spec):
            ...
    """

    def __init__(
        self,
        workspace: Workspace,
        container: ServiceContainer | None = None,
        logger: ILogger | None = None,
        processes: ProcessRegistry | None = None,
    ) -> None:
        self._workspace = workspace
        self._container = container or get_container()
        self._logger = logger
        self._processes = processes or ProcessRegistry(logger=logger)

    @property
    def logger(self) -> ILogger:
        if self._logger is None:
            self._logger = get_logger()
        return self._logger

    @property
    def workspace(self) -> Workspace:
        return self._workspace

    @property
    def processes(self) -> ProcessRegistry:
        """Long-lived processes started by builders run through this architect."""
        return self._processes

    @staticmethod
    def parse_target_string(
        target: str,
        overrides: dict[str, Any] | None = None,
    ) -> TargetSpecifier:
        """
        Parse `project:target[:configuration]`.

        Raises:
            InvalidServiceConfig: If the reference has too few or too many parts
        """
        parts = target.split(":")
        if len(parts) not in (2, 3) or not all(parts[:2]):
            raise InvalidServiceConfig(
                f"Invalid target reference '{target}'",
                target=target,
                hint="Target references look like 'project:target' or 'project:target:configuration'.",
            )
        configuration = parts[2] if len(parts) == 3 and parts[2] else None
        return TargetSpecifier(
            project=parts[0],
            target=parts[1],
            configuration=configuration,
            overrides=dict(overrides or {}),
        )

    def get_builder_configuration(self, spec: TargetSpecifier) -> BuilderConfiguration:
        """
        Merge target options, configuration options and overrides (last wins).

        Raises:
            InvalidServiceConfig: If the project, target or configuration is unknown
        """
        projects = self._workspace.definition.projects
        project = projects.get(spec.project)
        if project is None:
            raise InvalidServiceConfig(
                f"Project '{spec.project}' does not exist in the workspace",
                target=str(spec),
                context={"known_projects": sorted(projects)},
            )

        target = project.targets.get(spec.target)
        if target is None:
            raise InvalidServiceConfig(
                f"Project '{spec.project}' has no target '{spec.target}'",
                target=str(spec),
                context={"known_targets": sorted(project.targets)},
            )

        options: dict[str, Any] = dict(target.options)
        if spec.configuration:
            if spec.configuration not in target.configurations:
                raise InvalidServiceConfig(
                    f"Target '{spec.project}:{spec.target}' has no configuration "
                    f"'{spec.configuration}'",
                    target=str(spec),
                    context={"known_configurations": sorted(target.configurations)},
                )
            options.update(target.configurations[spec.configuration])
        options.update(spec.overrides)

        return BuilderConfiguration(
            project=spec.project,
            target=spec.target,
            root=project.root,
            builder=target.builder,
            options=options,
            configuration=spec.configuration,
        )

    def get_builder_description(self, config: BuilderConfiguration) -> BuilderDescription:
        """
        Raises:
            InvalidServiceConfig: If no builder is registered under the target's name
        """
        try:
            return self._container.get_builder_description(config.builder)
        except KeyError as e:
            raise InvalidServiceConfig(
                f"Unknown builder '{config.builder}'",
                target=f"{config.project}:{config.target}",
                context={"known_builders": self._container.list_builders()},
                cause=e,
            ) from e

    def validate_builder_options(
        self,
        config: BuilderConfiguration,
        description: BuilderDescription,
    ) -> BuilderConfiguration:
        """
        Validate the merged options against the builder's options model.

        Returns:
            A copy of the configuration whose options are the validated model

        Raises:
            InvalidServiceConfig: If validation fails
        """
        try:
            options = description.options_model.model_validate(config.options)
        except ValidationError as e:
            errors = _format_validation_errors(e)
            raise InvalidServiceConfig(
                f"Options for '{config.project}:{config.target}' are invalid for "
                f"builder '{description.name}'",
                target=f"{config.project}:{config.target}",
                validation_errors=errors,
                cause=e,
            ) from e

        return BuilderConfiguration(
            project=config.project,
            target=config.target,
            root=config.root,
            builder=config.builder,
            options=options,
            configuration=config.configuration,
        )

    def create_context(self) -> BuilderContext:
        return BuilderContext(
            workspace_root=self._workspace.root,
            architect=self,
            logger=self.logger,
            processes=self._processes,
        )

    def get_builder(
        self,
        description: BuilderDescription,
        context: BuilderContext | None = None,
    ) -> IBuilder:
        return description.builder_class(context or self.create_context())

    def resolve(self, spec: TargetSpecifier) -> tuple[IBuilder, BuilderConfiguration]:
        """Resolve, validate and instantiate the builder for a target."""
        config = self.get_builder_configuration(spec)
        description = self.get_builder_description(config)
        validated = self.validate_builder_options(config, description)
        self.logger.debug("Resolved %s to builder %s", spec, description.name)
        return self.get_builder(description), validated

    def run(self, spec: TargetSpecifier) -> AsyncIterator[BuildEvent]:
        """
        Run a workspace target.

        Resolution and validation happen immediately; errors are raised
        here rather than from the returned stream.
        """
        builder, config = self.resolve(spec)
        return builder.run(config)

    def run_builder(
        self,
        builder_name: str,
        options: dict[str, Any],
        project: str = "",
        target: str = "",
    ) -> AsyncIterator[BuildEvent]:
        """Run a builder directly from options, without a workspace target."""
        config = BuilderConfiguration(
            project=project,
            target=target,
            root="",
            builder=builder_name,
            options=options,
        )
        description = self.get_builder_description(config)
        validated = self.validate_builder_options(config, description)
        return self.get_builder(description).run(validated)

    def list_targets(self) -> list[tuple[str, str, str]]:
        """List (project, target, builder) for every workspace target."""
        rows = []
        for project_name, project in sorted(self._workspace.definition.projects.items()):
            for target_name, target in sorted(project.targets.items()):
                rows.append((project_name, target_name, target.builder))
        return rows
