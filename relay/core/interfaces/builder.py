"""
Builder interfaces and the value types that flow between builders.

A builder is a registered runnable unit (dev server, e2e runner) that the
architect resolves from a workspace target and runs. Every builder produces
an async stream of BuildEvents.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pydantic import BaseModel

    from ...architect.architect import Architect
    from ...services.runner.registry import ProcessRegistry
    from .logger import ILogger


@dataclass(frozen=True)
class BuildEvent:
    """One event emitted by a builder run."""

    success: bool
    result: Any = None
    error: Exception | None = None


@dataclass(frozen=True)
class TargetSpecifier:
    """A parsed `project:target[:configuration]` reference plus overrides."""

    project: str
    target: str
    configuration: str | None = None
    overrides: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [self.project, self.target]
        if self.configuration:
            parts.append(self.configuration)
        return ":".join(parts)


@dataclass
class BuilderConfiguration:
    """Resolved configuration of one target.

    `options` is a plain dict until validated, then the builder's options model.
    """

    project: str
    target: str
    root: str
    builder: str
    options: Any
    configuration: str | None = None


@dataclass(frozen=True)
class BuilderDescription:
    """How to validate and instantiate a builder."""

    name: str
    options_model: type[BaseModel]
    builder_class: type[IBuilder]
    description: str = ""


@dataclass
class BuilderContext:
    """Collaborators handed to every builder instance."""

    workspace_root: Path
    architect: Architect
    logger: ILogger
    processes: ProcessRegistry


class IBuilder(ABC):
    """Interface every builder implements."""

    def __init__(self, context: BuilderContext) -> None:
        self.context = context

    @abstractmethod
    def run(self, config: BuilderConfiguration) -> AsyncIterator[BuildEvent]:
        """
        Run the builder.

        Args:
            config: Validated configuration; `config.options` is the options model

        Returns:
            Async iterator of build events
        """
        ...
