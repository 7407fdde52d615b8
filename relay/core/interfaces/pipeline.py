"""
Task pipeline value types.

Defines the stage description, the shared per-run context, the append-only
accumulator for values computed by stages, and the terminal result.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from ..exceptions import ConfigurationConflict, StageFailure
from .builder import BuildEvent


class ComputedFields:
    """
    Append-only store for option values computed while a pipeline runs.

    Each field can be set once. Later stages read what earlier stages wrote;
    nobody overwrites it.
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._origins: dict[str, str | None] = {}

    def set(self, name: str, value: Any, origin: str | None = None) -> None:
        """
        Record a computed value.

        Raises:
            ConfigurationConflict: If the field was already computed
        """
        if name in self._values:
            raise ConfigurationConflict(
                f"Computed option '{name}' is already set",
                options=(name,),
                context={
                    "set_by": self._origins.get(name),
                    "attempted_by": origin,
                },
            )
        self._values[name] = value
        self._origins[name] = origin

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def origin(self, name: str) -> str | None:
        return self._origins.get(name)

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)


@dataclass
class StageContext:
    """State shared by the stages of one pipeline run.

    Attributes:
        options: Caller-supplied options (read-only model)
        computed: Values computed by stages so far
        completed_stages: Names of stages whose side effects have committed
    """

    options: Any
    computed: ComputedFields = field(default_factory=ComputedFields)
    completed_stages: list[str] = field(default_factory=list)


StageAction = Callable[[StageContext], Awaitable[BuildEvent | None]]
StageCondition = bool | Callable[[StageContext], bool]
PreflightCheck = Callable[[StageContext], None]


@dataclass(frozen=True)
class StageSpec:
    """One ordered pipeline step.

    A stage with no action is a no-op; a stage whose condition is false is
    skipped as an immediate success.
    """

    name: str
    action: StageAction | None = None
    condition: StageCondition = True

    def should_run(self, context: StageContext) -> bool:
        if callable(self.condition):
            return bool(self.condition(context))
        return bool(self.condition)


@dataclass(frozen=True)
class PipelineResult:
    """The single terminal outcome of a pipeline run."""

    success: bool
    error: StageFailure | None = None
    result: Any = None
    completed_stages: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Deterministic representation, comparable across runs."""
        error: dict[str, Any] | None = None
        if self.error is not None:
            error = {
                "stage_index": self.error.stage_index,
                "stage": self.error.stage_name,
                "type": type(self.error.cause).__name__,
                "message": str(self.error.cause),
            }
        return {
            "success": self.success,
            "error": error,
            "completed_stages": list(self.completed_stages),
        }

    def to_build_event(self) -> BuildEvent:
        return BuildEvent(success=self.success, result=self.result, error=self.error)


@dataclass(frozen=True)
class SubServiceResult:
    """Outcome of launching an auxiliary service target."""

    success: bool
    result: Any = None
    base_url: str | None = None
