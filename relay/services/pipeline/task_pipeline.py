"""
Sequential task pipeline.

Runs an ordered list of conditional stages, awaiting each one before the
next starts, and stops at the first failure. Every run produces exactly one
PipelineResult.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from ...core.di import get_logger
from ...core.exceptions import RelayException, RelayExecutionError, StageFailure
from ...core.interfaces.pipeline import PipelineResult, PreflightCheck, StageContext, StageSpec

if TYPE_CHECKING:
    from ...core.interfaces.builder import BuildEvent
    from ...core.interfaces.logger import ILogger


class TaskPipeline:
    """
    Strictly ordered stage runner.

    Handles:
    - Preflight checks (raised before any stage starts)
    - Conditional stages (skipped stages have no side effects)
    - Abort on the first failing stage
    - A single terminal result taken from the last executed stage

    Usage:
        pipeline = TaskPipeline(checks=[reject_conflicting_options])
        result = await pipeline.run(stages, StageContext(options=options))
    """

    def __init__(
        self,
        checks: Sequence[PreflightCheck] = (),
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize the pipeline.

        Args:
            checks: Validations run once before the first stage; each raises
                ConfigurationConflict (or another RelayException) to refuse the run
            logger: Logger for internal diagnostics
        """
        self._checks = list(checks)
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        if self._logger is None:
            self._logger = get_logger()
        return self._logger

    async def run(self, stages: Sequence[StageSpec], context: StageContext) -> PipelineResult:
        """
        Run stages in order.

        Preflight failures are raised, not returned: nothing has run yet.
        A CancelledError propagates unchanged; `context.completed_stages`
        then names the stages whose side effects committed.

        Returns:
            PipelineResult of the run
        """
        for check in self._checks:
            check(context)

        terminal: BuildEvent | None = None

        for index, stage in enumerate(stages):
            log = self.logger.bind(stage=f"{index}:{stage.name}")
            if not stage.should_run(context):
                log.debug("Skipped")
                continue

            if stage.action is None:
                context.completed_stages.append(stage.name)
                continue

            log.debug("Running")
            try:
                event = await stage.action(context)
            except RelayException as e:
                log.error("Raised: %s", e)
                return self._failure(index, stage, e, context)

            if event is not None and not event.success:
                cause = event.error or RelayExecutionError(
                    f"Stage '{stage.name}' reported failure"
                )
                log.error("Reported failure: %s", cause)
                return self._failure(index, stage, cause, context)

            context.completed_stages.append(stage.name)
            if event is not None:
                terminal = event

        return PipelineResult(
            success=True,
            result=terminal.result if terminal is not None else None,
            completed_stages=tuple(context.completed_stages),
        )

    @staticmethod
    def _failure(
        index: int,
        stage: StageSpec,
        cause: Exception,
        context: StageContext,
    ) -> PipelineResult:
        return PipelineResult(
            success=False,
            error=StageFailure(index, stage.name, cause),
            completed_stages=tuple(context.completed_stages),
        )
