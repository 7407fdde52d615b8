"""
End-to-end test builder (`relay:e2e`).

Optionally starts a dev server target and updates the browser drivers, then
launches the e2e tool in a child process with the computed base URL.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

from pydantic import Field

from ..core.exceptions import ConfigurationConflict
from ..core.interfaces.builder import BuildEvent, BuilderConfiguration, BuilderContext, IBuilder
from ..core.interfaces.pipeline import StageContext, StageSpec
from ..core.models.base import OptionsModel
from ..core.settings import load_settings
from ..services.driver.updater import DriverUpdater
from ..services.launcher.sub_service import SubServiceLauncher
from ..services.pipeline.config_merger import ConfigMerger
from ..services.pipeline.task_pipeline import TaskPipeline
from ..services.runner.process_runner import ProcessRunner


class E2EOptions(OptionsModel):
    """Options of the `relay:e2e` builder.

    `host`, `tool_entry_point` and `tool_invocation` fall back to the
    [e2e] config section when unset.
    """

    protractor_config: str
    dev_server_target: str | None = None
    specs: list[str] = Field(default_factory=list)
    suite: str | None = None
    element_explorer: bool = False
    webdriver_update: bool = True
    port: int | None = Field(default=None, ge=0, le=65535)
    host: str | None = None
    base_url: str | None = None
    tool_entry_point: str | None = None
    tool_invocation: str | None = None


def reject_base_url_with_dev_server(context: StageContext) -> None:
    options: E2EOptions = context.options
    if options.dev_server_target and options.base_url:
        raise ConfigurationConflict(
            "The 'baseUrl' option cannot be used with 'devServerTarget'. "
            "When present, 'devServerTarget' will be used to automatically "
            "setup 'baseUrl' for the e2e tool.",
            options=("dev_server_target", "base_url"),
            hint="Pass either --dev-server-target or --base-url, not both.",
        )


def build_tool_config(options: E2EOptions) -> dict[str, Any]:
    """Additional configuration handed to the e2e tool on top of its config file."""
    config: dict[str, Any] = {
        "elementExplorer": options.element_explorer,
        "baseUrl": options.base_url,
        "specs": list(options.specs) if options.specs else None,
        "suite": options.suite,
    }
    return {key: value for key, value in config.items() if value is not None}


class E2EBuilder(IBuilder):
    """
    Runs the e2e pipeline: dev-server, webdriver-update, run.

    Emits exactly one event mirroring the pipeline's terminal result.
    """

    def __init__(
        self,
        context: BuilderContext,
        *,
        launcher: SubServiceLauncher | None = None,
        updater: DriverUpdater | None = None,
        runner: ProcessRunner | None = None,
        merger: ConfigMerger | None = None,
    ) -> None:
        super().__init__(context)
        self._launcher = launcher
        self._updater = updater
        self._runner = runner
        self._merger = merger or ConfigMerger()

    async def run(self, config: BuilderConfiguration) -> AsyncIterator[BuildEvent]:
        workspace_root = Path(self.context.workspace_root)
        settings = load_settings(start_dir=str(workspace_root)).e2e

        options: E2EOptions = config.options
        host = options.host or settings.host
        entry_point = options.tool_entry_point or settings.tool_entry_point
        invocation = options.tool_invocation or settings.tool_invocation

        launcher = self._launcher or SubServiceLauncher(
            self.context.architect, self.context.logger
        )
        updater = self._updater or DriverUpdater.from_module_names(
            settings.driver_modules, self.context.logger
        )
        runner = self._runner or ProcessRunner(logger=self.context.logger)

        async def start_dev_server(ctx: StageContext) -> None:
            await launcher.start(
                ctx.options.dev_server_target,
                host=host,
                port=ctx.options.port,
                computed=ctx.computed,
                origin="dev-server",
            )

        async def update_webdriver(ctx: StageContext) -> BuildEvent:
            return await updater.update(workspace_root / config.root)

        async def run_tool(ctx: StageContext) -> BuildEvent:
            effective = self._merger.merge(ctx.options, ctx.computed)
            tool_config = workspace_root / effective.protractor_config
            return await runner.run(
                workspace_root,
                entry_point,
                invocation,
                [str(tool_config.resolve()), build_tool_config(effective)],
            )

        stages = [
            StageSpec(
                "dev-server",
                start_dev_server,
                condition=lambda ctx: bool(ctx.options.dev_server_target),
            ),
            StageSpec(
                "webdriver-update",
                update_webdriver,
                condition=lambda ctx: ctx.options.webdriver_update,
            ),
            StageSpec("run", run_tool),
        ]

        pipeline = TaskPipeline(checks=[reject_base_url_with_dev_server], logger=self.context.logger)
        result = await pipeline.run(stages, StageContext(options=options))
        yield result.to_build_event()
