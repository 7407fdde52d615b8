"""
Native Click implementation of the e2e command.

Usage: relay e2e [PROJECT:TARGET[:CONFIGURATION]] [options]
"""

from __future__ import annotations

import asyncio
from typing import Any

import click

from ...architect.architect import Architect
from ...core.bootstrap import bootstrap
from ...core.di import get_logger, resolve_or_default
from ...core.exceptions import RelayException
from ...core.interfaces.builder import BuildEvent
from ...core.interfaces.presenter import IPresenter
from ...presenters.console import ConsolePresenter
from ..context import RelayContext

E2E_BUILDER = "relay:e2e"


@click.command("e2e")
@click.argument("target", required=False)
@click.option("--protractor-config", help="Path to the e2e tool config, relative to the workspace root")
@click.option("--dev-server-target", help="Dev server target to start first (project:target[:configuration])")
@click.option("--base-url", help="Base URL of an already running application")
@click.option("--specs", multiple=True, help="Spec file to run (repeatable)")
@click.option("--suite", help="Named suite from the e2e tool config")
@click.option("--element-explorer/--no-element-explorer", default=None, help="Start the element explorer")
@click.option(
    "--webdriver-update/--no-webdriver-update",
    default=None,
    help="Update browser drivers before running",
)
@click.option("--port", type=int, help="Port to serve the dev server on")
@click.option("--host", help="Host to serve the dev server on")
@click.pass_obj
def e2e(
    ctx: RelayContext,
    target: str | None,
    protractor_config: str | None,
    dev_server_target: str | None,
    base_url: str | None,
    specs: tuple[str, ...],
    suite: str | None,
    element_explorer: bool | None,
    webdriver_update: bool | None,
    port: int | None,
    host: str | None,
) -> None:
    """Run end-to-end tests.

    With TARGET, the target's workspace options are used and the flags
    given here override them. Without TARGET, the flags alone form the
    options and --protractor-config is required.

    \b
    Examples:
        relay e2e app:e2e
        relay e2e app:e2e:ci --no-webdriver-update
        relay e2e --protractor-config e2e/protractor.conf.js --base-url http://localhost:8080
    """
    bootstrap(ctx.cwd)
    presenter = resolve_or_default(IPresenter, ConsolePresenter)  # type: ignore[type-abstract]

    overrides = collect_overrides(
        protractor_config=protractor_config,
        dev_server_target=dev_server_target,
        base_url=base_url,
        specs=list(specs),
        suite=suite,
        element_explorer=element_explorer,
        webdriver_update=webdriver_update,
        port=port,
        host=host,
    )
    if target is None and "protractor_config" not in overrides:
        raise click.UsageError("Either a TARGET or --protractor-config is required.")

    try:
        workspace = ctx.load_workspace(required=target is not None)
        architect = Architect(workspace, logger=get_logger())
        event = asyncio.run(run_e2e(architect, target, overrides))
    except RelayException as e:
        presenter.print_error(e.message, e.hint)
        raise SystemExit(e.exit_code) from e

    if event is None:
        presenter.print_error("The e2e builder produced no result")
        raise SystemExit(1)

    if not event.success:
        error = event.error
        if isinstance(error, RelayException):
            presenter.print_error(error.message, error.hint)
            raise SystemExit(error.exit_code)
        presenter.print_error(str(error) if error else "End-to-end tests failed")
        raise SystemExit(1)

    presenter.print_success("End-to-end tests passed")


def collect_overrides(**flags: Any) -> dict[str, Any]:
    """Keep only the flags that were actually given."""
    return {
        name: value
        for name, value in flags.items()
        if value is not None and value != []
    }


async def run_e2e(
    architect: Architect,
    target: str | None,
    overrides: dict[str, Any],
) -> BuildEvent | None:
    """
    Run the e2e builder and return its last event.

    Every process registered while running is terminated before returning.
    """
    last: BuildEvent | None = None
    try:
        if target is not None:
            spec = architect.parse_target_string(target, overrides)
            events = architect.run(spec)
        else:
            events = architect.run_builder(E2E_BUILDER, overrides, target="e2e")

        async for event in events:
            last = event
    finally:
        await architect.processes.terminate_all()
    return last
