"""
Native Click implementation of the targets command.

Usage: relay targets
"""

import click

from ...architect.architect import Architect
from ...core.bootstrap import bootstrap
from ...core.di import resolve_or_default
from ...core.exceptions import RelayException
from ...core.interfaces.presenter import IPresenter
from ...presenters.console import ConsolePresenter
from ..context import RelayContext


@click.command("targets")
@click.pass_obj
def targets(ctx: RelayContext) -> None:
    """List the projects, targets and builders of the workspace."""
    bootstrap(ctx.cwd)
    presenter = resolve_or_default(IPresenter, ConsolePresenter)  # type: ignore[type-abstract]

    try:
        workspace = ctx.load_workspace()
    except RelayException as e:
        presenter.print_error(e.message, e.hint)
        raise SystemExit(e.exit_code) from e

    rows = [list(row) for row in Architect(workspace).list_targets()]
    if not rows:
        click.echo(f"No targets defined in {ctx.workspace_file}")
        return

    presenter.print_table(["PROJECT", "TARGET", "BUILDER"], rows)
