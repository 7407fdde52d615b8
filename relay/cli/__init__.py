"""
Click-based CLI for relay.

This module provides the main Click command group and serves as the
entry point for the relay CLI.

Usage:
    from relay.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

import click

from .context import RelayContext

# Version is loaded from package metadata
try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("relay-e2e")
except PackageNotFoundError:
    __version__ = "0.1.0"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="relay")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """relay - run workspace targets and end-to-end tests

    \b
    Quick Start:
        relay targets               List the workspace's targets
        relay e2e app:e2e           Run the e2e target of project 'app'

    \b
    Configuration:
        relay config                View configuration
    """
    ctx.ensure_object(dict)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)
    else:
        ctx.obj = RelayContext.create()


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


# Register commands at module load time
register_commands()


__all__ = [
    "RelayContext",
    "__version__",
    "cli",
    "register_commands",
]
