"""
Click command implementations for relay CLI.

Each module corresponds to a relay command (e.g., e2e.py implements
'relay e2e'). Commands are registered with the main CLI group via the
register_commands() function in relay.cli.
"""

from .config import config
from .e2e import e2e
from .targets import targets

COMMANDS = [
    config,
    e2e,
    targets,
]

__all__ = [
    "COMMANDS",
    "config",
    "e2e",
    "targets",
]
