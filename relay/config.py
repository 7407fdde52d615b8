"""Configuration loading and lookup for relay."""

from pathlib import Path
from typing import Any

from .core.settings import load_settings

# Config keys shown by `relay config list`
CONFIGURABLE_KEYS = {
    "logging.level": {
        "type": str,
        "default": "warning",
        "description": "Log level (debug, info, warning, error)",
    },
    "logging.console": {
        "type": bool,
        "default": False,
        "description": "Output debug logs to stderr",
    },
    "logging.file": {
        "type": bool,
        "default": True,
        "description": "Output debug logs to ~/.relay/relay.log",
    },
    "logging.file_path": {
        "type": str,
        "default": None,
        "description": "Log file location (default ~/.relay/relay.log)",
    },
    "e2e.tool_entry_point": {
        "type": str,
        "default": "protractor.launcher",
        "description": "Module the e2e tool is launched from (dotted name or path)",
    },
    "e2e.tool_invocation": {
        "type": str,
        "default": "init",
        "description": "Function called inside the e2e tool module",
    },
    "e2e.driver_modules": {
        "type": list,
        "default": [
            "protractor._vendor.webdriver_manager.cmds.update",
            "webdriver_manager.cmds.update",
        ],
        "description": "Driver-manager module candidates, tried in order (comma-separated)",
    },
    "e2e.host": {
        "type": str,
        "default": "localhost",
        "description": "Default host for e2e runs",
    },
    "dev_server.ready_timeout": {
        "type": float,
        "default": 30.0,
        "description": "Seconds to wait for a dev server to accept connections",
    },
    "dev_server.poll_interval": {
        "type": float,
        "default": 0.1,
        "description": "Seconds between dev server readiness probes",
    },
    "workspace.file": {
        "type": str,
        "default": "workspace.toml",
        "description": "Workspace file name searched for from the working directory",
    },
}


def _get_nested(d: dict, key: str, default=None):
    """Get a nested key like 'logging.level'."""
    parts = key.split(".")
    for part in parts:
        if isinstance(d, dict) and part in d:
            d = d[part]
        else:
            return default
    return d


def load_config(config_path: Path | None = None, start_dir: str | None = None) -> dict:
    """
    Load configuration from file.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from (if config_path not given)

    Returns:
        Configuration dict with defaults applied
    """
    settings = load_settings(config_path=config_path, start_dir=start_dir)
    return settings.to_dict()


def config_get(key: str, start_dir: str | None = None) -> Any:
    """Get a config value by dot-notation key, or None when unknown."""
    config = load_config(start_dir=start_dir)
    return _get_nested(config, key)


def config_list() -> dict:
    """Return all configurable keys with their metadata."""
    return CONFIGURABLE_KEYS
