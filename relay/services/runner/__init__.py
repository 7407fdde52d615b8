"""Isolated subprocess execution and cleanup of long-lived processes."""

from .process_runner import ProcessRunner
from .registry import ProcessRegistry

__all__ = ["ProcessRegistry", "ProcessRunner"]
