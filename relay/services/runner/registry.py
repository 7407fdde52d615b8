"""
Tracks long-lived child processes that outlive the stage that started them.

Dev servers are left running after their first readiness event; whoever
owns the registry (the CLI command) terminates them when it is done.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from ...core.di import get_logger

if TYPE_CHECKING:
    from asyncio.subprocess import Process

    from ...core.interfaces.logger import ILogger


class ProcessRegistry:
    """Registry of detached service processes."""

    def __init__(self, logger: ILogger | None = None) -> None:
        self._processes: list[tuple[str, Process]] = []
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        if self._logger is None:
            self._logger = get_logger()
        return self._logger

    def register(self, label: str, process: Process) -> None:
        self.logger.debug("Tracking %s (pid %s)", label, process.pid)
        self._processes.append((label, process))

    def running(self) -> list[str]:
        """Labels of tracked processes that have not exited."""
        return [label for label, process in self._processes if process.returncode is None]

    async def terminate_all(self, grace_period: float = 5.0) -> None:
        """Terminate every tracked process, killing any that ignore SIGTERM."""
        while self._processes:
            label, process = self._processes.pop()
            if process.returncode is not None:
                continue
            self.logger.debug("Terminating %s (pid %s)", label, process.pid)
            try:
                process.terminate()
            except ProcessLookupError:
                continue
            try:
                await asyncio.wait_for(process.wait(), timeout=grace_period)
            except asyncio.TimeoutError:
                self.logger.warning("%s did not exit after %ss, killing", label, grace_period)
                try:
                    process.kill()
                except ProcessLookupError:
                    continue
                await process.wait()

    def __len__(self) -> int:
        return len(self._processes)
