"""
Browser-driver update step.

The driver manager ships inside the e2e tool's package or next to it as a
top-level install, depending on how the project installed it. Candidate
locations are tried in order and the first one that imports wins.
"""

from __future__ import annotations

import asyncio
import inspect
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Any

from ...core.di import get_logger
from ...core.exceptions import DriverUpdateFailure, RelayException, ToolNotFound
from ...core.interfaces.builder import BuildEvent
from ...core.models.config import DEFAULT_DRIVER_MODULES
from ...utils.modules import require_project_module

if TYPE_CHECKING:
    from ...core.interfaces.logger import ILogger

# Equivalent to `webdriver-manager update --standalone false --gecko false --quiet`.
UPDATE_OPTIONS: dict[str, bool] = {
    "standalone": False,
    "gecko": False,
    "quiet": True,
}

MANUAL_UPDATE_HINT = (
    "Update webdriver-manager manually and run 'relay e2e --no-webdriver-update' instead."
)


class ResolutionStrategy(ABC):
    """One candidate location for the driver manager."""

    @property
    @abstractmethod
    def label(self) -> str:
        """Where this strategy looks, for diagnostics."""
        ...

    @abstractmethod
    def resolve(self, project_root: Path) -> ModuleType | None:
        """Return the driver-manager module, or None if it is not here."""
        ...


class ProjectModuleStrategy(ResolutionStrategy):
    """Import a dotted module name as seen from the project root."""

    def __init__(self, module_name: str, logger: ILogger | None = None) -> None:
        self.module_name = module_name
        self._logger = logger

    @property
    def label(self) -> str:
        return self.module_name

    def resolve(self, project_root: Path) -> ModuleType | None:
        logger = self._logger or get_logger()
        try:
            module = require_project_module(project_root, self.module_name)
        except ImportError as e:
            logger.debug("Driver manager not found at %s: %s", self.module_name, e)
            return None
        except Exception as e:
            logger.debug("Driver manager at %s failed to import: %r", self.module_name, e)
            return None

        program = getattr(module, "program", None)
        if program is None or not callable(getattr(program, "run", None)):
            logger.debug("%s has no program.run entry point", self.module_name)
            return None
        return module


class DriverUpdater:
    """
    Locates the driver manager and runs its update command.

    Usage:
        updater = DriverUpdater.from_module_names(["pkg.nested.update", "update"])
        event = await updater.update(project_root)
    """

    def __init__(
        self,
        strategies: Sequence[ResolutionStrategy] | None = None,
        logger: ILogger | None = None,
    ) -> None:
        if strategies is None:
            strategies = [ProjectModuleStrategy(name) for name in DEFAULT_DRIVER_MODULES]
        self._strategies = list(strategies)
        self._logger = logger

    @classmethod
    def from_module_names(
        cls,
        module_names: Sequence[str],
        logger: ILogger | None = None,
    ) -> DriverUpdater:
        return cls([ProjectModuleStrategy(name, logger) for name in module_names], logger)

    @property
    def logger(self) -> ILogger:
        if self._logger is None:
            self._logger = get_logger()
        return self._logger

    @property
    def strategies(self) -> list[ResolutionStrategy]:
        return list(self._strategies)

    def locate(self, project_root: Path) -> ModuleType:
        """
        Try each strategy in order.

        Raises:
            ToolNotFound: If every strategy comes up empty
        """
        for strategy in self._strategies:
            module = strategy.resolve(project_root)
            if module is not None:
                self.logger.debug("Using driver manager from %s", strategy.label)
                return module

        raise ToolNotFound(
            "Cannot automatically find webdriver-manager to update.",
            candidates=[s.label for s in self._strategies],
            context={"project_root": str(project_root)},
            hint=MANUAL_UPDATE_HINT,
        )

    async def update(self, project_root: Path) -> BuildEvent:
        """
        Run the driver manager's update with the fixed UPDATE_OPTIONS.

        Raises:
            ToolNotFound: If the driver manager cannot be located
            DriverUpdateFailure: If the update command itself raises
        """
        module = self.locate(project_root)
        run = module.program.run

        self.logger.info("Updating browser drivers")
        outcome: Any
        try:
            if inspect.iscoroutinefunction(run):
                outcome = await run(dict(UPDATE_OPTIONS))
            else:
                outcome = await asyncio.to_thread(run, dict(UPDATE_OPTIONS))
                if inspect.isawaitable(outcome):
                    outcome = await outcome
        except RelayException:
            raise
        except Exception as e:
            self.logger.error("Driver update via %s failed: %s", module.__name__, e)
            raise DriverUpdateFailure(
                f"Browser driver update failed: {e}",
                module=module.__name__,
                hint=MANUAL_UPDATE_HINT,
                cause=e,
            ) from e

        return BuildEvent(success=True, result=outcome)
