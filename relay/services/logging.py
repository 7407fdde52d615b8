"""
Diagnostic logger for relay.

Messages go to a rotating log file and, optionally, to stderr. Both
handlers follow the [logging] config section. Bound context is rendered as
a `[key=value ...]` prefix so a line can be traced back to the target and
pipeline stage that wrote it.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..core.interfaces.logger import ILogger

if TYPE_CHECKING:
    from ..core.models.config import LoggingConfig

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


class RelayLogger(ILogger):
    """
    ILogger backed by a stdlib logger.

    Build one with `configure()` or `from_config()`. `bind()` returns a
    logger that shares the same handlers and adds context.
    """

    LOG_FILE_PATH = Path.home() / ".relay" / "relay.log"
    MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 3

    def __init__(self, logger: logging.Logger, context: Mapping[str, Any] | None = None) -> None:
        self._logger = logger
        self._context = dict(context or {})

    @classmethod
    def configure(
        cls,
        name: str = "relay",
        level: str = "warning",
        console: bool = False,
        file_path: Path | None = None,
    ) -> RelayLogger:
        """
        Install handlers on the named stdlib logger.

        Handlers from an earlier call for the same name are closed and
        replaced, so re-bootstrapping never duplicates output.

        Args:
            name: stdlib logger name
            level: One of debug, info, warning, error
            console: Also write to stderr
            file_path: Rotating log file; None disables file output
        """
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
        logger.propagate = False

        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        handlers: list[logging.Handler] = []
        if console:
            handlers.append(logging.StreamHandler(sys.stderr))
        if file_path is not None:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(
                RotatingFileHandler(
                    file_path,
                    maxBytes=cls.MAX_FILE_SIZE,
                    backupCount=cls.BACKUP_COUNT,
                )
            )
        for handler in handlers:
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return cls(logger)

    @classmethod
    def from_config(cls, config: LoggingConfig, name: str = "relay") -> RelayLogger:
        """Build a logger from the [logging] config section."""
        file_path = None
        if config.file:
            file_path = config.file_path or cls.LOG_FILE_PATH
        return cls.configure(name, config.level, config.console, file_path)

    @property
    def context(self) -> dict[str, Any]:
        return dict(self._context)

    def bind(self, **context: Any) -> RelayLogger:
        return type(self)(self._logger, {**self._context, **context})

    def _log(self, level: int, message: str, args: tuple, kwargs: dict) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if self._context:
            tags = " ".join(f"{key}={value}" for key, value in self._context.items())
            message = f"[{tags.replace('%', '%%')}] {message}"
        self._logger.log(level, message, *args, **kwargs)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, args, kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, message, args, kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, args, kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, args, kwargs)


class NullLogger(ILogger):
    """Discards everything; the fallback when nothing is bootstrapped."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def bind(self, **context: Any) -> NullLogger:
        return self
