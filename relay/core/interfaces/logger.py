"""
Diagnostic logging interface.

ILogger carries relay's internal diagnostics: resolved targets, stage
transitions, child-process exits. Anything meant for the person running
`relay e2e` goes through IPresenter instead.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ILogger(ABC):
    """Leveled diagnostics with optional bound context."""

    @abstractmethod
    def debug(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    @abstractmethod
    def info(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    @abstractmethod
    def warning(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    @abstractmethod
    def error(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    @abstractmethod
    def bind(self, **context: Any) -> ILogger:
        """
        Return a logger that tags every message with `key=value` pairs.

        Context accumulates: binding `stage=` on a logger already bound to
        `target=` keeps both.
        """
        ...
