"""
Output presenters for relay CLI.
"""

from .console import ConsolePresenter

__all__ = ["ConsolePresenter"]
