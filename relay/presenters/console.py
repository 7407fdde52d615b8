"""
Console presenter for terminal output.

Implements human-readable output formatting for the CLI.
"""

import sys

from ..core.interfaces.presenter import IPresenter


class ConsolePresenter(IPresenter):
    """
    Console output presenter.

    Formats output for human-readable terminal display.
    """

    def __init__(self, use_color: bool = True, file=None, err_file=None) -> None:
        """
        Initialize console presenter.

        Args:
            use_color: Whether to use ANSI color codes
            file: Output file (defaults to sys.stdout)
            err_file: Error output file (defaults to sys.stderr)
        """
        self._file = file or sys.stdout
        self._err_file = err_file or sys.stderr
        self._use_color = use_color and getattr(self._file, "isatty", lambda: False)()

    def print(self, message: str) -> None:
        """Print a message to output."""
        print(message, file=self._file)

    def print_error(self, message: str, hint: str | None = None) -> None:
        """Print an error message (and hint) to stderr."""
        if self._use_color:
            print(f"\033[91mError: {message}\033[0m", file=self._err_file)
        else:
            print(f"Error: {message}", file=self._err_file)
        if hint:
            print(f"Hint: {hint}", file=self._err_file)

    def print_success(self, message: str) -> None:
        """Print a success message."""
        if self._use_color:
            print(f"\033[92m{message}\033[0m", file=self._file)
        else:
            print(message, file=self._file)

    def print_table(self, headers: list[str], rows: list[list[str]]) -> None:
        """
        Print a formatted table.

        Args:
            headers: Column headers
            rows: Table rows
        """
        if not rows:
            return

        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(str(cell)))

        header_line = "  ".join(str(h).ljust(widths[i]) for i, h in enumerate(headers))
        if self._use_color:
            print(f"\033[1m{header_line}\033[0m", file=self._file)
        else:
            print(header_line, file=self._file)

        print("-" * len(header_line), file=self._file)

        for row in rows:
            row_line = "  ".join(
                str(cell).ljust(widths[i]) if i < len(widths) else str(cell)
                for i, cell in enumerate(row)
            )
            print(row_line.rstrip(), file=self._file)
