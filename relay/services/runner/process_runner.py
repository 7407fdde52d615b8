"""
Run a tool's entry point in an isolated Python process.

The tool is imported and called inside a child interpreter so that its
module state, working directory and crashes never leak into relay.
"""

from __future__ import annotations

import asyncio
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ...core.di import get_logger
from ...core.exceptions import SubprocessFailure
from ...core.interfaces.builder import BuildEvent

if TYPE_CHECKING:
    from ...core.interfaces.logger import ILogger

CHILD_MODULE = "relay.services.runner.fork"

# `-c` puts '' (the cwd, here the project root) first on sys.path. It is removed before
# relay is imported; the project root is only searched for the payload module.
CHILD_BOOTSTRAP = (
    "import sys\n"
    "if sys.path and sys.path[0] == '':\n"
    "    del sys.path[0]\n"
    f"from {CHILD_MODULE} import main\n"
    "sys.exit(main())\n"
)


class ProcessRunner:
    """
    Spawns a child interpreter running relay.services.runner.fork and
    reports its outcome.

    Failures are reported as a failed BuildEvent carrying a
    SubprocessFailure; nothing is raised for a tool that exits non-zero.

    Usage:
        runner = ProcessRunner()
        event = await runner.run(root, "protractor.launcher", "init", [config_path, {}])
    """

    def __init__(
        self,
        python: str | None = None,
        logger: ILogger | None = None,
    ) -> None:
        self._python = python or sys.executable
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        if self._logger is None:
            self._logger = get_logger()
        return self._logger

    def build_payload(
        self,
        root: Path,
        entry_point: str,
        invocation: str,
        args: Sequence[Any],
    ) -> bytes:
        """Encode the instructions the child process reads from stdin."""
        payload = {
            "root": str(root),
            "module": entry_point,
            "invocation": invocation,
            "args": list(args),
        }
        return json.dumps(payload).encode("utf-8")

    async def run(
        self,
        root: Path,
        entry_point: str,
        invocation: str,
        args: Sequence[Any] = (),
    ) -> BuildEvent:
        """
        Import `entry_point` from `root` in a child process and call `invocation(*args)`.

        Args:
            root: Directory the module is resolved from; also the child's cwd
            entry_point: Dotted module name or path to a .py file
            invocation: Name of the callable in that module
            args: JSON-serializable positional arguments

        Returns:
            BuildEvent with success=True when the child exits 0
        """
        command = f"{entry_point}:{invocation}"
        stdin = self.build_payload(root, entry_point, invocation, args)

        log = self.logger.bind(command=command)
        log.info("Running in %s", root)
        try:
            process = await asyncio.create_subprocess_exec(
                self._python,
                "-c",
                CHILD_BOOTSTRAP,
                cwd=str(root),
                stdin=asyncio.subprocess.PIPE,
            )
            await process.communicate(stdin)
        except OSError as e:
            log.error("Failed to spawn: %s", e)
            return BuildEvent(
                success=False,
                error=SubprocessFailure(
                    f"Failed to start {command}: {e}",
                    command=command,
                    cause=e,
                ),
            )

        returncode = process.returncode
        if returncode != 0:
            log.error("Exited with code %s", returncode)
            return BuildEvent(
                success=False,
                error=SubprocessFailure(
                    f"{command} exited with code {returncode}",
                    exit_code=returncode,
                    command=command,
                ),
            )

        log.debug("Finished")
        return BuildEvent(success=True)
