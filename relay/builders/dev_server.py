"""
Development server builder (`relay:dev-server`).

Starts a server command as a child process and reports readiness once the
server accepts TCP connections on its port. The process is left running
after the readiness event; the architect's ProcessRegistry cleans it up.
"""

from __future__ import annotations

import asyncio
import os
import socket
from collections.abc import AsyncIterator
from dataclasses import dataclass
from pathlib import Path

from pydantic import Field

from ..core.exceptions import ServiceStartFailure, SubprocessFailure
from ..core.interfaces.builder import BuildEvent, BuilderConfiguration, IBuilder
from ..core.models.base import OptionsModel
from ..core.settings import load_settings

# Wildcard binds are probed on loopback.
_PROBE_HOSTS = {"": "127.0.0.1", "0.0.0.0": "127.0.0.1", "::": "::1"}


class DevServerOptions(OptionsModel):
    """Options of the `relay:dev-server` builder.

    `command` may reference `{host}` and `{port}`; port 0 picks a free port.
    """

    command: list[str] = Field(min_length=1)
    host: str = "localhost"
    port: int = Field(default=4200, ge=0, le=65535)
    ssl: bool = False
    public_host: str | None = None
    watch: bool = True
    cwd: str | None = None
    env: dict[str, str] = Field(default_factory=dict)
    ready_timeout: float | None = Field(default=None, gt=0)
    poll_interval: float | None = Field(default=None, gt=0)


@dataclass(frozen=True)
class DevServerResult:
    """Connection details reported by a ready dev server."""

    host: str
    port: int


def find_free_port(host: str) -> int:
    """Ask the OS for a free TCP port on host."""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    with socket.socket(family, socket.SOCK_STREAM) as sock:
        sock.bind((_PROBE_HOSTS.get(host, host), 0))
        return sock.getsockname()[1]


async def wait_for_port(
    process: asyncio.subprocess.Process,
    host: str,
    port: int,
    timeout: float,
    interval: float,
) -> bool:
    """
    Poll until host:port accepts a connection.

    Returns:
        True once connected; False if the process exits or the timeout passes
    """
    probe_host = _PROBE_HOSTS.get(host, host)
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout

    while loop.time() < deadline:
        if process.returncode is not None:
            return False
        try:
            _, writer = await asyncio.open_connection(probe_host, port)
        except OSError:
            await asyncio.sleep(interval)
            continue
        writer.close()
        await writer.wait_closed()
        return True

    return False


class DevServerBuilder(IBuilder):
    """
    Runs a development server command.

    Emits one readiness event, then (in watch mode) a final event when the
    server process exits.
    """

    async def run(self, config: BuilderConfiguration) -> AsyncIterator[BuildEvent]:
        options: DevServerOptions = config.options
        label = f"{config.project}:{config.target}"
        logger = self.context.logger.bind(target=label)

        settings = load_settings(start_dir=str(self.context.workspace_root))
        timeout = options.ready_timeout or settings.dev_server.ready_timeout
        interval = options.poll_interval or settings.dev_server.poll_interval

        port = options.port or find_free_port(options.host)
        argv = [part.format(host=options.host, port=port) for part in options.command]
        cwd = Path(self.context.workspace_root) / config.root / (options.cwd or "")
        env = {**os.environ, **options.env}

        logger.info("Starting: %s", " ".join(argv))
        try:
            process = await asyncio.create_subprocess_exec(*argv, cwd=str(cwd), env=env)
        except OSError as e:
            yield BuildEvent(
                success=False,
                error=ServiceStartFailure(
                    f"Failed to start dev server '{argv[0]}': {e}",
                    target=label,
                    cause=e,
                ),
            )
            return

        self.context.processes.register(label, process)

        if not await wait_for_port(process, options.host, port, timeout, interval):
            if process.returncode is None:
                reason = f"did not accept connections on port {port} within {timeout}s"
                process.terminate()
            else:
                reason = f"exited with code {process.returncode} before becoming ready"
            logger.error("Dev server %s", reason)
            yield BuildEvent(
                success=False,
                error=ServiceStartFailure(f"Dev server {reason}", target=label),
            )
            return

        logger.info("Listening on %s:%d", options.host, port)
        yield BuildEvent(success=True, result=DevServerResult(host=options.host, port=port))

        if not options.watch:
            return

        returncode = await process.wait()
        error = None
        if returncode != 0:
            error = SubprocessFailure(
                f"Dev server exited with code {returncode}",
                exit_code=returncode,
                command=" ".join(argv),
            )
        yield BuildEvent(
            success=returncode == 0,
            result=DevServerResult(host=options.host, port=port),
            error=error,
        )
