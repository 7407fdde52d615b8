"""
Launch an auxiliary service target and derive its base URL.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

from ...core.di import get_logger
from ...core.exceptions import ServiceStartFailure
from ...core.interfaces.pipeline import ComputedFields, SubServiceResult
from ...utils.urls import build_base_url, normalize_public_host

if TYPE_CHECKING:
    from ...architect.architect import Architect
    from ...core.interfaces.builder import BuildEvent
    from ...core.interfaces.logger import ILogger


def _payload_value(payload: Any, name: str) -> Any:
    if isinstance(payload, dict):
        return payload.get(name)
    return getattr(payload, name, None)


class SubServiceLauncher:
    """
    Starts a service target (e.g. a dev server) and waits for readiness.

    Only the first event of the service's stream is consumed. The rest is
    abandoned and the service keeps running; stopping it is left to the
    owner of the architect's process registry.

    Usage:
        launcher = SubServiceLauncher(architect)
        result = await launcher.start("app:serve", host="localhost", computed=computed)
        result.base_url  # "http://localhost:4200"
    """

    def __init__(self, architect: Architect, logger: ILogger | None = None) -> None:
        self._architect = architect
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        if self._logger is None:
            self._logger = get_logger()
        return self._logger

    async def start(
        self,
        target_ref: str,
        *,
        host: str | None = None,
        port: int | None = None,
        computed: ComputedFields | None = None,
        origin: str = "dev-server",
    ) -> SubServiceResult:
        """
        Launch the target and compute its base URL.

        Watch mode is always forced off; host and port are pinned when given.
        On success the base URL is recorded in `computed` under `base_url`.

        Raises:
            InvalidServiceConfig: If the reference or its options are invalid
            ServiceStartFailure: If the first event reports failure
        """
        overrides: dict[str, Any] = {"watch": False}
        if host is not None:
            overrides["host"] = host
        if port is not None:
            overrides["port"] = port

        spec = self._architect.parse_target_string(target_ref, overrides)
        builder, config = self._architect.resolve(spec)

        self.logger.debug("Launching %s with overrides %s", spec, overrides)
        event = await self._first_event(builder.run(config), target_ref)

        if not event.success:
            raise ServiceStartFailure(
                f"Service '{target_ref}' failed to start",
                target=target_ref,
                cause=event.error,
            )

        base_url = self.compute_base_url(config.options, event.result, host)
        if computed is not None:
            computed.set("base_url", base_url, origin)

        self.logger.info("Service %s is ready at %s", target_ref, base_url)
        return SubServiceResult(success=True, result=event.result, base_url=base_url)

    @staticmethod
    def compute_base_url(service_options: Any, payload: Any, host: str | None) -> str:
        """
        Derive the URL clients should use to reach the service.

        An explicit public host wins. Otherwise the URL is built from the
        caller's host option (not the host the service reports) and the
        port the service reports.
        """
        ssl = bool(getattr(service_options, "ssl", False))
        public_host = getattr(service_options, "public_host", None)
        if public_host:
            return normalize_public_host(public_host, ssl)

        if host is None:
            host = getattr(service_options, "host", None) or "localhost"
        port = _payload_value(payload, "port")
        return build_base_url(host, int(port) if port is not None else None, ssl)

    @staticmethod
    async def _first_event(events: AsyncIterator[BuildEvent], target_ref: str) -> BuildEvent:
        async for event in events:
            return event
        raise ServiceStartFailure(
            f"Service '{target_ref}' finished without reporting readiness",
            target=target_ref,
        )
