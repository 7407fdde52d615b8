"""
Unit tests for SubServiceLauncher.

A stub `relay:dev-server` builder stands in for a real server.
"""

import pytest

from relay.builders.dev_server import DevServerOptions, DevServerResult
from relay.core.exceptions import InvalidServiceConfig, ServiceStartFailure
from relay.core.interfaces.builder import BuildEvent
from relay.core.interfaces.pipeline import ComputedFields
from relay.services.launcher.sub_service import SubServiceLauncher


@pytest.mark.asyncio
class TestStart:
    async def test_base_url_from_reported_port(self, architect, stub_dev_server):
        stub_dev_server.events = [
            BuildEvent(success=True, result=DevServerResult(host="localhost", port=4200))
        ]
        computed = ComputedFields()

        result = await SubServiceLauncher(architect).start(
            "app:serve", host="localhost", computed=computed
        )

        assert result.success is True
        assert result.base_url == "http://localhost:4200"
        assert computed.get("base_url") == "http://localhost:4200"
        assert computed.origin("base_url") == "dev-server"

    async def test_overrides_force_watch_off_and_pin_host_and_port(self, architect, stub_dev_server):
        await SubServiceLauncher(architect).start("app:serve:production", host="127.0.0.1", port=5000)

        (config,) = stub_dev_server.calls
        assert isinstance(config.options, DevServerOptions)
        assert config.options.watch is False
        assert config.options.host == "127.0.0.1"
        assert config.options.port == 5000
        assert config.configuration == "production"

    async def test_target_defaults_apply_when_nothing_is_pinned(self, architect, stub_dev_server):
        await SubServiceLauncher(architect).start("app:serve")

        (config,) = stub_dev_server.calls
        assert config.options.port == 4200
        assert config.options.host == "localhost"

    async def test_base_url_uses_callers_host_not_reported_host(self, architect, stub_dev_server):
        # The stub reports 0.0.0.0; the URL is built from the host the caller asked for.
        result = await SubServiceLauncher(architect).start("app:serve", host="localhost")

        assert result.result.host == "0.0.0.0"
        assert result.base_url == "http://localhost:4300"

    async def test_only_first_event_is_consumed(self, architect, stub_dev_server):
        stub_dev_server.events = [
            BuildEvent(success=True, result=DevServerResult(host="localhost", port=4300)),
            BuildEvent(success=False, error=RuntimeError("server stopped")),
        ]

        result = await SubServiceLauncher(architect).start("app:serve", host="localhost")

        assert result.success is True

    async def test_failed_first_event_raises_and_computes_nothing(self, architect, stub_dev_server):
        stub_dev_server.events = [BuildEvent(success=False, error=OSError("port in use"))]
        computed = ComputedFields()

        with pytest.raises(ServiceStartFailure) as exc_info:
            await SubServiceLauncher(architect).start("app:serve", computed=computed)

        assert isinstance(exc_info.value.__cause__, OSError)
        assert "base_url" not in computed

    async def test_empty_stream_raises(self, architect, stub_dev_server):
        stub_dev_server.events = []

        with pytest.raises(ServiceStartFailure, match="without reporting readiness"):
            await SubServiceLauncher(architect).start("app:serve")

    async def test_malformed_reference(self, architect, stub_dev_server):
        with pytest.raises(InvalidServiceConfig):
            await SubServiceLauncher(architect).start("app")

    async def test_unknown_target(self, architect, stub_dev_server):
        with pytest.raises(InvalidServiceConfig):
            await SubServiceLauncher(architect).start("app:missing")

    async def test_invalid_service_options(self, architect, stub_dev_server):
        with pytest.raises(InvalidServiceConfig):
            await SubServiceLauncher(architect).start("app:serve", port=70000)


class TestComputeBaseUrl:
    def options(self, **values):
        return DevServerOptions(command=["serve"], **values)

    def test_public_host_without_ssl(self):
        url = SubServiceLauncher.compute_base_url(
            self.options(public_host="example.com"), DevServerResult("localhost", 4200), "localhost"
        )

        assert url == "http://example.com"

    def test_public_host_with_ssl(self):
        url = SubServiceLauncher.compute_base_url(
            self.options(public_host="example.com", ssl=True), None, "localhost"
        )

        assert url == "https://example.com"

    def test_public_host_keeps_its_scheme(self):
        url = SubServiceLauncher.compute_base_url(
            self.options(public_host="ws://example.com:9000", ssl=True), None, None
        )

        assert url == "ws://example.com:9000"

    def test_no_public_host_localhost_4200(self):
        url = SubServiceLauncher.compute_base_url(
            self.options(), DevServerResult("localhost", 4200), "localhost"
        )

        assert url == "http://localhost:4200"

    def test_ssl_scheme(self):
        url = SubServiceLauncher.compute_base_url(
            self.options(ssl=True), {"port": 8443}, "localhost"
        )

        assert url == "https://localhost:8443"

    def test_falls_back_to_service_host(self):
        url = SubServiceLauncher.compute_base_url(
            self.options(host="127.0.0.1"), DevServerResult("127.0.0.1", 4200), None
        )

        assert url == "http://127.0.0.1:4200"
