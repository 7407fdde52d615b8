"""
Unit tests for base URL construction.
"""

import pytest

from relay.utils.urls import build_base_url, normalize_public_host


class TestNormalizePublicHost:
    @pytest.mark.parametrize(
        ("public_host", "ssl", "expected"),
        [
            ("example.com", False, "http://example.com"),
            ("example.com", True, "https://example.com"),
            ("example.com:8080/app", False, "http://example.com:8080/app"),
            ("ws://example.com", True, "ws://example.com"),
            ("http://example.com", True, "http://example.com"),
        ],
    )
    def test_scheme_handling(self, public_host, ssl, expected):
        assert normalize_public_host(public_host, ssl) == expected


class TestBuildBaseUrl:
    def test_http_with_port(self):
        assert build_base_url("localhost", 4200, ssl=False) == "http://localhost:4200"

    def test_https_with_port(self):
        assert build_base_url("localhost", 4200, ssl=True) == "https://localhost:4200"

    def test_without_port(self):
        assert build_base_url("example.com", None, ssl=False) == "http://example.com"

    def test_ipv6_host_is_bracketed(self):
        assert build_base_url("::1", 4200, ssl=False) == "http://[::1]:4200"
