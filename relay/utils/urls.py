"""
Base URL construction for launched services.

Examples:
    normalize_public_host("example.com", ssl=False)   -> http://example.com
    normalize_public_host("example.com", ssl=True)    -> https://example.com
    normalize_public_host("ws://example.com", True)   -> ws://example.com
    build_base_url("localhost", 4200, ssl=False)      -> http://localhost:4200
    build_base_url("::1", 4200, ssl=True)             -> https://[::1]:4200
"""

import re
from urllib.parse import urlsplit, urlunsplit

_HAS_SCHEME = re.compile(r"^\w+://")


def _scheme(ssl: bool) -> str:
    return "https" if ssl else "http"


def normalize_public_host(public_host: str, ssl: bool) -> str:
    """
    Turn a public-facing host into a URL.

    A scheme already present is kept as is; otherwise https is prefixed
    when ssl is set and http when it is not.
    """
    if not _HAS_SCHEME.match(public_host):
        public_host = f"{_scheme(ssl)}://{public_host}"
    return urlunsplit(urlsplit(public_host))


def build_base_url(host: str, port: int | None, ssl: bool) -> str:
    """Build a URL from a host name, an optional port and the TLS flag."""
    if ":" in host and not host.startswith("["):
        host = f"[{host}]"
    netloc = host if port is None else f"{host}:{port}"
    return urlunsplit((_scheme(ssl), netloc, "", "", ""))
