"""Utilities for working with the proxy URL."""

from __future__ import annotations

from typing import Optional

from devport.cli.exceptions import ProxyURLMissingScheme

PROXY_SCHEMES = ("http:", "https:")


def validate_proxy_url(proxy: Optional[str]) -> None:
    """Check that a proxy URL, when given, carries an http or https scheme.

    Args:
        proxy: Proxy URL from the command line, or None

    Raises:
        ProxyURLMissingScheme: If the URL does not start with 'http:' or 'https:'
    """
    if proxy and not proxy.startswith(PROXY_SCHEMES):
        raise ProxyURLMissingScheme(proxy)


def build_proxy_target(proxy: str, path: str, query: str = "") -> str:
    """Build the URL a request is forwarded to.

    Args:
        proxy: Proxy base URL (e.g., 'http://localhost:3000/api')
        path: Absolute request path (e.g., '/users/1')
        query: Raw query string without '?'

    Returns:
        Target URL with no double slash between proxy and path
    """
    target = f"{proxy.rstrip('/')}/{path.lstrip('/')}"
    if query:
        target = f"{target}?{query}"
    return target
