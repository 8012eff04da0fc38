from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from devport.cli.models import ServeConfiguration

DISPLAY_HOST = "localhost"
WILDCARD_HOSTS = ("0.0.0.0", "::")


def format_url_host(host: Optional[str]) -> str:
    """Return a host as it appears in a URL: wildcards shown as localhost, IPv6 in brackets."""
    if not host or host in WILDCARD_HOSTS:
        return DISPLAY_HOST
    if ":" in host:
        return f"[{host}]"
    return host


def generate_welcome_message(configuration: ServeConfiguration) -> str:
    """Return the banner printed when the development server starts.

    Args:
        configuration: Final serve configuration with resolved ports

    Returns:
        A formatted multi-line string containing usage information.
    """
    if not configuration:
        raise ValueError("configuration is required")

    server_url = (
        f"{configuration.scheme}://{format_url_host(configuration.host)}:"
        f"{configuration.port}{configuration.base_url}"
    )
    server_info = f"- Server: {server_url}"

    if configuration.live_reload:
        live_reload_url = (
            f"{configuration.scheme}://{format_url_host(configuration.live_reload_host)}:"
            f"{configuration.live_reload_port}{configuration.live_reload_base_url or configuration.base_url}"
        )
        live_reload_info = f"- Live reload: {live_reload_url}"
    else:
        live_reload_info = "- Live reload: disabled"

    proxy_info = f"- Proxy: {configuration.proxy}" if configuration.proxy else "- Proxy: not configured"

    return f"""
Serving {configuration.output_path} ({configuration.environment})

{server_info}
{live_reload_info}
{proxy_info}
"""
