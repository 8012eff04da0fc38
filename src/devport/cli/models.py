from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from devport.shared.config import DEFAULT_BASE_URL
from devport.shared.settings import port_settings

__all__ = [
    "ALL_INTERFACES_HOST",
    "ServeOptions",
    "ServeConfiguration",
]

# Host the server listens on and the main port is probed against when no host is given.
# Dual stack where the platform supports it.
ALL_INTERFACES_HOST = "::"


class ServeOptions(BaseModel):
    """Options of the serve command, as given by the user."""
    model_config = ConfigDict(frozen=True)

    port: int = Field(
        default_factory=lambda: port_settings.default_port,
        ge=0,
        le=65535,
        description="Development server port, 0 to probe for a free one"
    )
    host: Optional[str] = Field(
        default=None,
        description="Host to listen on, all interfaces when not set"
    )
    proxy: Optional[str] = Field(
        default=None,
        description="URL unmatched requests are forwarded to"
    )
    insecure_proxy: bool = Field(
        default=False,
        description="Skip TLS certificate verification of the proxy target"
    )
    watcher: str = Field(default="events")
    live_reload: bool = Field(default=True)
    live_reload_host: Optional[str] = Field(
        default=None,
        description="Live reload host, defaults to host"
    )
    live_reload_base_url: Optional[str] = Field(
        default=None,
        description="Live reload base URL, defaults to base_url"
    )
    live_reload_port: Optional[int] = Field(
        default=None,
        ge=1,
        le=65535,
        description="First port tried for live reload"
    )
    environment: str = Field(default="development")
    output_path: Path = Field(default=Path("dist"))
    ssl: bool = Field(default=False)
    ssl_key: Path = Field(default=Path("ssl/server.key"))
    ssl_cert: Path = Field(default=Path("ssl/server.crt"))


class ServeConfiguration(ServeOptions):
    """Serve options merged with the resolved ports and the environment base URL."""

    port: int = Field(ge=1, le=65535)
    live_reload_port: int = Field(ge=1, le=65535)
    base_url: str = Field(default=DEFAULT_BASE_URL)

    @classmethod
    def from_options(
        cls,
        options: ServeOptions,
        port: int,
        live_reload_port: int,
        live_reload_host: Optional[str],
        base_url: str
    ) -> "ServeConfiguration":
        """Build a new configuration, leaving the options untouched."""
        return cls.model_validate({
            **options.model_dump(),
            "port": port,
            "live_reload_port": live_reload_port,
            "live_reload_host": live_reload_host,
            "base_url": base_url,
        })

    @property
    def listen_host(self) -> str:
        return self.host or ALL_INTERFACES_HOST

    @property
    def scheme(self) -> str:
        return "https" if self.ssl else "http"
