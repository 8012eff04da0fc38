from dataclasses import dataclass
from typing import Optional

DEFAULT_HOST = "::1"
GENERIC_HOSTS = ("0.0.0.0", "127.0.0.1")


@dataclass(frozen=True)
class PortRequest:
    """Single probe target: a host and the first port to try (None = search base)."""

    host: str
    port: Optional[int] = None
