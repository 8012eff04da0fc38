"""Port-related utilities for devport."""

from .availability import (
    resolve_bind_addresses,
    is_port_available,
)
from .consistency import (
    ConsistentPortResolver,
    build_candidate_hosts,
)
from .exceptions import (
    PortProbeError,
    PortScanExhausted,
    HostUnavailable,
    PortConvergenceError,
)
from .probe import PortProbe
from .types import PortRequest, DEFAULT_HOST, GENERIC_HOSTS

__all__ = [
    "resolve_bind_addresses",
    "is_port_available",
    "ConsistentPortResolver",
    "build_candidate_hosts",
    "PortProbeError",
    "PortScanExhausted",
    "HostUnavailable",
    "PortConvergenceError",
    "PortProbe",
    "PortRequest",
    "DEFAULT_HOST",
    "GENERIC_HOSTS",
]
