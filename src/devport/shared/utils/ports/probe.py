"""Free port lookup on a single host."""
import asyncio
from typing import Optional

from devport.shared.logging import get_logger
from devport.shared.settings import MIN_PORT, MAX_PORT, port_settings
from .availability import is_port_available, resolve_bind_addresses
from .exceptions import PortScanExhausted
from .types import PortRequest

logger = get_logger()


class PortProbe:
    """
    Finds the first free TCP port on a host at or above a starting port.

    The probe only forecasts availability: every candidate port is bound and
    released immediately, no reservation is held after a result is returned.
    Callers must bind promptly to avoid losing the port to another process.

    Example:
        probe = PortProbe(base_port=49152)
        port = await probe.find_port("127.0.0.1")
        port = await probe.probe(PortRequest(host="::1", port=8005))
    """

    def __init__(self, base_port: Optional[int] = None, max_port: Optional[int] = None):
        """
        Args:
            base_port: First port tried when a request has no port (default: DEVPORT_BASE_PORT)
            max_port: Last port tried before giving up (default: DEVPORT_MAX_PORT)
        """
        self.base_port = base_port if base_port is not None else port_settings.base_port
        self.max_port = max_port if max_port is not None else port_settings.max_port

        if not MIN_PORT <= self.base_port <= MAX_PORT:
            raise ValueError(f"base_port must be between {MIN_PORT} and {MAX_PORT}, got {self.base_port}")
        if not MIN_PORT <= self.max_port <= MAX_PORT:
            raise ValueError(f"max_port must be between {MIN_PORT} and {MAX_PORT}, got {self.max_port}")

    async def probe(self, request: PortRequest) -> int:
        """
        Scan upward for the first port free on every address of the host.

        Args:
            request: Host to probe and optional first port to try

        Returns:
            int: Free port number

        Raises:
            HostUnavailable: If the host cannot be resolved or bound at all
            PortScanExhausted: If no port up to max_port is free
        """
        port_min = request.port if request.port is not None else self.base_port
        if not MIN_PORT <= port_min <= MAX_PORT:
            raise ValueError(f"port must be between {MIN_PORT} and {MAX_PORT}, got {port_min}")

        addresses = await resolve_bind_addresses(request.host)

        for port in range(port_min, self.max_port + 1):
            if is_port_available(request.host, addresses, port):
                logger.debug(f"Port {port} is free on '{request.host}'")
                return port
            # let concurrent probes run between candidates
            await asyncio.sleep(0)

        raise PortScanExhausted(request.host, port_min, self.max_port)

    async def find_port(self, host: str, port: Optional[int] = None) -> int:
        """Shorthand for probe(PortRequest(host, port))."""
        return await self.probe(PortRequest(host=host, port=port))
