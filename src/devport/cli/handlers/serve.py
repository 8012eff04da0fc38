"""Handler for resolving ports and starting the development server"""
import asyncio
from typing import Any, Optional, Protocol

from devport.cli.models import ALL_INTERFACES_HOST, ServeConfiguration, ServeOptions
from devport.cli.services import ServeElevationCheckService, ServeStaticTaskService
from devport.cli.utils.proxy_utils import validate_proxy_url
from devport.shared.config import ProjectConfigReader
from devport.shared.logging import get_logger
from devport.shared.settings import port_settings
from devport.shared.utils.ports import ConsistentPortResolver, PortProbe

logger = get_logger()


class ProjectConfigSource(Protocol):
    def base_url(self, environment: str) -> str: ...


class ElevationCheck(Protocol):
    async def execute(self) -> Any: ...


class ServeTask(Protocol):
    async def execute(self, configuration: ServeConfiguration) -> Any: ...


class ServeHandler:
    """
    Orchestrates the serve command.

    Resolves the development server port and the live reload port at the
    same time, builds the final configuration, validates the proxy URL,
    runs the elevation check and hands the configuration to the serve task.

    Example:
        handler = ServeHandler()
        await handler.run(ServeOptions(port=4200, proxy="http://localhost:3000"))
    """

    def __init__(
        self,
        probe: Optional[PortProbe] = None,
        resolver: Optional[ConsistentPortResolver] = None,
        project_config: Optional[ProjectConfigSource] = None,
        elevation_check: Optional[ElevationCheck] = None,
        serve_task: Optional[ServeTask] = None
    ):
        self.probe = probe or PortProbe()
        self.resolver = resolver or ConsistentPortResolver(self.probe, max_rounds=port_settings.max_rounds)
        self.project_config = project_config or ProjectConfigReader()
        self.elevation_check = elevation_check or ServeElevationCheckService()
        self.serve_task = serve_task or ServeStaticTaskService()

    async def resolve_port(self, options: ServeOptions) -> int:
        """Return the explicit port, or probe for one on the server host."""
        if options.port:
            return options.port

        port = await self.probe.find_port(options.host or ALL_INTERFACES_HOST)
        logger.debug(f"Probed development server port {port}")
        return port

    async def build_configuration(self, options: ServeOptions) -> ServeConfiguration:
        """
        Resolve both ports concurrently and merge them into a new configuration.

        Args:
            options: Serve command options

        Returns:
            ServeConfiguration: Options plus ports, live reload host and base URL

        Raises:
            PortProbeError: If either port cannot be resolved
        """
        live_reload_host = options.live_reload_host or options.host

        port, live_reload_port = await asyncio.gather(
            self.resolve_port(options),
            self.resolver.resolve(live_reload_host, options.live_reload_port),
        )
        if not options.port and port == live_reload_port:
            # Both scans start from the same base and hold no reservation
            port = await self.probe.find_port(options.host or ALL_INTERFACES_HOST, live_reload_port + 1)
        logger.info(f"Using port {port}, live reload port {live_reload_port}")

        return ServeConfiguration.from_options(
            options,
            port=port,
            live_reload_port=live_reload_port,
            live_reload_host=live_reload_host,
            base_url=self.project_config.base_url(options.environment)
        )

    async def run(self, options: ServeOptions) -> Any:
        """
        Run the serve command.

        Args:
            options: Serve command options

        Returns:
            Any: Outcome of the serve task

        Raises:
            PortProbeError: If a port cannot be resolved
            ProxyURLMissingScheme: If the proxy URL has no http/https scheme
            ElevationDenied: If the elevation check rejects the session
        """
        configuration = await self.build_configuration(options)

        # fail before the elevation check may prompt the user
        validate_proxy_url(configuration.proxy)

        await self.elevation_check.execute()
        return await self.serve_task.execute(configuration)
