"""Port resolution that agrees across every interface a server listens on."""
import asyncio
from typing import Optional, Sequence

from devport.shared.logging import get_logger
from .exceptions import PortConvergenceError
from .probe import PortProbe
from .types import DEFAULT_HOST, GENERIC_HOSTS, PortRequest

logger = get_logger()


def build_candidate_hosts(requested_host: Optional[str] = None) -> tuple[str, ...]:
    """
    Build the hosts a port must be free on.

    The requested host always comes first; the generic wildcard and loopback
    hosts follow unless they are the requested host itself.

    Args:
        requested_host: Host the server was asked to bind (default: "::1")

    Returns:
        tuple[str, ...]: Distinct candidate hosts
    """
    host = requested_host or DEFAULT_HOST
    return (host, *(candidate for candidate in GENERIC_HOSTS if candidate != host))


class ConsistentPortResolver:
    """
    Resolves a port that is free on the requested host and on the generic
    wildcard and loopback hosts at the same time.

    Every round probes all candidate hosts concurrently and compares the
    results. If they disagree, a new round starts from the probe's search
    base: the explicit port only seeds the first round.

    Example:
        resolver = ConsistentPortResolver(PortProbe())
        port = await resolver.resolve("0.0.0.0", 8005)
    """

    def __init__(self, probe: Optional[PortProbe] = None, max_rounds: Optional[int] = None):
        """
        Args:
            probe: PortProbe used for every candidate host
            max_rounds: Rounds allowed before PortConvergenceError (None = unbounded)
        """
        if max_rounds is not None and max_rounds < 1:
            raise ValueError(f"max_rounds must be positive, got {max_rounds}")

        self.probe = probe or PortProbe()
        self.max_rounds = max_rounds

    async def resolve(self, requested_host: Optional[str] = None, explicit_port: Optional[int] = None) -> int:
        """
        Resolve a port that every candidate host agrees on.

        Args:
            requested_host: Host the server will bind (default: "::1")
            explicit_port: First port tried on every host, first round only

        Returns:
            int: Port free on all candidate hosts in the same round

        Raises:
            HostUnavailable: If any candidate host cannot be bound
            PortScanExhausted: If any candidate host has no free port left
            PortConvergenceError: If max_rounds is set and exceeded
        """
        host = requested_host or DEFAULT_HOST
        port = explicit_port
        rounds = 0

        while self.max_rounds is None or rounds < self.max_rounds:
            rounds += 1
            candidates = build_candidate_hosts(host)
            results = await self._probe_round(candidates, port)

            reference = results.pop()
            if all(result == reference for result in results):
                logger.debug(f"Hosts {', '.join(candidates)} agreed on port {reference} in round {rounds}")
                return reference

            logger.debug(
                f"Hosts {', '.join(candidates)} disagreed on ports {results + [reference]}, "
                f"retrying from port {self.probe.base_port}"
            )
            port = None

        raise PortConvergenceError(host, rounds)

    async def _probe_round(self, hosts: Sequence[str], port: Optional[int]) -> list[int]:
        return list(await asyncio.gather(
            *(self.probe.probe(PortRequest(host=candidate, port=port)) for candidate in hosts)
        ))
