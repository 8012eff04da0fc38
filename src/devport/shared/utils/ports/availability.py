import asyncio
import errno
import os
import socket
import sys
from typing import List, Tuple

from .exceptions import HostUnavailable

__all__ = [
    "BindAddress",
    "DUAL_STACK_HOST",
    "resolve_bind_addresses",
    "is_port_available",
]

# (address family, socket address) as returned by getaddrinfo
BindAddress = Tuple[int, tuple]

# Errors meaning "this port is taken here, try the next one". Anything else is a host problem.
PORT_BUSY_ERRNOS = frozenset(
    code for code in (
        errno.EADDRINUSE,
        errno.EACCES,
        getattr(errno, "WSAEADDRINUSE", None),
        getattr(errno, "WSAEACCES", None),
    )
    if code is not None
)

# Same default asyncio uses for listening sockets
REUSE_ADDRESS = os.name == "posix" and sys.platform != "cygwin"

DUAL_STACK_HOST = "::"


async def resolve_bind_addresses(host: str) -> List[BindAddress]:
    """
    Resolve a host into the distinct addresses a listening server would bind.

    Args:
        host: Hostname or IP literal

    Returns:
        List[BindAddress]: Distinct (family, sockaddr) pairs, port left at 0

    Raises:
        HostUnavailable: If the host cannot be resolved
    """
    loop = asyncio.get_running_loop()
    try:
        infos = await loop.getaddrinfo(
            host, 0,
            type=socket.SOCK_STREAM,
            flags=socket.AI_PASSIVE
        )
    except (socket.gaierror, UnicodeError) as ex:
        raise HostUnavailable(host, str(ex)) from ex

    addresses: List[BindAddress] = []
    for family, _, _, _, sockaddr in infos:
        address = (family, sockaddr)
        if address not in addresses:
            addresses.append(address)

    if not addresses:
        raise HostUnavailable(host, "host did not resolve to any address")
    return addresses


def _with_port(sockaddr: tuple, port: int) -> tuple:
    return (sockaddr[0], port, *sockaddr[2:])


def _is_dual_stack(sockaddr: tuple) -> bool:
    # The IPv6 wildcard also takes the IPv4 wildcard when listened on dual stack
    return sockaddr[0] == DUAL_STACK_HOST and socket.has_dualstack_ipv6()


def is_port_available(host: str, addresses: List[BindAddress], port: int) -> bool:
    """
    Check if a port can be listened on at every address of a host.

    Each address is bound, put into listening state and closed straight away.
    Nothing here yields to the event loop, so concurrent probes in the same
    process never see each other's sockets.

    Args:
        host: Host the addresses belong to (used in error reports)
        addresses: Addresses from resolve_bind_addresses
        port: Port number to check

    Returns:
        bool: True if the port is free on all addresses, False otherwise

    Raises:
        HostUnavailable: If an address cannot be bound for any reason other
            than the port being taken
    """
    for family, sockaddr in addresses:
        try:
            with socket.socket(family, socket.SOCK_STREAM) as sock:
                if REUSE_ADDRESS:
                    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
                if family == socket.AF_INET6 and hasattr(socket, "IPPROTO_IPV6"):
                    sock.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY, 0 if _is_dual_stack(sockaddr) else 1)
                sock.bind(_with_port(sockaddr, port))
                sock.listen(1)
        except OSError as ex:
            if ex.errno in PORT_BUSY_ERRNOS:
                return False
            raise HostUnavailable(host, str(ex)) from ex
    return True
