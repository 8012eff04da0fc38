import socket
import sys
from contextlib import contextmanager
from pathlib import Path

import pytest

# Add package sources to sys.path for tests
PROJECT_ROOT = Path(__file__).resolve().parents[1]
src_path = PROJECT_ROOT / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@contextmanager
def listening_socket(host: str = "127.0.0.1", port: int = 0):
    """Hold a listening socket on host:port (0 = any free port) for the duration of the block."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind((host, port))
        sock.listen(1)
        yield sock.getsockname()[1]
    finally:
        sock.close()


def unused_port(host: str = "127.0.0.1") -> int:
    """Return a port the OS considers free right now."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((host, 0))
        return sock.getsockname()[1]


@pytest.fixture
def occupied_port():
    """A port with a live listener on 127.0.0.1."""
    with listening_socket() as port:
        yield port


@pytest.fixture
def free_port():
    """A port that is free on 127.0.0.1 when the test starts."""
    return unused_port()
