from typing import Optional

from devport.shared.exceptions import DevportError


class PortProbeError(DevportError):
    pass


class PortScanExhausted(PortProbeError):
    def __init__(self, host: str, port_min: int, port_max: int):
        self.host = host
        self.port_min = port_min
        self.port_max = port_max
        super().__init__(f"No free port on '{host}' in range {port_min}-{port_max}")


class HostUnavailable(PortProbeError):
    def __init__(self, host: str, reason: Optional[str] = None):
        self.host = host
        self.reason = reason
        message = f"Cannot bind to host '{host}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class PortConvergenceError(PortProbeError):
    def __init__(self, host: str, rounds: int):
        self.host = host
        self.rounds = rounds
        super().__init__(
            f"Candidate hosts for '{host}' did not agree on a free port after {rounds} rounds"
        )
