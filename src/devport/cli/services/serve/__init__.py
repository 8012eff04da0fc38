from .elevation_check import ServeElevationCheckService
from .static_server import DevServerApp, ServeStaticTaskService

__all__ = [
    "ServeElevationCheckService",
    "DevServerApp",
    "ServeStaticTaskService",
]
