from .serve import (
    ServeElevationCheckService,
    DevServerApp,
    ServeStaticTaskService,
)

__all__ = [
    "ServeElevationCheckService",
    "DevServerApp",
    "ServeStaticTaskService",
]
