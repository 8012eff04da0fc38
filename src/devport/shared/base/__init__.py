from .services import BaseService, BaseExecuteService

__all__ = [
    "BaseService",
    "BaseExecuteService",
]
