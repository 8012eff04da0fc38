import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from devport.shared.logging import get_logger


class BaseService(ABC):
    """Holds the logger shared by the serve command collaborators."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or get_logger(self.__class__.__module__)


class BaseExecuteService(BaseService):
    """A serve step run by ServeHandler, such as the elevation check or the server itself."""

    @abstractmethod
    async def execute(self, *args, **kwargs) -> Any:
        ...
