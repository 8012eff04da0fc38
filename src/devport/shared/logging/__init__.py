from .factory import get_logger

__all__ = [
    "get_logger",
]
