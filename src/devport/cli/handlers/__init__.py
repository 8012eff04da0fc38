from .serve import ServeHandler

__all__ = [
    "ServeHandler",
]
