from .serve import serve

__all__ = [
    "serve",
]
