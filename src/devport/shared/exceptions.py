class DevportError(Exception):
    """Base class for all devport errors."""
    pass
