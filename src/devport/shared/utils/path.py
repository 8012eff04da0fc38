import os
from pathlib import Path


def get_base_dir() -> Path:
    """Return the current working directory as the base directory.

    Relative project paths (configuration file, output path) are resolved
    against it.

    Returns:
        Path: The absolute path to the current working directory.
    """
    return Path(os.getcwd())


def get_config_path(config_path: str | Path = "devport.yaml") -> Path:
    """Resolve the full path to the project configuration file.

    Args:
        config_path: Path to the configuration file. Can be absolute
            or relative. Defaults to "devport.yaml".

    Returns:
        Path: Absolute path to the configuration file.
    """
    path = Path(config_path)
    if not path.is_absolute():
        path = get_base_dir() / path
    return path
