from typing import Literal

__all__ = [
    "colorize_text",
]

COLOR_CODES = {
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "orange": "\033[38;5;208m",
    "cyan": "\033[36m",
    "bright_grey": "\033[97m",
    "light_grey": "\033[37m",
    "bright_red": "\033[91m",
    "reset": "\033[0m",
}


def colorize_text(
        text: str,
        color: Literal[
            "red", "green", "yellow", "orange", "cyan", "light_grey", "bright_grey", "bright_red", "reset"
        ] = "reset"
) -> str:
    """
    Colorize text for terminal output

    Args:
        text (str): Text to colorize
        color (str): Color name

    Returns:
        str: Colorized text
    """
    color_prefix = COLOR_CODES.get(color, '')
    color_suffix = COLOR_CODES['reset']
    return f"{color_prefix}{text}{color_suffix}"
