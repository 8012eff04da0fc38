import logging
from datetime import datetime

from devport.shared.utils.text import colorize_text


class LogStreamFormatter(logging.Formatter):
    """
    Basic formatter for stream output with standard format. Adds colors to log messages based on level
    """
    COLOR_ALIASES = {
        "DEBUG": "light_grey",
        "INFO": "bright_grey",
        "WARNING": "orange",
        "ERROR": "red",
        "CRITICAL": "bright_red",
    }

    def format(self, record: logging.LogRecord):
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S,%f')[:-3]
        formatted_message = f"{timestamp} - {record.levelname} - {record.name} - {record.getMessage()}"

        if record.exc_info:
            formatted_message = f"{formatted_message}\n{self.formatException(record.exc_info)}"

        return self._colorize(record.levelname, formatted_message)

    def _colorize(self, level: str, message: str):
        color_alias = self.COLOR_ALIASES.get(level, self.COLOR_ALIASES["INFO"])
        return colorize_text(text=message, color=color_alias)


class LogStreamHandler(logging.StreamHandler):
    """
    StreamHandler with the colorized devport format
    """

    def __init__(self, stream=None):
        super().__init__(stream)
        self.setFormatter(LogStreamFormatter())
