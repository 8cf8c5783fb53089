"""Logging configuration.

Everything goes to stderr; stdout is reserved for the downstream
program's protocol traffic once the bootstrap hands off.
"""

import json
import logging
import sys
from typing import Any, Dict

APP_LOGGER = "remix_bootstrap"


class ColorCodes:
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    BOLD = "\033[1m"


LEVEL_COLORS = {
    "DEBUG": ColorCodes.BLUE,
    "INFO": ColorCodes.GREEN,
    "WARNING": ColorCodes.YELLOW,
    "ERROR": ColorCodes.RED + ColorCodes.BOLD,
    "CRITICAL": ColorCodes.MAGENTA + ColorCodes.BOLD,
}


class JsonFormatter(logging.Formatter):
    """Format log records as color-coded JSON."""

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelname, "")

        output = {
            "ts": self.formatTime(record),
            "level": record.levelname,
        }

        # Event dicts: {"event": "...", **fields}
        if isinstance(record.msg, dict):
            fields = dict(record.msg)
            output["msg"] = fields.pop("event", "")
            if fields:
                output["data"] = fields
        else:
            output["msg"] = record.getMessage()

        if hasattr(record, "data"):
            output["data"] = {**output.get("data", {}), **record.data}

        json_str = json.dumps(output, default=str)
        return f"{color}{json_str}{ColorCodes.RESET}"


def configure_logging(level: str = "INFO") -> None:
    """Set up application logging with JSON formatting on stderr."""
    app_logger = logging.getLogger(APP_LOGGER)

    # Only configure if not already configured
    if not app_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonFormatter())
        app_logger.addHandler(handler)
        app_logger.propagate = False

    app_logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def flush_logging() -> None:
    """Flush handlers before the process image is replaced."""
    for handler in logging.getLogger(APP_LOGGER).handlers:
        handler.flush()


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    if name == APP_LOGGER or name.startswith(f"{APP_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_LOGGER}.{name}")


def log_with_data(
    logger: logging.Logger, level: int, msg: str, data: Dict[str, Any] = None
):
    """Log a message with optional structured data."""
    if data:
        logger.log(level, msg, extra={"data": data})
    else:
        logger.log(level, msg)
