"""Centralized logging configuration for the freight calculator.

All modules obtain their logger through get_logger() so that handlers and
formatting are configured in exactly one place.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HTTP_LOGGERS = ("httpx", "httpcore")


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """Set up logging configuration for the application.

    Configures the root logger with a stdout handler and an optional file
    handler. Calling it again replaces the previous handlers.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a log file
        format_string: Optional custom format string

    Returns:
        Configured root logger instance

    Example:
        >>> logger = setup_logging(level="DEBUG")
        >>> logger.debug("Resolver defaults will be logged")
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # httpx logs every sheet request at INFO
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger instance inheriting the root configuration
    """
    return logging.getLogger(name)


# Initialize logging on module import; LOG_LEVEL overrides the default level
setup_logging(level=os.getenv("LOG_LEVEL", "INFO"))
