"""Logging configuration for cofi.

Provides:
- Configurable log levels (WARNING, INFO, DEBUG)
- Colored output when stderr is a terminal
- Timing logs for filter passes and registry reconciles
"""

import logging
import sys
import time
from contextlib import contextmanager


# Default log format
DEFAULT_FORMAT = "%(levelname)s: %(message)s"
VERBOSE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEBUG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"

ROOT_LOGGER_NAME = "cofi"


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for terminal output."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        """Format log record with colors."""
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Configure logging for the cofi package.

    Args:
        verbose: Enable verbose logging (INFO level)
        debug: Enable debug logging (DEBUG level)

    Returns:
        Configured package logger

    Examples:
        >>> logger = setup_logging(verbose=True)
        >>> logger.info("Loaded 3 harpoon slots")
        INFO: Loaded 3 harpoon slots
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)

    # Remove existing handlers
    logger.handlers.clear()

    if debug:
        logger.setLevel(logging.DEBUG)
        log_format = DEBUG_FORMAT
    elif verbose:
        logger.setLevel(logging.INFO)
        log_format = VERBOSE_FORMAT
    else:
        logger.setLevel(logging.WARNING)
        log_format = DEFAULT_FORMAT

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logger.level)

    if sys.stderr.isatty():
        formatter = ColoredFormatter(log_format)
    else:
        formatter = logging.Formatter(log_format)

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Get logger instance.

    Args:
        name: Logger name (default: cofi)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


@contextmanager
def log_timing(operation: str, logger: logging.Logger):
    """Context manager for logging operation timing at DEBUG level.

    Args:
        operation: Operation description
        logger: Logger instance

    Examples:
        >>> with log_timing("filter pass", logger):
        ...     pipeline.filter_windows(state, "fire")
        DEBUG: filter pass completed in 0.41ms
    """
    start = time.perf_counter()

    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(f"{operation} completed in {elapsed_ms:.2f}ms")
