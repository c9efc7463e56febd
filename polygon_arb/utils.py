"""
Logging and timing helpers shared across the monitor.
"""

import logging
import time
from typing import Union


def get_logger(
    name: str,
    level: Union[str, int] = logging.INFO,
    minimal: bool = False,
) -> logging.Logger:
    """
    Get a structured logger with consistent formatting.

    Handlers are only attached when neither this logger nor the root logger
    has one, so logging_config.setup() wins when the CLI configures logging.

    Args:
        name: Logger name (typically __name__)
        level: Logging level
        minimal: If True, use simplified format (time + message only)

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    if logger.level == logging.NOTSET:
        logger.setLevel(level)

    if not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()

        if minimal:
            format_str = "%(asctime)s | %(message)s"
        else:
            format_str = (
                "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
            )

        handler.setFormatter(logging.Formatter(format_str, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger


def format_duration(seconds: float) -> str:
    """Format duration in seconds to human-readable string."""
    if seconds < 60:
        return f"{seconds:.2f}s"
    elif seconds < 3600:
        return f"{seconds / 60:.1f}m"
    else:
        return f"{seconds / 3600:.1f}h"


def monotonic() -> float:
    """Monotonic clock used for tick cadence."""
    return time.monotonic()
