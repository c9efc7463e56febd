"""
Logging configuration for cleaner console output.

Usage:
    from polygon_arb import logging_config
    logging_config.setup()
"""

import logging
import sys


def setup(level=logging.INFO):
    """
    Configure logging for cleaner, more readable output.

    - Suppresses verbose HTTP request logs from web3/urllib3
    - Uses shorter timestamp format (HH:MM:SS instead of full datetime)
    """
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    # Minimal format: time + level + message
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(message)s", datefmt="%H:%M:%S"
    )
    console.setFormatter(formatter)
    root.addHandler(console)

    # Suppress noisy loggers
    logging.getLogger("web3").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    # Hand module loggers created by get_logger() over to the root handler
    for name, existing in list(logging.root.manager.loggerDict.items()):
        if name.startswith("polygon_arb.") and isinstance(existing, logging.Logger):
            existing.handlers.clear()
            existing.setLevel(logging.NOTSET)
            existing.propagate = True

    logging.getLogger("polygon_arb").setLevel(level)


def setup_minimal():
    """Only warnings and errors."""
    setup(level=logging.WARNING)


def setup_debug():
    """
    Verbose logging for debugging.
    Shows everything including RPC requests.
    """
    setup(level=logging.DEBUG)
    logging.getLogger("web3").setLevel(logging.DEBUG)
