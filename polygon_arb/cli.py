"""
Cross-DEX arbitrage monitor CLI.

Polls the configured routers and prints opportunities in a
console-friendly format. Read-only: no transaction is ever sent.

Usage:
    polygon-arb
    polygon-arb --config configs/polygon.yaml
    polygon-arb --config configs/polygon.yaml --once
"""

import argparse
import asyncio
import sys
import time
from typing import List, Optional

from web3 import Web3

from . import logging_config
from .adapters import RetryingQuoteSource, RouterQuoteSource, connect_web3
from .config import ArbConfig, load_config
from .driver import PollingDriver
from .exceptions import ConfigurationInvalid, NetworkError
from .types import Venue
from .utils import format_duration, get_logger

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Cross-DEX arbitrage monitor (read-only simulation)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run with default config
  polygon-arb

  # Use custom config
  polygon-arb --config configs/polygon.yaml

  # Single tick (for testing/CI)
  polygon-arb --config configs/polygon.yaml --once
        """,
    )

    parser.add_argument(
        "--config",
        default="configs/polygon.yaml",
        help="Path to config YAML file (default: configs/polygon.yaml)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single tick and exit",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors",
    )

    return parser.parse_args(argv)


def build_venues(config: ArbConfig, web3: Web3) -> List[Venue]:
    """Create one venue per active dex, wrapping each router in retries if configured."""
    venues = []
    for dex in config.active_dexes:
        source = RouterQuoteSource(web3, dex["router_address"], name=dex["name"])
        if config.max_retries > 0:
            source = RetryingQuoteSource(source, max_attempts=config.max_retries + 1)
        venues.append(
            Venue(name=dex["name"], router_address=dex["router_address"], handle=source)
        )
    return venues


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_args(argv)

    if args.verbose:
        logging_config.setup_debug()
    elif args.quiet:
        logging_config.setup_minimal()
    else:
        logging_config.setup()

    logger.info("Starting cross-DEX arbitrage monitor...")

    # Config errors abort before any network activity
    try:
        config = load_config(args.config)
    except ConfigurationInvalid as e:
        print(f"❌ Config error: {e}", file=sys.stderr)
        return 1

    try:
        web3 = connect_web3(config.rpc_url, timeout=config.request_timeout_sec)
        driver = PollingDriver(
            pair=config.pair,
            venues=build_venues(config, web3),
            cost_model=config.cost_model,
            amount_in=config.amount_in,
            interval_sec=config.check_interval_seconds,
        )
    except (NetworkError, ConfigurationInvalid, ValueError) as e:
        print(f"❌ Initialization failed: {e}", file=sys.stderr)
        return 1

    started = time.monotonic()
    try:
        asyncio.run(driver.run(max_ticks=1 if args.once else None))
    except KeyboardInterrupt:
        print("\n\n⏸ Stopped by user")

    logger.info(
        f"Ran {format_duration(time.monotonic() - started)}: {driver.summary()}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
