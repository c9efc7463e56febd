#!/usr/bin/env python3
"""
Cross-DEX arbitrage monitor runner.
"""
import sys

from polygon_arb.cli import main

if __name__ == "__main__":
    sys.exit(main())
