"""
Quote source adapters for DEX routers.
"""

from .router import (
    UNISWAP_V2_ROUTER_ABI,
    QuoteSource,
    RetryingQuoteSource,
    RouterQuoteSource,
    connect_web3,
)

__all__ = [
    "UNISWAP_V2_ROUTER_ABI",
    "QuoteSource",
    "RetryingQuoteSource",
    "RouterQuoteSource",
    "connect_web3",
]
