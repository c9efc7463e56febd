"""
Polygon cross-DEX arbitrage monitor.

Periodically quotes the same trading pair on two (or more) Uniswap V2 style
routers, normalizes the quotes into comparable rates, and reports when the
spread clears a profit threshold after a simulated transaction cost.
Read-only: no trade is ever executed.
"""

PROJECT_NAME = "polygon-arbitrage-bot"
VERSION = "0.1.0"

from polygon_arb.driver import PollingDriver
from polygon_arb.evaluator import evaluate, evaluate_rates
from polygon_arb.exceptions import (
    ArbError,
    ConfigurationInvalid,
    FetchFailure,
    NetworkError,
    QuoteIncomplete,
)
from polygon_arb.normalizer import normalize, to_smallest_units
from polygon_arb.types import (
    CostModel,
    OpportunityResult,
    Token,
    TradingPair,
    Venue,
    VenueRate,
)

__all__ = [
    "PROJECT_NAME",
    "VERSION",
    "PollingDriver",
    "evaluate",
    "evaluate_rates",
    "normalize",
    "to_smallest_units",
    "ArbError",
    "ConfigurationInvalid",
    "FetchFailure",
    "NetworkError",
    "QuoteIncomplete",
    "CostModel",
    "OpportunityResult",
    "Token",
    "TradingPair",
    "Venue",
    "VenueRate",
]
