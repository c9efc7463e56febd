"""
Core data types for cross-DEX price monitoring.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Token:
    """
    ERC20 token identity.

    Attributes:
        symbol: Display symbol (e.g., "WETH")
        address: Checksum address of the token contract
        decimals: On-chain decimal precision (0-255, practically 0-18)
    """

    symbol: str
    address: str
    decimals: int


@dataclass(frozen=True)
class TradingPair:
    """
    Base/quote pair quoted on every venue.

    Rates are expressed as quote token per one unit of base token.
    """

    base: Token
    quote: Token

    @property
    def path(self) -> List[str]:
        """Two-token swap path passed to getAmountsOut."""
        return [self.base.address, self.quote.address]

    @property
    def name(self) -> str:
        return f"{self.base.symbol}/{self.quote.symbol}"


@dataclass(frozen=True)
class Venue:
    """
    A single price-quoting source (one DEX router).

    Attributes:
        name: Display name used in reports
        router_address: Router contract address
        handle: Quote source used to issue getAmountsOut requests
    """

    name: str
    router_address: str
    handle: Optional[Any] = None


@dataclass(frozen=True)
class CostModel:
    """Flat cost model applied to every evaluated opportunity."""

    minimum_profit_threshold: Decimal
    simulated_cost: Decimal


@dataclass(frozen=True)
class VenueRate:
    """
    Normalized rate sampled from one venue during one tick.

    Attributes:
        venue: Venue the quote came from
        raw_quote: Raw integer output amount (quote token smallest units)
        rate: Quote token per one base token
    """

    venue: Venue
    raw_quote: int
    rate: Decimal


@dataclass(frozen=True)
class OpportunityResult:
    """
    Outcome of comparing venue rates for a single tick.

    Attributes:
        buy_venue: Venue with the lower rate
        sell_venue: Venue with the higher rate
        buy_rate: Rate on the buy venue
        sell_rate: Rate on the sell venue
        amount_in: Base token amount conceptually moved through both venues
        gross_profit: (sell_rate - buy_rate) * amount_in, in quote token
        simulated_cost: Flat simulated transaction cost
        net_profit: gross_profit - simulated_cost
        actionable: True when net_profit strictly exceeds the threshold
    """

    buy_venue: Venue
    sell_venue: Venue
    buy_rate: Decimal
    sell_rate: Decimal
    amount_in: Decimal
    gross_profit: Decimal
    simulated_cost: Decimal
    net_profit: Decimal
    actionable: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "buy_venue": self.buy_venue.name,
            "sell_venue": self.sell_venue.name,
            "buy_rate": float(self.buy_rate),
            "sell_rate": float(self.sell_rate),
            "amount_in": float(self.amount_in),
            "gross_profit": float(self.gross_profit),
            "simulated_cost": float(self.simulated_cost),
            "net_profit": float(self.net_profit),
            "actionable": self.actionable,
        }
