"""
Reporting sinks for per-tick results.

LogReporter prints a console-friendly block for actionable opportunities
and one line per venue rate. RecordingReporter keeps everything in memory.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from .exceptions import FetchFailure, QuoteIncomplete
from .normalizer import format_amount
from .types import OpportunityResult, TradingPair, VenueRate
from .utils import get_logger

BANNER = "!" * 50


@runtime_checkable
class Reporter(Protocol):
    """Protocol for receiving per-tick results from the polling driver."""

    def report_rates(self, pair: TradingPair, samples: Sequence[VenueRate]) -> None:
        ...

    def report_opportunity(self, pair: TradingPair, result: OpportunityResult) -> None:
        ...

    def report_no_opportunity(
        self, pair: TradingPair, result: OpportunityResult
    ) -> None:
        ...

    def report_failure(self, failures: Sequence[FetchFailure]) -> None:
        ...


def describe_failure(failure: FetchFailure) -> str:
    """One-line description of a failed fetch, naming the cause."""
    cause = "incomplete quote" if isinstance(failure, QuoteIncomplete) else "fetch failed"
    venue = failure.venue or "unknown venue"
    return f"{venue}: {cause} ({failure})"


class LogReporter:
    """Reporter that writes through the logging module."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_logger(__name__)

    def report_rates(self, pair: TradingPair, samples: Sequence[VenueRate]) -> None:
        for sample in samples:
            self.logger.info(
                f"Price on {sample.venue.name}: 1 {pair.base.symbol} -> "
                f"{format_amount(sample.rate)} {pair.quote.symbol}"
            )

    def report_opportunity(self, pair: TradingPair, result: OpportunityResult) -> None:
        quote = pair.quote.symbol
        base = pair.base.symbol
        lines = [
            BANNER,
            "!!! Arbitrage Opportunity Detected!",
            BANNER,
            f"  - Action: BUY {result.amount_in} {base} on {result.buy_venue.name}",
            f"  - Action: SELL {result.amount_in} {base} on {result.sell_venue.name}",
            f"  - Est. Gross Profit: {format_amount(result.gross_profit)} {quote}",
            f"  - Simulated Gas Cost: -{format_amount(result.simulated_cost)} {quote}",
            f"  - SIMULATED NET PROFIT: {format_amount(result.net_profit)} {quote}",
            BANNER,
        ]
        self.logger.info("\n" + "\n".join(lines))

    def report_no_opportunity(
        self, pair: TradingPair, result: OpportunityResult
    ) -> None:
        self.logger.debug(
            f"No opportunity on {pair.name}: buy {result.buy_venue.name} "
            f"sell {result.sell_venue.name} net={format_amount(result.net_profit)} "
            f"{pair.quote.symbol}"
        )

    def report_failure(self, failures: Sequence[FetchFailure]) -> None:
        details = "; ".join(describe_failure(f) for f in failures)
        self.logger.warning(f"Error fetching prices, skipping tick: {details}")


@dataclass
class RecordingReporter:
    """In-memory reporter, useful for tests and embedding."""

    rates: List[List[VenueRate]] = field(default_factory=list)
    opportunities: List[OpportunityResult] = field(default_factory=list)
    rejected: List[OpportunityResult] = field(default_factory=list)
    failures: List[List[FetchFailure]] = field(default_factory=list)

    def report_rates(self, pair: TradingPair, samples: Sequence[VenueRate]) -> None:
        self.rates.append(list(samples))

    def report_opportunity(self, pair: TradingPair, result: OpportunityResult) -> None:
        self.opportunities.append(result)

    def report_no_opportunity(
        self, pair: TradingPair, result: OpportunityResult
    ) -> None:
        self.rejected.append(result)

    def report_failure(self, failures: Sequence[FetchFailure]) -> None:
        self.failures.append(list(failures))
