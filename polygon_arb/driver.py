"""
Fixed-interval polling driver.

Each tick quotes the same input amount on every venue concurrently, waits
for all of them, then evaluates. A failure on any venue skips the whole
tick without partial evaluation or a fallback to stale rates. Ticks
never overlap: the next wait is armed only after the previous tick has
finished.
"""

import asyncio
from decimal import Decimal
from typing import Awaitable, Callable, List, Optional, Sequence

from .evaluator import evaluate_rates
from .exceptions import ConfigurationInvalid, FetchFailure
from .normalizer import extract_quoted_amount, normalize, to_smallest_units
from .reporting import LogReporter, Reporter
from .types import CostModel, OpportunityResult, TradingPair, Venue, VenueRate
from .utils import get_logger, monotonic

logger = get_logger(__name__)


class PollingDriver:
    """
    Runs the Waiting -> Fetching -> Evaluating loop.

    All constructor arguments are read-only for the driver's lifetime and
    no per-tick data survives past the tick that produced it.
    """

    def __init__(
        self,
        pair: TradingPair,
        venues: Sequence[Venue],
        cost_model: CostModel,
        amount_in: Decimal,
        interval_sec: int,
        reporter: Optional[Reporter] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = monotonic,
    ):
        """
        Args:
            pair: Base/quote pair quoted on every venue
            venues: Ordered venues, at least two, each with a quote handle
            cost_model: Threshold and simulated cost
            amount_in: Base token amount (human units) quoted each tick
            interval_sec: Whole seconds between tick starts, at least 1
            reporter: Sink for rates, opportunities and failures
            sleep: Async sleep, injectable for tests
            clock: Monotonic clock, injectable for tests

        Raises:
            ConfigurationInvalid: On fewer than two venues, a venue without a
                handle, a sub-second interval, or a non-positive amount
        """
        if len(venues) < 2:
            raise ConfigurationInvalid(
                f"At least two venues are required, got {len(venues)}"
            )
        for venue in venues:
            if venue.handle is None:
                raise ConfigurationInvalid(f"Venue '{venue.name}' has no quote source")
        if isinstance(interval_sec, bool) or not isinstance(interval_sec, int):
            raise ConfigurationInvalid("Polling interval must be whole seconds")
        if interval_sec < 1:
            raise ConfigurationInvalid(
                f"Polling interval must be >= 1 second, got {interval_sec}"
            )

        self.pair = pair
        self.venues = tuple(venues)
        self.cost_model = cost_model
        self.amount_in = amount_in
        self.interval_sec = interval_sec
        self.reporter = reporter or LogReporter()
        self._sleep = sleep
        self._clock = clock

        # Base decimals scale the input; quote decimals scale the output
        try:
            self.amount_in_units = to_smallest_units(amount_in, pair.base.decimals)
        except ValueError as e:
            raise ConfigurationInvalid(str(e)) from e
        if self.amount_in_units == 0:
            raise ConfigurationInvalid(
                f"amount_in {amount_in} is below one unit of {pair.base.symbol}"
            )

        # Counters for the shutdown summary only
        self.ticks = 0
        self.failed_ticks = 0
        self.actionable_ticks = 0

    async def fetch_rate(self, venue: Venue) -> VenueRate:
        """
        Quote amount_in on one venue and normalize the result.

        The blocking adapter call runs in the default thread pool.

        Raises:
            FetchFailure: Request failed or response was malformed
            QuoteIncomplete: Fewer than two amounts, or a zero quote
        """
        loop = asyncio.get_running_loop()
        try:
            amounts = await loop.run_in_executor(
                None,
                venue.handle.get_amounts_out,
                self.amount_in_units,
                self.pair.path,
            )
            raw = extract_quoted_amount(amounts, venue=venue.name)
        except FetchFailure as e:
            if e.venue is None:
                e.venue = venue.name
            raise
        except Exception as e:
            raise FetchFailure(
                f"Quote request to {venue.name} failed: {e}", venue=venue.name
            ) from e

        return VenueRate(
            venue=venue,
            raw_quote=raw,
            rate=normalize(raw, self.pair.quote.decimals),
        )

    async def tick(self) -> Optional[OpportunityResult]:
        """
        Run one Fetching -> Evaluating cycle.

        Returns:
            The OpportunityResult for this tick, or None if any fetch failed
        """
        self.ticks += 1
        logger.info(f"Checking for arbitrage opportunities on {self.pair.name}...")

        results = await asyncio.gather(
            *(self.fetch_rate(venue) for venue in self.venues),
            return_exceptions=True,
        )

        samples: List[VenueRate] = []
        failures: List[FetchFailure] = []
        for result in results:
            if isinstance(result, FetchFailure):
                failures.append(result)
            elif isinstance(result, BaseException):
                raise result
            else:
                samples.append(result)

        if failures:
            self.failed_ticks += 1
            self.reporter.report_failure(failures)
            return None

        self.reporter.report_rates(self.pair, samples)

        opportunity = evaluate_rates(samples, self.amount_in, self.cost_model)
        if opportunity.actionable:
            self.actionable_ticks += 1
            self.reporter.report_opportunity(self.pair, opportunity)
        else:
            self.reporter.report_no_opportunity(self.pair, opportunity)

        return opportunity

    async def run(self, max_ticks: Optional[int] = None) -> None:
        """
        Main loop: tick, then sleep out the rest of the interval.

        Runs indefinitely unless max_ticks is given. Per-tick errors are
        logged and never end the loop.
        """
        logger.info(
            f"Polling {len(self.venues)} venues for {self.pair.name} every "
            f"{self.interval_sec}s (amount_in={self.amount_in} {self.pair.base.symbol})"
        )

        while max_ticks is None or self.ticks < max_ticks:
            started = self._clock()
            try:
                await self.tick()
            except Exception as e:
                self.failed_ticks += 1
                logger.error(f"Tick {self.ticks} failed: {e}", exc_info=True)

            if max_ticks is not None and self.ticks >= max_ticks:
                break

            # sleep to cadence
            elapsed = self._clock() - started
            await self._sleep(max(0.0, self.interval_sec - elapsed))

    def summary(self) -> str:
        """Human-readable tick counters."""
        return (
            f"ticks={self.ticks} failed={self.failed_ticks} "
            f"actionable={self.actionable_ticks}"
        )
