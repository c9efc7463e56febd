"""
Opportunity evaluation across venue rates.

Buy on the cheaper venue, sell on the more expensive one, then subtract a
flat simulated cost. An opportunity is actionable only when net profit
strictly exceeds the configured threshold.
"""

from decimal import Decimal
from typing import Sequence

from .types import CostModel, OpportunityResult, Venue, VenueRate


def _build_result(
    buy_venue: Venue,
    sell_venue: Venue,
    buy_rate: Decimal,
    sell_rate: Decimal,
    amount_in: Decimal,
    cost_model: CostModel,
) -> OpportunityResult:
    gross_profit = (sell_rate - buy_rate) * amount_in
    net_profit = gross_profit - cost_model.simulated_cost

    return OpportunityResult(
        buy_venue=buy_venue,
        sell_venue=sell_venue,
        buy_rate=buy_rate,
        sell_rate=sell_rate,
        amount_in=amount_in,
        gross_profit=gross_profit,
        simulated_cost=cost_model.simulated_cost,
        net_profit=net_profit,
        actionable=net_profit > cost_model.minimum_profit_threshold,
    )


def evaluate(
    rate_a: Decimal,
    rate_b: Decimal,
    amount_in: Decimal,
    cost_model: CostModel,
    venue_a: Venue,
    venue_b: Venue,
) -> OpportunityResult:
    """
    Compare two venue rates.

    Venue A buys only when its rate is strictly lower; equal rates make
    venue B the buy side. The tie yields zero gross profit, so the
    direction never changes the verdict, but it stays deterministic.

    Args:
        rate_a: Normalized rate on venue A
        rate_b: Normalized rate on venue B
        amount_in: Base token amount moved through both venues
        cost_model: Threshold and simulated cost
        venue_a: First venue
        venue_b: Second venue

    Returns:
        OpportunityResult for this pair of rates
    """
    if rate_a < rate_b:
        return _build_result(venue_a, venue_b, rate_a, rate_b, amount_in, cost_model)
    return _build_result(venue_b, venue_a, rate_b, rate_a, amount_in, cost_model)


def evaluate_rates(
    samples: Sequence[VenueRate], amount_in: Decimal, cost_model: CostModel
) -> OpportunityResult:
    """
    Pick the best buy and best sell across any number of venues.

    Lowest rate buys (ties go to the later venue), highest rate sells (ties
    go to the earlier venue). With two samples this matches evaluate().

    Raises:
        ValueError: If fewer than two samples are given
    """
    if len(samples) < 2:
        raise ValueError(f"Need at least two venue rates, got {len(samples)}")

    buy = samples[0]
    sell = samples[0]
    for sample in samples[1:]:
        if sample.rate <= buy.rate:
            buy = sample
        if sample.rate > sell.rate:
            sell = sample

    return _build_result(
        buy.venue, sell.venue, buy.rate, sell.rate, amount_in, cost_model
    )
