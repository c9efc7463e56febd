"""
Price normalization between raw on-chain integers and human-scale decimals.

Quotes are normalized with the QUOTE token's decimals; the input amount is
scaled with the BASE token's decimals. Mixing the two corrupts every rate.

Conversion policy:
- Internal: Decimal with 50 digits precision, no rounding
- Output: 4 decimal places, display only
"""

from decimal import Decimal, getcontext
from typing import Optional, Sequence, Union

from .exceptions import FetchFailure, QuoteIncomplete

getcontext().prec = 50

# getAmountsOut returns [amount_in, amount_out] for a two-token path
QUOTED_AMOUNT_INDEX = 1

DISPLAY_PLACES = 4


def extract_quoted_amount(
    amounts: Sequence[int], venue: Optional[str] = None
) -> int:
    """
    Pick the quoted output from a getAmountsOut response.

    Args:
        amounts: Amounts list returned by the router
        venue: Venue name, used for error context only

    Returns:
        Raw output amount in the quote token's smallest units

    Raises:
        QuoteIncomplete: Fewer than two amounts, or a zero output
        FetchFailure: Output is not a non-negative integer
    """
    if amounts is None or len(amounts) <= QUOTED_AMOUNT_INDEX:
        count = 0 if amounts is None else len(amounts)
        raise QuoteIncomplete(
            f"Expected at least 2 amounts, got {count}",
            venue=venue,
            details={"amounts": list(amounts or [])},
        )

    raw = amounts[QUOTED_AMOUNT_INDEX]
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise FetchFailure(
            f"Malformed quote: {raw!r} is not an integer", venue=venue
        )
    if raw < 0:
        raise FetchFailure(f"Malformed quote: negative amount {raw}", venue=venue)
    if raw == 0:
        raise QuoteIncomplete("Venue quoted a zero output amount", venue=venue)

    return raw


def normalize(raw_quote: int, quote_decimals: int) -> Decimal:
    """
    Convert a raw quote into quote-token units: raw / 10^decimals.

    >>> normalize(1800123456, 6)
    Decimal('1800.123456')
    """
    if raw_quote < 0:
        raise ValueError(f"raw_quote must be non-negative: {raw_quote}")
    if quote_decimals < 0:
        raise ValueError(f"decimals must be non-negative: {quote_decimals}")
    return Decimal(raw_quote) / (Decimal(10) ** quote_decimals)


def to_smallest_units(amount: Union[Decimal, str, int], base_decimals: int) -> int:
    """
    Scale a human amount of the base token to its smallest on-chain unit.

    Fractions below one unit are truncated.
    """
    human = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    if human <= 0:
        raise ValueError(f"amount must be positive: {amount}")
    # scaleb shifts the exponent only; int() truncates toward zero exactly
    return int(human.scaleb(base_decimals))


def format_amount(value: Decimal) -> str:
    """Format a decimal for display with 4 fractional digits."""
    return f"{value:.{DISPLAY_PLACES}f}"
