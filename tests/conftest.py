"""Shared fixtures: a WETH/USDC pair and scripted quote sources."""

from decimal import Decimal
from typing import List, Sequence

import pytest

from polygon_arb.types import CostModel, Token, TradingPair, Venue

WETH_ADDR = "0x" + "11" * 20
USDC_ADDR = "0x" + "22" * 20
ROUTER_A = "0x" + "33" * 20


class FakeQuoteSource:
    """Quote source returning scripted responses, one per call."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def get_amounts_out(self, amount_in: int, path: Sequence[str]) -> List[int]:
        self.calls.append((amount_in, list(path)))
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def pair():
    return TradingPair(
        base=Token(symbol="WETH", address=WETH_ADDR, decimals=18),
        quote=Token(symbol="USDC", address=USDC_ADDR, decimals=6),
    )


@pytest.fixture
def cost_model():
    return CostModel(
        minimum_profit_threshold=Decimal("1.0"), simulated_cost=Decimal("2.0")
    )


@pytest.fixture
def make_venue():
    def _make(name, *responses, router=ROUTER_A):
        return Venue(name=name, router_address=router, handle=FakeQuoteSource(*responses))

    return _make

