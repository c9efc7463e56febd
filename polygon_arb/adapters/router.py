"""
Uniswap V2 router adapter.

Quotes come from the router's read-only getAmountsOut call, so every
V2-fork DEX (QuickSwap, SushiSwap, ...) is handled by the same adapter.
"""

import time
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from web3 import Web3

from ..exceptions import FetchFailure, NetworkError
from ..utils import get_logger

logger = get_logger(__name__)

# Uniswap V2 Router ABI (minimal, read-only)
UNISWAP_V2_ROUTER_ABI = [
    {
        "constant": True,
        "inputs": [
            {"name": "amountIn", "type": "uint256"},
            {"name": "path", "type": "address[]"},
        ],
        "name": "getAmountsOut",
        "outputs": [{"name": "amounts", "type": "uint256[]"}],
        "stateMutability": "view",
        "type": "function",
    },
]

DEFAULT_TIMEOUT_SEC = 20


@runtime_checkable
class QuoteSource(Protocol):
    """Protocol for anything that can quote an output amount along a path."""

    def get_amounts_out(self, amount_in: int, path: Sequence[str]) -> List[int]:
        """Return the amounts list for swapping amount_in along path."""
        ...


def connect_web3(rpc_url: str, timeout: float = DEFAULT_TIMEOUT_SEC) -> Web3:
    """
    Connect to an HTTP(S) RPC endpoint and validate the connection.

    Args:
        rpc_url: HTTP(S) RPC endpoint
        timeout: Per-request timeout in seconds

    Returns:
        Connected Web3 instance

    Raises:
        NetworkError: If the URL is invalid or the node is unreachable
    """
    if not rpc_url or not rpc_url.startswith(("http://", "https://")):
        raise NetworkError(f"Invalid RPC URL format: {rpc_url}", endpoint=rpc_url)

    logger.info(f"Connecting to RPC: {rpc_url}")
    web3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
    if not web3.is_connected():
        raise NetworkError(f"Failed to connect to RPC at {rpc_url}", endpoint=rpc_url)

    return web3


class RouterQuoteSource:
    """Quote source backed by a V2 router contract."""

    def __init__(self, web3: Web3, router_address: str, name: Optional[str] = None):
        """
        Args:
            web3: Web3 instance connected to the chain
            router_address: Router contract address
            name: Venue name used in error messages

        Raises:
            ValueError: If router address is invalid
        """
        if not Web3.is_address(router_address):
            raise ValueError(f"Invalid router address: {router_address}")

        self.router_address = Web3.to_checksum_address(router_address)
        self.name = name or self.router_address
        self.router = web3.eth.contract(
            address=self.router_address, abi=UNISWAP_V2_ROUTER_ABI
        )

    def get_amounts_out(self, amount_in: int, path: Sequence[str]) -> List[int]:
        """
        Call getAmountsOut on the router.

        Raises:
            FetchFailure: On any RPC, revert, or decoding error
        """
        checksummed = [Web3.to_checksum_address(addr) for addr in path]
        try:
            amounts = self.router.functions.getAmountsOut(amount_in, checksummed).call()
        except Exception as e:
            raise FetchFailure(
                f"getAmountsOut failed on {self.name}: {e}",
                venue=self.name,
                details={"router": self.router_address},
            ) from e

        return [int(a) for a in amounts]


def is_rate_limit_error(error: Exception) -> bool:
    """Check for rate limit errors (common RPC patterns)."""
    error_msg = str(error)
    return (
        "429" in error_msg
        or "Too Many Requests" in error_msg
        or "-32005" in error_msg
        or "limit exceeded" in error_msg.lower()
    )


class RetryingQuoteSource:
    """
    Bounded-retry wrapper around another quote source.

    Only rate-limit failures are retried, with exponential backoff
    (backoff_sec, 2x, 4x, ...). Anything else is raised immediately.
    """

    def __init__(self, inner: QuoteSource, max_attempts: int = 3, backoff_sec: float = 1.0):
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1: {max_attempts}")
        self.inner = inner
        self.max_attempts = max_attempts
        self.backoff_sec = backoff_sec

    def get_amounts_out(self, amount_in: int, path: Sequence[str]) -> List[int]:
        last_error = None
        for attempt in range(self.max_attempts):
            try:
                return self.inner.get_amounts_out(amount_in, path)
            except FetchFailure as e:
                last_error = e
                if is_rate_limit_error(e) and attempt < self.max_attempts - 1:
                    wait_time = self.backoff_sec * (2**attempt)
                    logger.debug(
                        f"Rate limited, retrying in {wait_time:.1f}s "
                        f"(attempt {attempt + 1}/{self.max_attempts})"
                    )
                    time.sleep(wait_time)
                    continue
                raise

        raise last_error
