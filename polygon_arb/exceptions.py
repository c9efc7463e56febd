"""
Exception hierarchy for the cross-DEX arbitrage monitor.

Per-tick errors (FetchFailure, QuoteIncomplete) are recovered at the tick
boundary by the polling driver. ConfigurationInvalid is fatal at startup.
"""

from typing import Any, Dict, Optional


class ArbError(Exception):
    """Base exception for all arbitrage monitor errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationInvalid(ArbError):
    """Raised when configuration is missing, malformed, or incomplete."""

    pass


class FetchFailure(ArbError):
    """Raised when a quote request to a venue could not be completed."""

    def __init__(
        self,
        message: str,
        venue: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.venue = venue


class QuoteIncomplete(FetchFailure):
    """Raised when a venue answers with fewer than two amounts (or a zero quote)."""

    pass


class NetworkError(ArbError):
    """Raised when the RPC node cannot be reached during setup."""

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint
