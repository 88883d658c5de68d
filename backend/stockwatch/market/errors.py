"""Failure taxonomy for market data providers.

A symbol the provider does not know is not an error: lookups return an empty
list (search) or None (quote) instead.
"""

from __future__ import annotations


class MarketDataError(Exception):
    """Base class for provider failures."""


class ProviderRateLimited(MarketDataError):
    """The provider throttled the request (Alpha Vantage "Note"/"Information")."""


class ProviderInvalidResponse(MarketDataError):
    """The provider answered with a payload we could not interpret."""


class NetworkFailure(MarketDataError):
    """Transport-level failure or non-2xx HTTP status."""
