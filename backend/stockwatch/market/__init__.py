"""Market data subsystem for stockwatch.

Public API:
    Stock                       - Immutable quote record
    ResponseCache               - TTL response cache shared by all lookups
    MarketDataProvider          - Abstract interface for data providers
    MarketDataError             - Base class of provider failures
    create_market_data_provider - Factory that selects simulator or Alpha Vantage
"""

from .cache import ResponseCache, cache_key
from .errors import MarketDataError, NetworkFailure, ProviderInvalidResponse, ProviderRateLimited
from .factory import create_market_data_provider
from .interface import MarketDataProvider
from .models import Stock

__all__ = [
    "Stock",
    "ResponseCache",
    "cache_key",
    "MarketDataProvider",
    "MarketDataError",
    "NetworkFailure",
    "ProviderInvalidResponse",
    "ProviderRateLimited",
    "create_market_data_provider",
]
