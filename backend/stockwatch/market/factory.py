"""Factory for creating market data providers."""

from __future__ import annotations

import logging

from ..config import Settings
from .cache import ResponseCache
from .interface import MarketDataProvider

logger = logging.getLogger(__name__)


def create_market_data_provider(settings: Settings, cache: ResponseCache) -> MarketDataProvider:
    """Create the appropriate market data provider for the given settings.

    - ALPHA_VANTAGE_API_KEY set and non-empty → AlphaVantageClient (real data)
    - Otherwise → SimulatorProvider (GBM simulation)
    """
    if settings.alpha_vantage_api_key:
        from .alphavantage import AlphaVantageClient

        logger.info("Market data provider: Alpha Vantage (real data)")
        return AlphaVantageClient(api_key=settings.alpha_vantage_api_key, cache=cache)
    else:
        from .simulator import SimulatorProvider

        logger.info("Market data provider: GBM Simulator")
        return SimulatorProvider(cache=cache)
