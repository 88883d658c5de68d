"""Abstract interface for market data providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import Stock


class MarketDataProvider(ABC):
    """Contract for market data providers.

    The watchlist core only ever talks to a provider through these two
    lookups. Unknown symbols are not errors: search returns an empty list and
    fetch_quote returns None. Provider failures raise MarketDataError
    subclasses.

    Lifecycle:
        provider = create_market_data_provider(settings, cache)
        results = await provider.search_symbol("aapl")
        quote = await provider.fetch_quote("AAPL")
        # ... app shutting down ...
        await provider.aclose()
    """

    @abstractmethod
    async def search_symbol(self, query: str) -> list[Stock]:
        """Look up a symbol. Returns zero or one fully populated Stock.

        Name and market cap come from the company overview, price fields from
        the live quote. Blank queries return [] without touching the network.
        """

    @abstractmethod
    async def fetch_quote(self, symbol: str) -> Stock | None:
        """Fetch a quote-only Stock (name == symbol, market_cap == 0)."""

    async def aclose(self) -> None:
        """Release any network resources. Safe to call multiple times."""
