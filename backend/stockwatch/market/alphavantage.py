"""Alpha Vantage REST client for real market data."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any

import httpx

from .cache import ResponseCache, cache_key
from .errors import NetworkFailure, ProviderInvalidResponse, ProviderRateLimited
from .interface import MarketDataProvider
from .models import Stock

logger = logging.getLogger(__name__)

BASE_URL = "https://www.alphavantage.co/query"

# Alpha Vantage answers HTTP 200 with one of these keys when it throttles
# (free tier: 25 req/day, 5 req/min) or refuses the request.
RATE_LIMIT_MARKERS = ("Note", "Information")
ERROR_MARKER = "Error Message"


class AlphaVantageClient(MarketDataProvider):
    """MarketDataProvider backed by the Alpha Vantage query API.

    Search combines two calls, OVERVIEW (name, market cap) and GLOBAL_QUOTE
    (price, change, volume). Each is cached on its own under a distinct key
    namespace, so a later fetch_quote for the same symbol can reuse the quote
    that search already paid for.
    """

    def __init__(
        self,
        api_key: str,
        cache: ResponseCache,
        *,
        session: httpx.AsyncClient | None = None,
        base_url: str = BASE_URL,
    ) -> None:
        self._api_key = api_key
        self._cache = cache
        self._client = session
        self._owns_client = session is None
        self._base_url = base_url

    async def search_symbol(self, query: str) -> list[Stock]:
        symbol = query.strip().upper()
        if not symbol:
            return []

        overview = await self.fetch_overview(symbol)
        if overview is None:
            logger.debug("No overview for %s", symbol)
            return []

        quote = await self.fetch_quote(symbol)
        if quote is None:
            logger.debug("No live quote for %s", symbol)
            return []

        listed = str(overview["Symbol"]).strip().upper()
        stock = Stock(
            symbol=listed,
            name=overview.get("Name") or listed,
            price=quote.price,
            change=quote.change,
            change_percent=quote.change_percent,
            volume=quote.volume,
            market_cap=_parse_market_cap(overview.get("MarketCapitalization")),
            last_updated=quote.last_updated,
        )
        return [stock]

    async def fetch_quote(self, symbol: str) -> Stock | None:
        symbol = symbol.strip().upper()
        key = cache_key("quote", symbol)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        payload = await self._query("GLOBAL_QUOTE", symbol)
        quote = payload.get("Global Quote")
        if not isinstance(quote, Mapping) or not quote.get("05. price"):
            return None

        stock = _parse_global_quote(quote, symbol)
        self._cache.set(key, stock)
        return stock

    async def fetch_overview(self, symbol: str) -> dict[str, Any] | None:
        """Company overview document, or None when the symbol is unknown."""
        symbol = symbol.strip().upper()
        key = cache_key("overview", symbol)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        payload = await self._query("OVERVIEW", symbol)
        if not payload.get("Symbol"):
            return None

        self._cache.set(key, payload)
        return payload

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None

    # --- Internal ---

    async def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            timeout = httpx.Timeout(10.0, connect=5.0)
            self._client = httpx.AsyncClient(timeout=timeout)
            self._owns_client = True
        return self._client

    async def _query(self, function: str, symbol: str) -> dict[str, Any]:
        """Run one API call and return the decoded JSON object.

        Raises NetworkFailure, ProviderRateLimited or ProviderInvalidResponse.
        """
        client = await self._client_instance()
        params = {"function": function, "symbol": symbol, "apikey": self._api_key}

        try:
            response = await client.get(self._base_url, params=params)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise NetworkFailure(f"{function} {symbol}: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderInvalidResponse(f"{function} {symbol}: body is not JSON") from exc

        if not isinstance(payload, dict):
            raise ProviderInvalidResponse(
                f"{function} {symbol}: expected an object, got {type(payload).__name__}"
            )
        for marker in RATE_LIMIT_MARKERS:
            if marker in payload:
                raise ProviderRateLimited(f"{function} {symbol}: {payload[marker]}")
        if ERROR_MARKER in payload:
            raise ProviderInvalidResponse(f"{function} {symbol}: {payload[ERROR_MARKER]}")

        return payload


def _parse_global_quote(quote: Mapping[str, Any], symbol: str) -> Stock:
    try:
        return Stock(
            symbol=str(quote.get("01. symbol") or symbol).upper(),
            name=str(quote.get("01. symbol") or symbol).upper(),
            price=float(quote["05. price"]),
            change=float(quote.get("09. change") or 0.0),
            change_percent=float(str(quote.get("10. change percent") or "0").rstrip("%")),
            volume=int(float(quote.get("06. volume") or 0)),
            market_cap=0,
            last_updated=time.time(),
        )
    except (TypeError, ValueError) as exc:
        raise ProviderInvalidResponse(f"GLOBAL_QUOTE {symbol}: {exc}") from exc


def _parse_market_cap(value: Any) -> int:
    # Alpha Vantage reports missing figures as the string "None".
    if value in (None, "", "None", "-"):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ProviderInvalidResponse(f"OVERVIEW: bad MarketCapitalization {value!r}") from exc
