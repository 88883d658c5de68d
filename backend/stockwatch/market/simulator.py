"""GBM-based offline market data provider."""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable

import numpy as np

from .cache import ResponseCache, cache_key
from .interface import MarketDataProvider
from .models import Stock
from .seed_data import COMPANIES, DEFAULT_DAILY_VOLUME, DEFAULT_PARAMS, SEED_PRICES, TICKER_PARAMS

logger = logging.getLogger(__name__)


class GBMSimulator:
    """Geometric Brownian Motion price paths for a fixed symbol universe.

    Math:
        S(t+dt) = S(t) * exp((mu - sigma^2/2) * dt + sigma * sqrt(dt) * Z)

    Where:
        S(t)   = current price
        mu     = annualized drift (expected return)
        sigma  = annualized volatility
        dt     = elapsed time as fraction of a trading year
        Z      = standard normal random variable

    Each symbol advances lazily, by however much wall-clock time has passed
    since it was last read, so an idle simulator costs nothing.
    """

    # 252 trading days * 6.5 hours/day * 3600 seconds/hour = 5,896,800 seconds
    TRADING_SECONDS_PER_YEAR = 252 * 6.5 * 3600

    def __init__(
        self,
        seed_prices: dict[str, float] | None = None,
        rng: np.random.Generator | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._previous_close: dict[str, float] = dict(seed_prices or SEED_PRICES)
        self._prices: dict[str, float] = dict(self._previous_close)
        self._rng = rng or np.random.default_rng()
        self._clock = clock
        now = clock()
        self._last_step: dict[str, float] = {symbol: now for symbol in self._prices}

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._prices

    def previous_close(self, symbol: str) -> float | None:
        return self._previous_close.get(symbol)

    def advance(self, symbol: str) -> float | None:
        """Step one symbol forward to now. Returns its new price, or None if unknown."""
        if symbol not in self._prices:
            return None

        now = self._clock()
        elapsed = max(now - self._last_step[symbol], 0.0)
        self._last_step[symbol] = now
        if elapsed == 0:
            return round(self._prices[symbol], 2)

        params = TICKER_PARAMS.get(symbol, DEFAULT_PARAMS)
        mu = params["mu"]
        sigma = params["sigma"]
        dt = elapsed / self.TRADING_SECONDS_PER_YEAR

        drift = (mu - 0.5 * sigma**2) * dt
        diffusion = sigma * math.sqrt(dt) * float(self._rng.standard_normal())
        self._prices[symbol] *= math.exp(drift + diffusion)
        return round(self._prices[symbol], 2)

    def volume(self) -> int:
        return int(self._rng.poisson(DEFAULT_DAILY_VOLUME))


class SimulatorProvider(MarketDataProvider):
    """MarketDataProvider backed by the GBM simulator.

    Used when no Alpha Vantage key is configured. Only symbols in the seed
    universe are known; anything else is "not found". Quotes go through the
    shared ResponseCache like real ones, so refresh cadence looks the same.
    """

    def __init__(
        self,
        cache: ResponseCache,
        simulator: GBMSimulator | None = None,
    ) -> None:
        self._cache = cache
        self._sim = simulator or GBMSimulator()

    async def search_symbol(self, query: str) -> list[Stock]:
        symbol = query.strip().upper()
        if not symbol or symbol not in COMPANIES:
            return []

        quote = await self.fetch_quote(symbol)
        if quote is None:
            return []

        name, market_cap = COMPANIES[symbol]
        return [Stock(
            symbol=symbol,
            name=name,
            price=quote.price,
            change=quote.change,
            change_percent=quote.change_percent,
            volume=quote.volume,
            market_cap=market_cap,
            last_updated=quote.last_updated,
        )]

    async def fetch_quote(self, symbol: str) -> Stock | None:
        symbol = symbol.strip().upper()
        key = cache_key("quote", symbol)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        price = self._sim.advance(symbol)
        if price is None:
            return None

        previous_close = self._sim.previous_close(symbol) or price
        change = round(price - previous_close, 2)
        change_percent = round(change / previous_close * 100, 2) if previous_close else 0.0
        stock = Stock(
            symbol=symbol,
            name=symbol,
            price=price,
            change=change,
            change_percent=change_percent,
            volume=self._sim.volume(),
            market_cap=0,
        )
        self._cache.set(key, stock)
        logger.debug("Simulated quote %s: %.2f (%+.2f)", symbol, price, change)
        return stock
