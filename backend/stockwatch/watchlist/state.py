"""Watchlist state and its derived portfolio metrics."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from ..formatting import change_color_class, format_currency, format_percentage
from ..market.models import Stock


@dataclass(frozen=True, slots=True)
class MarketMovers:
    """Count of watchlist entries currently up vs. down. Flat entries count toward neither."""

    up: int = 0
    down: int = 0


def portfolio_value(stocks: Iterable[Stock]) -> float:
    return sum(stock.price for stock in stocks)


def todays_change(stocks: Iterable[Stock]) -> float:
    return sum(stock.change for stock in stocks)


def market_movers(stocks: Iterable[Stock]) -> MarketMovers:
    up = down = 0
    for stock in stocks:
        if stock.change > 0:
            up += 1
        elif stock.change < 0:
            down += 1
    return MarketMovers(up=up, down=down)


@dataclass(frozen=True, slots=True)
class WatchlistState:
    """Immutable snapshot of the dashboard.

    portfolio_value, todays_change and market_movers are pure functions of
    watchlist. Build new states with with_watchlist() so they are always
    recomputed together with it.
    """

    watchlist: tuple[Stock, ...] = ()
    portfolio_value: float = 0.0
    todays_change: float = 0.0
    market_movers: MarketMovers = field(default_factory=MarketMovers)
    loading: bool = False
    error: str | None = None
    search_results: tuple[Stock, ...] = ()
    search_loading: bool = False

    def with_watchlist(self, stocks: Iterable[Stock], **changes) -> WatchlistState:
        stocks = tuple(stocks)
        return replace(
            self,
            watchlist=stocks,
            portfolio_value=portfolio_value(stocks),
            todays_change=todays_change(stocks),
            market_movers=market_movers(stocks),
            **changes,
        )

    def find(self, symbol: str) -> Stock | None:
        for stock in self.watchlist:
            if stock.symbol == symbol:
                return stock
        return None

    def symbols(self) -> list[str]:
        return [stock.symbol for stock in self.watchlist]

    def to_dict(self) -> dict:
        """Serialize for the dashboard API, with display strings for the summary cards."""
        return {
            "watchlist": [stock.to_dict() for stock in self.watchlist],
            "portfolio_value": self.portfolio_value,
            "todays_change": self.todays_change,
            "market_movers": {"up": self.market_movers.up, "down": self.market_movers.down},
            "loading": self.loading,
            "error": self.error,
            "search_results": [stock.to_dict() for stock in self.search_results],
            "search_loading": self.search_loading,
            "summary": {
                "portfolio_value": format_currency(self.portfolio_value),
                "todays_change": format_currency(self.todays_change),
                "todays_change_percent": format_percentage(self._todays_change_percent()),
                "todays_change_class": change_color_class(self.todays_change),
                "total_stocks": len(self.watchlist),
            },
        }

    def _todays_change_percent(self) -> float:
        # Change relative to the sum of previous closes.
        previous = self.portfolio_value - self.todays_change
        if previous == 0:
            return 0.0
        return self.todays_change / previous * 100
