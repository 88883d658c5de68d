"""Data models for market data."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class Stock:
    """Immutable quote record for a single symbol.

    ``change_percent`` is stored alongside ``change`` rather than derived, so
    whoever builds the record is responsible for keeping the two consistent.
    A ``market_cap`` of 0 means "unknown".
    """

    symbol: str
    name: str
    price: float
    change: float = 0.0
    change_percent: float = 0.0
    volume: int = 0
    market_cap: int = 0
    last_updated: float = field(default_factory=time.time)  # Unix seconds

    @property
    def direction(self) -> str:
        """'up', 'down', or 'flat'."""
        if self.change > 0:
            return "up"
        elif self.change < 0:
            return "down"
        return "flat"

    def with_quote(self, quote: Stock) -> Stock:
        """Take price fields from a fresh quote, keep our name and market cap."""
        return replace(
            self,
            price=quote.price,
            change=quote.change,
            change_percent=quote.change_percent,
            volume=quote.volume,
            last_updated=quote.last_updated,
        )

    def to_dict(self) -> dict:
        """Serialize for JSON persistence / API responses."""
        return {
            "symbol": self.symbol,
            "name": self.name,
            "price": self.price,
            "change": self.change,
            "change_percent": self.change_percent,
            "volume": self.volume,
            "market_cap": self.market_cap,
            "last_updated": self.last_updated,
            "direction": self.direction,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Stock:
        """Build a Stock from a serialized mapping.

        Accepts snake_case keys as written by ``to_dict`` and the camelCase
        keys used by the browser build's localStorage format. Raises
        KeyError, TypeError or ValueError when the mapping is malformed.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected a mapping, got {type(data).__name__}")

        symbol = str(data["symbol"]).strip().upper()
        if not symbol:
            raise ValueError("Stock symbol must not be empty")

        price = _finite(data["price"], "price", symbol)
        if price < 0:
            raise ValueError(f"Negative price for {symbol}: {price}")

        return cls(
            symbol=symbol,
            name=str(data.get("name") or symbol),
            price=price,
            change=_finite(data.get("change", 0.0), "change", symbol),
            change_percent=_finite(
                _pick(data, "change_percent", "changePercent", default=0.0), "change_percent", symbol
            ),
            volume=int(_finite(_pick(data, "volume", default=0), "volume", symbol)),
            market_cap=int(_finite(_pick(data, "market_cap", "marketCap", default=0), "market_cap", symbol)),
            last_updated=_parse_timestamp(_pick(data, "last_updated", "lastUpdated", default=None)),
        )


def _finite(value: Any, name: str, symbol: str) -> float:
    # NaN and infinity survive json.loads and would poison every sum over the watchlist.
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Non-finite {name} for {symbol}: {value!r}")
    return number


def _pick(data: dict[str, Any], *keys: str, default: Any) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _parse_timestamp(value: Any) -> float:
    if value is None:
        return time.time()
    if isinstance(value, str):
        # ISO-8601, e.g. "2024-02-10T16:00:00.000Z"
        return datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp()
    timestamp = float(value)
    if not math.isfinite(timestamp):
        raise ValueError(f"Non-finite timestamp: {value!r}")
    return timestamp
