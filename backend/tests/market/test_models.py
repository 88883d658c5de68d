"""Tests for the Stock dataclass."""

from datetime import datetime, timezone

import pytest

from stockwatch.market.models import Stock


class TestStock:
    """Unit tests for the Stock model."""

    def test_stock_creation(self):
        """Test basic Stock creation."""
        stock = Stock(symbol="AAPL", name="Apple Inc.", price=150.0, change=1.5, change_percent=1.01)
        assert stock.symbol == "AAPL"
        assert stock.price == 150.0
        assert stock.volume == 0
        assert stock.market_cap == 0

    def test_direction_up(self):
        stock = Stock(symbol="AAPL", name="AAPL", price=150.0, change=1.5)
        assert stock.direction == "up"

    def test_direction_down(self):
        stock = Stock(symbol="AAPL", name="AAPL", price=150.0, change=-1.5)
        assert stock.direction == "down"

    def test_direction_flat(self):
        stock = Stock(symbol="AAPL", name="AAPL", price=150.0, change=0.0)
        assert stock.direction == "flat"

    def test_with_quote_keeps_identity_fields(self):
        """Merging a quote-only record keeps name and market cap."""
        stock = Stock(
            symbol="AAPL", name="Apple Inc.", price=150.0, change=1.5,
            change_percent=1.01, volume=1_000_000, market_cap=3_000_000_000_000, last_updated=1.0,
        )
        quote = Stock(
            symbol="AAPL", name="AAPL", price=155.0, change=6.5,
            change_percent=4.38, volume=2_000_000, market_cap=0, last_updated=2.0,
        )
        merged = stock.with_quote(quote)

        assert merged.name == "Apple Inc."
        assert merged.market_cap == 3_000_000_000_000
        assert merged.price == 155.0
        assert merged.change == 6.5
        assert merged.change_percent == 4.38
        assert merged.volume == 2_000_000
        assert merged.last_updated == 2.0

    def test_to_dict(self):
        """Test serialization to dictionary."""
        stock = Stock(
            symbol="AAPL", name="Apple Inc.", price=150.0, change=1.5,
            change_percent=1.01, volume=1_000_000, market_cap=3_000_000_000_000, last_updated=1234567890.0,
        )
        result = stock.to_dict()

        assert result["symbol"] == "AAPL"
        assert result["name"] == "Apple Inc."
        assert result["change_percent"] == 1.01
        assert result["market_cap"] == 3_000_000_000_000
        assert result["last_updated"] == 1234567890.0
        assert result["direction"] == "up"

    def test_from_dict_round_trip(self):
        stock = Stock(symbol="MSFT", name="Microsoft", price=420.0, change=-2.0, last_updated=5.0)
        assert Stock.from_dict(stock.to_dict()) == stock

    def test_from_dict_accepts_browser_format(self):
        """camelCase keys and ISO timestamps from the browser build are understood."""
        stock = Stock.from_dict({
            "symbol": "aapl",
            "name": "Apple Inc.",
            "price": 150,
            "change": 1.5,
            "changePercent": 1.01,
            "volume": 1000000,
            "marketCap": 3000000000000,
            "lastUpdated": "2024-02-10T16:00:00.000Z",
        })
        assert stock.symbol == "AAPL"
        assert stock.change_percent == 1.01
        assert stock.market_cap == 3_000_000_000_000
        assert stock.last_updated == datetime(2024, 2, 10, 16, tzinfo=timezone.utc).timestamp()

    def test_from_dict_name_defaults_to_symbol(self):
        stock = Stock.from_dict({"symbol": "XYZ", "price": 1.0})
        assert stock.name == "XYZ"

    @pytest.mark.parametrize(
        "data",
        [
            {"name": "No symbol", "price": 1.0},
            {"symbol": "AAPL"},
            {"symbol": "AAPL", "price": "abc"},
            {"symbol": "AAPL", "price": -1.0},
            {"symbol": "", "price": 1.0},
            ["AAPL", 1.0],
        ],
    )
    def test_from_dict_rejects_malformed(self, data):
        with pytest.raises((KeyError, TypeError, ValueError)):
            Stock.from_dict(data)

    @pytest.mark.parametrize(
        "data",
        [
            {"symbol": "AAPL", "price": float("nan")},
            {"symbol": "AAPL", "price": float("inf")},
            {"symbol": "AAPL", "price": 1.0, "change": float("nan")},
            {"symbol": "AAPL", "price": 1.0, "changePercent": float("-inf")},
            {"symbol": "AAPL", "price": 1.0, "volume": float("inf")},
            {"symbol": "AAPL", "price": 1.0, "market_cap": float("nan")},
            {"symbol": "AAPL", "price": 1.0, "last_updated": float("inf")},
        ],
    )
    def test_from_dict_rejects_non_finite_numbers(self, data):
        with pytest.raises(ValueError):
            Stock.from_dict(data)

    def test_immutability(self):
        """Test that Stock is immutable."""
        stock = Stock(symbol="AAPL", name="AAPL", price=150.0)

        with pytest.raises(AttributeError):
            stock.price = 200.00  # Should raise error
