"""Display formatting helpers for prices, magnitudes and percentages."""

from __future__ import annotations

import re
import time

from .market.errors import NetworkFailure, ProviderRateLimited

_SYMBOL_RE = re.compile(r"^[A-Z]{1,5}$")
_SEARCH_STRIP_RE = re.compile(r"[^A-Z0-9\s]")

COMMON_STOCK_SYMBOLS = (
    "AAPL", "GOOGL", "MSFT", "AMZN", "TSLA", "META", "NVDA", "NFLX",
    "AMD", "INTC", "CRM", "ADBE", "PYPL", "UBER", "SPOT", "ZM",
    "SQ", "ROKU", "PINS", "SNAP", "DIS", "NKE", "WMT",
)


def format_number(num: float) -> str:
    """Format a magnitude with a T/B/M/K suffix (volume, market cap)."""
    if num >= 1e12:
        return f"{num / 1e12:.1f}T"
    if num >= 1e9:
        return f"{num / 1e9:.1f}B"
    if num >= 1e6:
        return f"{num / 1e6:.1f}M"
    if num >= 1e3:
        return f"{num / 1e3:.1f}K"
    if float(num).is_integer():
        return str(int(num))
    return str(num)


def format_currency(amount: float) -> str:
    """US-dollar amount with thousands separators: 1234.5 -> '$1,234.50'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_percentage(value: float) -> str:
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.2f}%"


def change_color_class(value: float) -> str:
    return "text-positive" if value >= 0 else "text-negative"


def format_time_ago(timestamp: float, now: float | None = None) -> str:
    """Coarse relative age of a Unix timestamp: 'Just now', '5m ago', '2h ago', '3d ago'."""
    now = time.time() if now is None else now
    seconds = int(now - timestamp)
    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"


def is_valid_symbol(symbol: str) -> bool:
    return bool(_SYMBOL_RE.match(symbol.upper()))


def is_common_stock(symbol: str) -> bool:
    return symbol.upper() in COMMON_STOCK_SYMBOLS


def sanitize_search_input(text: str) -> str:
    return _SEARCH_STRIP_RE.sub("", text.strip().upper())


def user_error_message(error: BaseException | None) -> str:
    """Message safe to show a user. Raw provider errors never reach the screen."""
    if isinstance(error, ProviderRateLimited):
        return "API rate limit exceeded. Please try again later."
    if isinstance(error, NetworkFailure):
        return "Network error. Please check your connection."
    message = str(error) if error is not None else ""
    if "rate limit" in message.lower():
        return "API rate limit exceeded. Please try again later."
    if "network" in message.lower():
        return "Network error. Please check your connection."
    return message or "An unexpected error occurred. Please try again."
