"""Pure state transitions for the watchlist store."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from typing import assert_never

from ..market.models import Stock
from .actions import (
    Action,
    AddStock,
    ClearSearch,
    RemoveStock,
    SetError,
    SetLoading,
    SetSearchLoading,
    SetSearchResults,
    SetWatchlist,
    UpdateStockData,
)
from .state import WatchlistState


def reduce(state: WatchlistState, action: Action) -> WatchlistState:
    """Apply one action and return the next state.

    Synchronous and total. Transitions that change nothing return the same
    state object, so callers can detect no-ops with ``is``. Every transition
    that touches the watchlist goes through with_watchlist(), which
    recomputes the derived metrics.
    """
    match action:
        case AddStock(stock=stock):
            if state.find(stock.symbol) is not None:
                return state
            return state.with_watchlist((*state.watchlist, stock), error=None)

        case RemoveStock(symbol=symbol):
            if state.find(symbol) is None:
                return state
            return state.with_watchlist(s for s in state.watchlist if s.symbol != symbol)

        case SetWatchlist(stocks=stocks):
            return state.with_watchlist(_unique(stocks))

        case UpdateStockData(stock=updated):
            if state.find(updated.symbol) is None:
                return state
            return state.with_watchlist(
                updated if s.symbol == updated.symbol else s for s in state.watchlist
            )

        case SetLoading(loading=loading):
            return replace(state, loading=loading)

        case SetError(message=message):
            return replace(state, error=message, loading=False)

        case SetSearchResults(stocks=stocks):
            return replace(state, search_results=tuple(stocks), search_loading=False)

        case SetSearchLoading(loading=loading):
            return replace(state, search_loading=loading)

        case ClearSearch():
            return replace(state, search_results=(), search_loading=False)

        case _:
            assert_never(action)


def _unique(stocks: Iterable[Stock]) -> tuple[Stock, ...]:
    # First occurrence of a symbol wins; the watchlist never holds duplicates.
    seen: set[str] = set()
    result: list[Stock] = []
    for stock in stocks:
        if stock.symbol not in seen:
            seen.add(stock.symbol)
            result.append(stock)
    return tuple(result)
