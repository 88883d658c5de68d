"""Watchlist state machine, persistence, search and refresh.

Public API:
    WatchlistState   - Immutable dashboard state with derived metrics
    WatchlistStore   - Dispatches actions, persists, notifies subscribers
    reduce           - Pure transition function
    SearchPipeline   - Debounced search into the store
    RefreshScheduler - Periodic quote refresh of watchlist entries
"""

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
from .persistence import JsonFileStorage, MemoryStorage, PersistenceReadFailure, WatchlistStorage
from .reducer import reduce
from .refresh import RefreshScheduler
from .search import SearchPhase, SearchPipeline
from .state import MarketMovers, WatchlistState
from .store import WatchlistStore

__all__ = [
    "Action",
    "AddStock",
    "ClearSearch",
    "RemoveStock",
    "SetError",
    "SetLoading",
    "SetSearchLoading",
    "SetSearchResults",
    "SetWatchlist",
    "UpdateStockData",
    "JsonFileStorage",
    "MemoryStorage",
    "PersistenceReadFailure",
    "WatchlistStorage",
    "reduce",
    "RefreshScheduler",
    "SearchPhase",
    "SearchPipeline",
    "MarketMovers",
    "WatchlistState",
    "WatchlistStore",
]
