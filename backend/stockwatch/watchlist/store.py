"""The watchlist store: single source of truth for dashboard state."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from ..market.models import Stock
from .actions import (
    Action,
    AddStock,
    ClearSearch,
    RemoveStock,
    SetSearchLoading,
    SetSearchResults,
    SetWatchlist,
    UpdateStockData,
)
from .persistence import MemoryStorage, WatchlistStorage
from .reducer import reduce
from .state import WatchlistState

logger = logging.getLogger(__name__)

Listener = Callable[[WatchlistState], None]


class WatchlistStore:
    """Holds the current WatchlistState and applies actions to it.

    Components receive the store explicitly and change state only through
    dispatch(). Each dispatch runs the reducer synchronously, so no listener
    or reader ever sees a half-applied transition. After any dispatch that
    changes the watchlist, the watchlist is written to storage.

    Lifecycle:
        store = WatchlistStore.load(JsonFileStorage("watchlist.json"))
        unsubscribe = store.subscribe(on_change)
        store.dispatch(AddStock(stock))
        unsubscribe()
    """

    def __init__(
        self,
        storage: WatchlistStorage | None = None,
        initial: WatchlistState | None = None,
    ) -> None:
        self._storage = storage if storage is not None else MemoryStorage()
        self._state = initial or WatchlistState()
        self._listeners: list[Listener] = []
        self._version: int = 0  # Monotonically increasing; bumped on every state change

    @classmethod
    def load(cls, storage: WatchlistStorage) -> WatchlistStore:
        """Create a store seeded from storage. Unreadable data yields an empty watchlist."""
        store = cls(storage=storage)
        stocks = storage.load()
        if stocks:
            store.dispatch(SetWatchlist(tuple(stocks)))
            logger.info("Loaded %d watchlist entries", len(store.state.watchlist))
        return store

    @property
    def state(self) -> WatchlistState:
        return self._state

    @property
    def version(self) -> int:
        """Current version counter. Useful for SSE change detection."""
        return self._version

    def dispatch(self, action: Action) -> WatchlistState:
        previous = self._state
        state = reduce(previous, action)
        if state is previous:
            return state

        self._state = state
        self._version += 1
        if state.watchlist is not previous.watchlist:
            self._storage.save(state.watchlist)

        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Watchlist listener failed")
        return state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener(state) after every state change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Convenience wrappers ---

    def add_stock(self, stock: Stock) -> None:
        self.dispatch(AddStock(stock))

    def remove_stock(self, symbol: str) -> None:
        self.dispatch(RemoveStock(symbol.strip().upper()))

    def update_stock_data(self, stock: Stock) -> None:
        self.dispatch(UpdateStockData(stock))

    def set_search_results(self, results: Iterable[Stock]) -> None:
        self.dispatch(SetSearchResults(tuple(results)))

    def set_search_loading(self, loading: bool) -> None:
        self.dispatch(SetSearchLoading(loading))

    def clear_search(self) -> None:
        self.dispatch(ClearSearch())
