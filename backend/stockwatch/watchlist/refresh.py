"""Periodic background refresh of watchlist quotes."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from ..config import DEFAULT_REFRESH_INTERVAL
from ..market.interface import MarketDataProvider
from .actions import UpdateStockData
from .state import WatchlistState
from .store import WatchlistStore

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Re-fetches a quote for every watchlist entry on a fixed interval.

    All symbols in a batch are fetched concurrently and fail independently.
    Results are merged into whatever entry exists at merge time, keeping its
    name and market cap, because the quote endpoint does not know them.

    The loop pauses while the watchlist is empty and resumes once an entry
    is added.

    Lifecycle:
        scheduler = RefreshScheduler(store, provider)
        await scheduler.start()
        # ... app runs ...
        await scheduler.refresh_all()   # manual refresh
        await scheduler.stop()
    """

    def __init__(
        self,
        store: WatchlistStore,
        provider: MarketDataProvider,
        interval: float = DEFAULT_REFRESH_INTERVAL,
    ) -> None:
        self._store = store
        self._provider = provider
        self._interval = interval
        self._refreshing = False
        self._task: asyncio.Task | None = None
        self._has_entries: asyncio.Event | None = None
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def is_refreshing(self) -> bool:
        return self._refreshing

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.running:
            return
        self._has_entries = asyncio.Event()
        self._on_change(self._store.state)
        self._unsubscribe = self._store.subscribe(self._on_change)
        self._task = asyncio.create_task(self._run_loop(), name="watchlist-refresh")
        logger.info("Refresh scheduler started: %.1fs interval", self._interval)

    async def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        logger.info("Refresh scheduler stopped")

    async def refresh_all(self) -> bool:
        """Refresh every watchlist entry once.

        Returns False without doing anything if the watchlist is empty or a
        refresh is already in flight.
        """
        symbols = self._store.state.symbols()
        if not symbols:
            return False
        if self._refreshing:
            logger.debug("Refresh already in progress, skipping")
            return False

        self._refreshing = True
        try:
            results = await asyncio.gather(*(self._refresh_one(s) for s in symbols))
            logger.debug("Refresh: updated %d/%d symbols", sum(results), len(symbols))
        finally:
            self._refreshing = False
        return True

    # --- Internal ---

    def _on_change(self, state: WatchlistState) -> None:
        if self._has_entries is None:
            return
        if state.watchlist:
            self._has_entries.set()
        else:
            self._has_entries.clear()

    async def _run_loop(self) -> None:
        """Wait for entries, sleep one interval, refresh. Repeat."""
        assert self._has_entries is not None
        while True:
            if not self._has_entries.is_set():
                logger.debug("Watchlist empty, refresh paused")
                await self._has_entries.wait()
            await asyncio.sleep(self._interval)
            try:
                await self.refresh_all()
            except Exception:
                logger.exception("Watchlist refresh failed")

    async def _refresh_one(self, symbol: str) -> bool:
        try:
            quote = await self._provider.fetch_quote(symbol)
        except Exception as e:
            logger.warning("Error refreshing %s: %s", symbol, e)
            return False

        if quote is None:
            logger.debug("No quote for %s, keeping previous data", symbol)
            return False

        current = self._store.state.find(symbol)
        if current is None:
            # Removed by the user while the request was in flight.
            return False
        self._store.dispatch(UpdateStockData(current.with_quote(quote)))
        return True
