"""Debounced symbol search feeding the store's search-results slice."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum

from ..config import DEFAULT_SEARCH_DEBOUNCE
from ..formatting import user_error_message
from ..market.interface import MarketDataProvider
from ..market.models import Stock
from .actions import AddStock, ClearSearch, SetSearchLoading, SetSearchResults
from .store import WatchlistStore

logger = logging.getLogger(__name__)


class SearchPhase(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    LOADING = "loading"
    RESULTS = "results"
    EMPTY = "empty"
    FAILED = "failed"


class SearchPipeline:
    """Turns keystrokes into at most one provider lookup per quiet period.

    Every call to update_query() cancels the pending debounce task and bumps a
    generation counter. A lookup remembers the generation it started under
    and only dispatches its results if no newer query has arrived since, so
    a slow response can never overwrite a newer one.

    Provider failures are logged and shown as an empty result list.
    """

    def __init__(
        self,
        store: WatchlistStore,
        provider: MarketDataProvider,
        debounce: float = DEFAULT_SEARCH_DEBOUNCE,
    ) -> None:
        self._store = store
        self._provider = provider
        self._debounce = debounce
        self._query = ""
        self._phase = SearchPhase.IDLE
        self._generation = 0
        self._pending: asyncio.Task | None = None
        self._tasks: set[asyncio.Task] = set()
        self.last_error: str | None = None

    @property
    def query(self) -> str:
        """Raw query as typed, for display."""
        return self._query

    @property
    def phase(self) -> SearchPhase:
        return self._phase

    def update_query(self, text: str) -> None:
        """Record a keystroke and (re)arm the debounce timer."""
        self._query = text
        self._cancel_pending()
        self._generation += 1

        if not text.strip():
            self._phase = SearchPhase.IDLE
            self.last_error = None
            self._store.dispatch(ClearSearch())
            return

        self._phase = SearchPhase.DEBOUNCING
        self._pending = asyncio.create_task(
            self._debounced(text, self._generation), name="search-debounce"
        )
        self._tasks.add(self._pending)
        self._pending.add_done_callback(self._tasks.discard)

    async def search(self, query: str) -> list[Stock]:
        """Look up a query right away, bypassing the debounce timer."""
        self._cancel_pending()
        self._generation += 1
        return await self._run(query, self._generation)

    def select(self, stock: Stock) -> None:
        """Add a search result to the watchlist and reset the search box."""
        self._store.dispatch(AddStock(stock))
        self.update_query("")

    async def wait(self) -> None:
        """Wait until every debounced lookup started so far has settled."""
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def close(self) -> None:
        """Cancel the debounce timer. Lookups already in flight become stale."""
        self._cancel_pending()
        self._generation += 1

    # --- Internal ---

    def _cancel_pending(self) -> None:
        # Only a timer that has not fired yet is cancelled. A lookup already
        # talking to the provider runs to completion and is discarded as stale.
        if (
            self._pending is not None
            and not self._pending.done()
            and self._phase is SearchPhase.DEBOUNCING
        ):
            self._pending.cancel()
        self._pending = None

    async def _debounced(self, query: str, generation: int) -> None:
        await asyncio.sleep(self._debounce)
        await self._run(query, generation)

    async def _run(self, query: str, generation: int) -> list[Stock]:
        if not query.strip():
            self._phase = SearchPhase.IDLE
            self._store.dispatch(ClearSearch())
            return []

        self._phase = SearchPhase.LOADING
        self._store.dispatch(SetSearchLoading(True))

        error: Exception | None = None
        try:
            results = await self._provider.search_symbol(query)
        except Exception as e:
            logger.warning("Search for %r failed: %s", query, e)
            error = e
            results = []

        if generation != self._generation:
            logger.debug("Discarding stale results for %r", query)
            return results

        self.last_error = user_error_message(error) if error is not None else None
        if error is not None:
            self._phase = SearchPhase.FAILED
        elif results:
            self._phase = SearchPhase.RESULTS
        else:
            self._phase = SearchPhase.EMPTY
        self._store.dispatch(SetSearchResults(tuple(results)))
        return results
