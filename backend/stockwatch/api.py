"""Dashboard HTTP endpoints and SSE state stream."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from .watchlist.refresh import RefreshScheduler
from .watchlist.search import SearchPipeline
from .watchlist.store import WatchlistStore

logger = logging.getLogger(__name__)


class SearchRequest(BaseModel):
    query: str


def create_dashboard_router(
    store: WatchlistStore,
    search: SearchPipeline,
    refresher: RefreshScheduler,
) -> APIRouter:
    """Create the dashboard router around explicitly injected components."""
    router = APIRouter(prefix="/api", tags=["dashboard"])

    @router.get("/watchlist")
    async def get_watchlist() -> dict:
        return _snapshot(store, search, refresher)

    @router.post("/search")
    async def update_search(body: SearchRequest) -> dict:
        """Record a keystroke. Results arrive through the state stream once debounced."""
        search.update_query(body.query)
        return {"query": search.query, "phase": search.phase.value}

    @router.post("/watchlist/{symbol}")
    async def add_from_search(symbol: str) -> dict:
        symbol = symbol.strip().upper()
        for stock in store.state.search_results:
            if stock.symbol == symbol:
                search.select(stock)
                return _snapshot(store, search, refresher)
        raise HTTPException(status_code=404, detail=f"{symbol} is not in the current search results")

    @router.delete("/watchlist/{symbol}")
    async def remove(symbol: str) -> dict:
        store.remove_stock(symbol)
        return _snapshot(store, search, refresher)

    @router.post("/refresh")
    async def refresh() -> dict:
        refreshed = await refresher.refresh_all()
        return {"refreshed": refreshed}

    @router.get("/stream/state")
    async def stream_state(request: Request) -> StreamingResponse:
        """SSE endpoint pushing the full dashboard state whenever it changes.

            data: {"watchlist": [...], "portfolio_value": 340.0, ...}
        """
        return StreamingResponse(
            _generate_events(store, search, refresher, request),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",  # Disable nginx buffering if proxied
            },
        )

    return router


def _snapshot(store: WatchlistStore, search: SearchPipeline, refresher: RefreshScheduler) -> dict:
    data = store.state.to_dict()
    data["search"] = {
        "query": search.query,
        "phase": search.phase.value,
        "error": search.last_error,
    }
    data["is_refreshing"] = refresher.is_refreshing
    return data


async def _generate_events(
    store: WatchlistStore,
    search: SearchPipeline,
    refresher: RefreshScheduler,
    request: Request,
    interval: float = 0.25,
) -> AsyncGenerator[str, None]:
    """Yield an SSE event each time the store version moves.

    Stops when the client disconnects.
    """
    # Tell the client to retry after 1 second if the connection drops
    yield "retry: 1000\n\n"

    last_version = -1
    client_ip = request.client.host if request.client else "unknown"
    logger.info("SSE client connected: %s", client_ip)

    try:
        while True:
            if await request.is_disconnected():
                logger.info("SSE client disconnected: %s", client_ip)
                break

            if store.version != last_version:
                last_version = store.version
                payload = json.dumps(_snapshot(store, search, refresher))
                yield f"data: {payload}\n\n"

            await asyncio.sleep(interval)
    except asyncio.CancelledError:
        logger.info("SSE stream cancelled for: %s", client_ip)
