"""Application wiring: settings → cache → provider → store → search/refresh → API."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .api import create_dashboard_router
from .config import Settings
from .market.cache import ResponseCache
from .market.factory import create_market_data_provider
from .watchlist.persistence import JsonFileStorage, MemoryStorage, WatchlistStorage
from .watchlist.refresh import RefreshScheduler
from .watchlist.search import SearchPipeline
from .watchlist.store import WatchlistStore

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s %(message)s")


def create_storage(settings: Settings) -> WatchlistStorage:
    if settings.storage_path:
        return JsonFileStorage(settings.storage_path)
    logger.info("No STOCKWATCH_STORAGE_PATH set, watchlist will not survive restarts")
    return MemoryStorage()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the dashboard app. Components are created once and injected into the router."""
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    cache = ResponseCache(ttl=settings.cache_ttl)
    provider = create_market_data_provider(settings, cache)
    store = WatchlistStore.load(create_storage(settings))
    search = SearchPipeline(store, provider, debounce=settings.search_debounce)
    refresher = RefreshScheduler(store, provider, interval=settings.refresh_interval)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await refresher.start()
        try:
            yield
        finally:
            search.close()
            await refresher.stop()
            await provider.aclose()

    app = FastAPI(title="stockwatch", lifespan=lifespan)
    app.include_router(create_dashboard_router(store, search, refresher))
    app.state.store = store
    return app


def run(settings: Settings | None = None) -> None:
    """Serve the dashboard with uvicorn on the configured host and port."""
    settings = settings or Settings.from_env()
    app = create_app(settings)
    logger.info("Serving dashboard on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
