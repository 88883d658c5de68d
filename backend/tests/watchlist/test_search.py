"""Tests for the debounced SearchPipeline."""

import asyncio

import pytest

from fakes import FakeProvider, make_stock
from stockwatch.market.errors import NetworkFailure, ProviderRateLimited
from stockwatch.watchlist.search import SearchPhase, SearchPipeline
from stockwatch.watchlist.store import WatchlistStore

APPLE = make_stock("AAPL", name="Apple Inc.", price=150.0)


@pytest.mark.asyncio
class TestDebounce:
    """Keystrokes inside the quiet window collapse into one lookup."""

    async def test_debounce_collapse(self):
        """A/AA/AAP/AAPL at 0/50/100/150ms → one call for AAPL at ~450ms."""
        provider = FakeProvider(results={"AAPL": [APPLE]})
        store = WatchlistStore()
        search = SearchPipeline(store, provider, debounce=0.3)
        loop = asyncio.get_running_loop()

        start = loop.time()
        for i, query in enumerate(["A", "AA", "AAP", "AAPL"]):
            if i:
                await asyncio.sleep(0.05)
            search.update_query(query)
        await search.wait()

        assert [q for q, _ in provider.search_calls] == ["AAPL"]
        fired_at = provider.search_calls[0][1] - start
        assert fired_at >= 0.45 - 0.02
        assert store.state.search_results == (APPLE,)
        assert search.phase is SearchPhase.RESULTS

    async def test_query_stored_immediately(self):
        search = SearchPipeline(WatchlistStore(), FakeProvider(), debounce=10.0)
        search.update_query("aap")
        assert search.query == "aap"
        assert search.phase is SearchPhase.DEBOUNCING
        search.close()

    async def test_blank_query_clears_without_provider_call(self):
        provider = FakeProvider()
        store = WatchlistStore()
        store.set_search_results([APPLE])
        search = SearchPipeline(store, provider, debounce=0.01)

        search.update_query("   ")
        await search.wait()

        assert provider.search_calls == []
        assert store.state.search_results == ()
        assert search.phase is SearchPhase.IDLE

    async def test_clearing_cancels_pending_lookup(self):
        provider = FakeProvider(results={"AAPL": [APPLE]})
        search = SearchPipeline(WatchlistStore(), provider, debounce=0.05)

        search.update_query("AAPL")
        search.update_query("")
        await asyncio.sleep(0.1)

        assert provider.search_calls == []

    async def test_close_cancels_pending_lookup(self):
        provider = FakeProvider(results={"AAPL": [APPLE]})
        search = SearchPipeline(WatchlistStore(), provider, debounce=0.05)

        search.update_query("AAPL")
        search.close()
        await asyncio.sleep(0.1)

        assert provider.search_calls == []


@pytest.mark.asyncio
class TestSearchOutcomes:
    async def test_loading_flag_during_lookup(self):
        provider = FakeProvider(results={"AAPL": [APPLE]})
        provider.gates["AAPL"] = asyncio.Event()
        store = WatchlistStore()
        search = SearchPipeline(store, provider)

        task = asyncio.create_task(search.search("AAPL"))
        await asyncio.sleep(0)
        assert store.state.search_loading is True
        assert search.phase is SearchPhase.LOADING

        provider.gates["AAPL"].set()
        await task
        assert store.state.search_loading is False

    async def test_empty_results(self):
        store = WatchlistStore()
        search = SearchPipeline(store, FakeProvider())

        assert await search.search("ZZZZ") == []
        assert store.state.search_results == ()
        assert search.phase is SearchPhase.EMPTY

    async def test_provider_failure_degrades_to_empty(self):
        provider = FakeProvider(results={"AAPL": ProviderRateLimited("Note: 5 calls per minute")})
        store = WatchlistStore()
        store.set_search_results([APPLE])
        search = SearchPipeline(store, provider)

        assert await search.search("AAPL") == []

        assert store.state.search_results == ()
        assert store.state.search_loading is False
        assert store.state.error is None
        assert search.phase is SearchPhase.FAILED
        assert search.last_error == "API rate limit exceeded. Please try again later."

    async def test_unexpected_failure_is_contained(self):
        provider = FakeProvider(results={"AAPL": RuntimeError("bug")})
        search = SearchPipeline(WatchlistStore(), provider)

        assert await search.search("AAPL") == []
        assert search.phase is SearchPhase.FAILED

    async def test_success_clears_previous_error(self):
        provider = FakeProvider(results={"AAPL": NetworkFailure("down")})
        search = SearchPipeline(WatchlistStore(), provider)
        await search.search("AAPL")
        assert search.last_error is not None

        provider.results["AAPL"] = [APPLE]
        await search.search("AAPL")
        assert search.last_error is None


@pytest.mark.asyncio
class TestStaleResponses:
    """A slow earlier lookup must never overwrite a newer one."""

    async def test_stale_completion_is_discarded(self):
        microsoft = make_stock("MSFT", name="Microsoft", price=420.0)
        provider = FakeProvider(results={"AAPL": [APPLE], "MSFT": [microsoft]})
        provider.gates["AAPL"] = asyncio.Event()
        store = WatchlistStore()
        search = SearchPipeline(store, provider)

        slow = asyncio.create_task(search.search("AAPL"))
        await asyncio.sleep(0)
        await search.search("MSFT")
        assert store.state.search_results == (microsoft,)

        provider.gates["AAPL"].set()
        await slow

        assert store.state.search_results == (microsoft,)

    async def test_debounced_lookup_in_flight_is_not_aborted_but_ignored(self):
        provider = FakeProvider(results={"AAPL": [APPLE]})
        provider.gates["AAPL"] = asyncio.Event()
        store = WatchlistStore()
        search = SearchPipeline(store, provider, debounce=0.01)

        search.update_query("AAPL")
        await asyncio.sleep(0.05)  # debounce fired, lookup now waiting on the provider
        assert search.phase is SearchPhase.LOADING

        search.update_query("")
        provider.gates["AAPL"].set()
        await search.wait()

        assert len(provider.search_calls) == 1
        assert store.state.search_results == ()
        assert search.phase is SearchPhase.IDLE

    async def test_completion_after_close_is_ignored(self):
        provider = FakeProvider(results={"AAPL": [APPLE]})
        provider.gates["AAPL"] = asyncio.Event()
        store = WatchlistStore()
        search = SearchPipeline(store, provider)

        task = asyncio.create_task(search.search("AAPL"))
        await asyncio.sleep(0)
        search.close()
        provider.gates["AAPL"].set()
        await task

        assert store.state.search_results == ()


@pytest.mark.asyncio
class TestSelect:
    async def test_select_adds_and_clears(self):
        store = WatchlistStore()
        search = SearchPipeline(store, FakeProvider(results={"AAPL": [APPLE]}))
        search.update_query("AAPL")
        await search.search("AAPL")

        search.select(APPLE)

        assert store.state.symbols() == ["AAPL"]
        assert store.state.portfolio_value == 150.0
        assert store.state.search_results == ()
        assert search.query == ""
        assert search.phase is SearchPhase.IDLE
