"""Pytest configuration and fixtures."""

import asyncio

import pytest

from fakes import FakeProvider


@pytest.fixture
def event_loop_policy():
    """Use the default event loop policy for all async tests."""
    return asyncio.DefaultEventLoopPolicy()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()
