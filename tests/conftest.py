"""Shared fixtures: a fresh in-memory store and shop snapshot per test."""

from datetime import datetime, timezone

import pytest

from clearview.services.shop import ShopState
from clearview.services.store import InMemoryStore

NOW = datetime(2026, 2, 20, 15, 30, tzinfo=timezone.utc)


@pytest.fixture
def store():
    return InMemoryStore.with_demo_data(NOW)


@pytest.fixture
def shop(store):
    state = ShopState(store)
    yield state
    state.close()
