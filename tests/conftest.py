"""Fixtures partagees / Shared fixtures."""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from fake_store import FakeStore
from radio_console.api.deps import get_cache, get_debounce_delay, get_store
from radio_console.main import app
from radio_console.rate_limit import limiter
from radio_console.services.accessory_service import AccessoryService
from radio_console.services.assignment_service import AssignmentService
from radio_console.services.cache import QueryCache
from radio_console.services.catalog import CatalogService
from radio_console.services.radio_service import RadioService
from radio_console.store import RestStore

NOW = datetime(2026, 3, 15, 10, 30, tzinfo=timezone.utc)


class FixedClock:
    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class ManualClock:
    """Horloge monotone pilotee / Driven monotonic clock."""

    def __init__(self):
        self.value = 1000.0

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


@pytest.fixture
def fake():
    return FakeStore()


@pytest.fixture
async def store(fake):
    client = RestStore("http://store.test", "test-key", transport=fake.transport)
    yield client
    await client.aclose()


@pytest.fixture
def monotonic():
    return ManualClock()


@pytest.fixture
def cache(monotonic):
    return QueryCache(stale_time=300.0, query_retry=2, mutation_retry=1, retry_delay=0.0, clock=monotonic)


@pytest.fixture
def radio_service(store, cache):
    return RadioService(store, cache, clock=FixedClock())


@pytest.fixture
def accessory_service(store, cache):
    return AccessoryService(store, cache)


@pytest.fixture
def assignment_service(radio_service, accessory_service):
    return AssignmentService(radio_service, accessory_service)


@pytest.fixture
def catalog_service(store, cache):
    return CatalogService(store, cache)


@pytest.fixture
def app_overrides(store, cache):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_debounce_delay] = lambda: 0.01
    limiter.reset()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app_overrides):
    transport = ASGITransport(app=app_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
