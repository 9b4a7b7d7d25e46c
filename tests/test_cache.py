"""Tests du cache de requetes / Query cache tests."""

import asyncio

import pytest

from radio_console.services.cache import CATALOG_FAMILIES, QueryCache, families_for
from radio_console.store import TransportError


class Loader:
    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.mark.asyncio
async def test_fetch_is_memoized_while_fresh(cache, monotonic):
    loader = Loader(["a"])
    assert await cache.fetch(("radios",), loader) == ["a"]
    monotonic.advance(299)
    assert await cache.fetch(("radios",), loader) == ["a"]
    assert loader.calls == 1


@pytest.mark.asyncio
async def test_fetch_reloads_once_stale(cache, monotonic):
    loader = Loader(["a"], ["b"])
    await cache.fetch(("radios",), loader)
    monotonic.advance(300)
    assert await cache.fetch(("radios",), loader) == ["b"]
    assert loader.calls == 2


@pytest.mark.asyncio
async def test_concurrent_fetches_share_one_request(cache):
    calls = 0

    async def slow():
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.01)
        return 42

    results = await asyncio.gather(*[cache.fetch(("radio-stats",), slow) for _ in range(5)])
    assert results == [42] * 5
    assert calls == 1


@pytest.mark.asyncio
async def test_invalidate_drops_whole_family(cache):
    await cache.fetch(("categories", "where", "brand_id", "b1"), Loader([1]))
    await cache.fetch(("categories", "where", "brand_id", "b2"), Loader([2]))
    await cache.fetch(("brands",), Loader([3]))
    cache.invalidate("categories")
    assert cache.keys() == [("brands",)]


@pytest.mark.asyncio
async def test_invalidate_exact_key(cache):
    await cache.fetch(("radios", "id", "1001"), Loader([1]))
    await cache.fetch(("radios", "id", "1002"), Loader([2]))
    cache.invalidate("radios", ("id", "1001"))
    assert cache.keys() == [("radios", "id", "1002")]


@pytest.mark.asyncio
async def test_read_started_before_invalidation_is_not_stored(cache):
    gate = asyncio.Event()

    async def slow():
        await gate.wait()
        return "old"

    pending = asyncio.ensure_future(cache.fetch(("radios",), slow))
    await asyncio.sleep(0.01)
    cache.invalidate("radios")
    gate.set()
    assert await pending == "old"
    assert ("radios",) not in cache.keys()


@pytest.mark.asyncio
async def test_query_retries_transport_errors(cache):
    loader = Loader(TransportError("down"), TransportError("down"), "ok")
    assert await cache.fetch(("radios",), loader) == "ok"
    assert loader.calls == 3


@pytest.mark.asyncio
async def test_query_gives_up_after_retries(cache):
    loader = Loader(TransportError("down"))
    with pytest.raises(TransportError):
        await cache.fetch(("radios",), loader)
    assert loader.calls == 3
    assert cache.keys() == []


@pytest.mark.asyncio
async def test_other_errors_are_not_retried(cache):
    loader = Loader(ValueError("bad row"))
    with pytest.raises(ValueError):
        await cache.fetch(("radios",), loader)
    assert loader.calls == 1


@pytest.mark.asyncio
async def test_mutation_retried_once_then_invalidates(cache):
    await cache.fetch(("radios",), Loader([1]))
    await cache.fetch(("dashboard",), Loader({}))
    mutation = Loader(TransportError("flaky"), "done")
    assert await cache.mutate(mutation, families_for("radios")) == "done"
    assert mutation.calls == 2
    assert cache.keys() == []


@pytest.mark.asyncio
async def test_failed_mutation_keeps_cache(cache):
    await cache.fetch(("radios",), Loader([1]))
    mutation = Loader(TransportError("down"))
    with pytest.raises(TransportError):
        await cache.mutate(mutation, families_for("radios"))
    assert mutation.calls == 2
    assert cache.keys() == [("radios",)]


@pytest.mark.asyncio
async def test_retry_backoff_doubles(monkeypatch):
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    cache = QueryCache(query_retry=2, retry_delay=0.5)
    loader = Loader(TransportError("down"), TransportError("down"), "ok")
    assert await cache._with_retry(loader, 2, "test") == "ok"
    assert delays == [0.5, 1.0]


def test_catalog_mutations_invalidate_every_catalog_family():
    for family in ("brands", "categories", "models"):
        assert set(families_for(family)) == set(CATALOG_FAMILIES)
    assert "dashboard" in families_for("issues")
    assert families_for("unknown") == ("unknown",)
