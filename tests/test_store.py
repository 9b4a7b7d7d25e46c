"""Tests du client REST / REST client tests."""

import pytest

from fake_store import radio_row
from radio_console.store import TransportError


@pytest.mark.asyncio
async def test_every_request_carries_key_twice(store, fake):
    await store.select("radios")
    headers = fake.calls[0].headers
    assert headers["apikey"] == "test-key"
    assert headers["authorization"] == "Bearer test-key"


@pytest.mark.asyncio
async def test_select_encodes_filters_order_and_limit(store, fake):
    fake.seed("radios", radio_row("1001"), radio_row("1002", afdeling="Brandweer"))
    rows = await store.select("radios", filters={"afdeling": "Politie"}, order="created_at.desc", limit=10)
    assert [r["id"] for r in rows] == ["1001"]
    assert fake.calls[0].params == {
        "select": "*",
        "afdeling": "eq.Politie",
        "order": "created_at.desc",
        "limit": "10",
    }


@pytest.mark.asyncio
async def test_count(store, fake):
    fake.seed("brands", {"name": "Motorola"}, {"name": "Kenwood"})
    assert await store.count("brands") == 2
    assert fake.calls[0].params == {"select": "count"}


@pytest.mark.asyncio
async def test_insert_asks_for_representation(store, fake):
    row = await store.insert("brands", {"name": "Motorola"})
    assert row["name"] == "Motorola"
    assert "id" in row
    assert fake.calls[0].headers["prefer"] == "return=representation"


@pytest.mark.asyncio
async def test_update_without_match_returns_none(store):
    assert await store.update("brands", "id", "missing", {"name": "X"}) is None


@pytest.mark.asyncio
async def test_delete_is_scoped_by_key(store, fake):
    fake.seed("brands", {"id": "b1", "name": "A"}, {"id": "b2", "name": "B"})
    await store.delete("brands", "id", "b1")
    assert [r["id"] for r in fake.rows("brands")] == ["b2"]
    assert fake.calls[0].params == {"id": "eq.b1"}


@pytest.mark.asyncio
async def test_http_error_keeps_raw_body(store, fake):
    fake.fail("GET", "radios", status_code=500, body="boom")
    with pytest.raises(TransportError) as exc_info:
        await store.select("radios")
    assert exc_info.value.status_code == 500
    assert exc_info.value.body == "boom"
    assert exc_info.value.message == "HTTP error! status: 500 - boom"


@pytest.mark.asyncio
async def test_network_error_has_no_status(store, fake):
    fake.fail("GET", "radios", network=True)
    with pytest.raises(TransportError) as exc_info:
        await store.select("radios")
    assert exc_info.value.status_code is None
