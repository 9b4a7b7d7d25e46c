"""Tests du service radio / Radio service tests."""

import pytest

from fake_store import radio_row
from radio_console.models.radio import RadioType
from radio_console.schemas.radio import (
    AliasChange,
    DepartmentChange,
    IdChange,
    RadioCreate,
    RadioUpdate,
    ServiceEvent,
)
from radio_console.services.radio_service import filter_radios
from radio_console.services.validation import ValidationConflict


def new_radio(radio_id="1001", **overrides):
    data = {
        "id": radio_id,
        "merk": "Motorola",
        "model": "MTP3550",
        "type": "Portable",
        "serienummer": "abc123",
        "alias": "Unit 1",
        "afdeling": "Politie",
        "registratiedatum": "2026-03-01",
    }
    data.update(overrides)
    return RadioCreate(**data)


@pytest.mark.asyncio
async def test_register_update_delete_scenario(radio_service, fake):
    created = await radio_service.create(new_radio())
    assert created.id == "1001"
    assert created.serienummer == "ABC123"

    updated = await radio_service.update("1001", RadioUpdate(afdeling="Brandweer"))
    assert updated.afdeling == "Brandweer"
    assert fake.calls_to("PATCH", "radios")[0].body == {"afdeling": "Brandweer"}

    history = await radio_service.history_for("1001")
    assert len(history) == 1
    entry = history[0]
    assert entry.action == "department_changed"
    assert entry.description == "Afdeling gewijzigd van Politie naar Brandweer"
    assert (entry.details.old_value, entry.details.new_value) == ("Politie", "Brandweer")
    assert entry.timestamp == "2026-03-15T10:30:00+00:00"

    await radio_service.delete("1001")
    assert await radio_service.get("1001") is None


@pytest.mark.asyncio
async def test_create_rejects_taken_id(radio_service, fake):
    fake.seed("radios", radio_row("1001"))
    with pytest.raises(ValidationConflict) as exc_info:
        await radio_service.create(new_radio())
    assert exc_info.value.message == "Dit ID is al in gebruik"
    assert fake.calls_to("POST") == []


@pytest.mark.asyncio
async def test_create_rejects_taken_serial_any_case(radio_service, fake):
    fake.seed("radios", radio_row("2002", serienummer="ABC123"))
    with pytest.raises(ValidationConflict) as exc_info:
        await radio_service.create(new_radio(serienummer="Abc123"))
    assert exc_info.value.field == "serienummer"


def test_non_numeric_id_rejected_by_schema():
    with pytest.raises(ValueError):
        new_radio("10a1")
    with pytest.raises(ValueError):
        new_radio("100")


@pytest.mark.asyncio
async def test_update_with_unchanged_values_sends_nothing(radio_service, fake):
    fake.seed("radios", radio_row("1001"))
    radio = await radio_service.update("1001", RadioUpdate(afdeling="Politie"))
    assert radio.afdeling == "Politie"
    assert fake.calls_to("PATCH") == []
    assert fake.rows("radio_history") == []


@pytest.mark.asyncio
async def test_update_alias_and_model_logs_alias_only(radio_service, fake):
    fake.seed("radios", radio_row("1001"))
    await radio_service.update("1001", RadioUpdate(alias="Noord 1", model="MTP6650"), notes="wissel")
    history = fake.rows("radio_history")
    assert [h["action"] for h in history] == ["alias_changed"]
    assert history[0]["details"]["notes"] == "wissel"


@pytest.mark.asyncio
async def test_update_missing_radio(radio_service):
    assert await radio_service.update("9999", RadioUpdate(alias="x")) is None


@pytest.mark.asyncio
async def test_change_id_records_under_new_id(radio_service, fake):
    fake.seed("radios", radio_row("1001"))
    radio = await radio_service.change_id("1001", IdChange(new_id="2002", notes="hernummerd"))
    assert radio.id == "2002"
    entry = fake.rows("radio_history")[0]
    assert entry["radio_id"] == "2002"
    assert entry["action"] == "id_changed"
    assert entry["description"] == "ID gewijzigd van 1001 naar 2002"
    assert entry["details"]["service_date"] == "2026-03-15"


@pytest.mark.asyncio
async def test_change_id_to_taken_id(radio_service, fake):
    fake.seed("radios", radio_row("1001"), radio_row("2002"))
    with pytest.raises(ValidationConflict):
        await radio_service.change_id("1001", IdChange(new_id="2002"))
    assert fake.calls_to("PATCH") == []


@pytest.mark.asyncio
async def test_explicit_alias_and_department_workflows(radio_service, fake):
    fake.seed("radios", radio_row("1001"))
    await radio_service.change_alias("1001", AliasChange(new_alias="Zuid 4", service_date="2026-02-02"))
    await radio_service.change_department("1001", DepartmentChange(new_department="Ambulance"))
    actions = {h["action"]: h for h in fake.rows("radio_history")}
    assert actions["alias_changed"]["details"]["service_date"] == "2026-02-02"
    assert actions["department_changed"]["description"] == "Afdeling gewijzigd van Politie naar Ambulance"


@pytest.mark.asyncio
async def test_battery_and_service_entries(radio_service, fake):
    fake.seed("radios", radio_row("1001"))
    battery = await radio_service.record_battery_replacement("1001", ServiceEvent(notes="accu 2"))
    serviced = await radio_service.record_service("1001", ServiceEvent(service_date="2026-03-01"))
    assert battery.description == "Batterij vervangen"
    assert battery.details.notes == "accu 2"
    assert serviced.description == "Radio geserviced"
    assert serviced.details.service_date == "2026-03-01"
    assert await radio_service.record_service("9999", ServiceEvent()) is None


@pytest.mark.asyncio
async def test_history_newest_first(radio_service, fake):
    fake.seed(
        "radio_history",
        {"radio_id": "1001", "action": "serviced", "description": "a", "timestamp": "2026-01-01T00:00:00+00:00"},
        {"radio_id": "1001", "action": "serviced", "description": "b", "timestamp": "2026-02-01T00:00:00+00:00"},
        {"radio_id": "2002", "action": "serviced", "description": "c", "timestamp": "2026-03-01T00:00:00+00:00"},
    )
    history = await radio_service.history_for("1001")
    assert [h.description for h in history] == ["b", "a"]


@pytest.mark.asyncio
async def test_stats_by_type(radio_service, fake):
    fake.seed(
        "radios",
        radio_row("1001"),
        radio_row("1002", type="Mobile"),
        radio_row("1003", type="Mobile"),
        radio_row("1004", type="Base"),
    )
    stats = await radio_service.stats()
    assert (stats.total, stats.portable, stats.mobile, stats.base) == (4, 1, 2, 1)
    assert fake.calls_to("GET", "radios")[0].params["select"] == "type"


@pytest.mark.asyncio
async def test_get_by_serial_upper_cases(radio_service, fake):
    fake.seed("radios", radio_row("1001", serienummer="XY9"))
    radio = await radio_service.get_by_serial("xy9")
    assert radio.id == "1001"


@pytest.mark.asyncio
async def test_list_search_and_type_filter(radio_service, fake):
    fake.seed(
        "radios",
        radio_row("1001", alias="Noord"),
        radio_row("1002", merk="Kenwood", type="Mobile"),
    )
    assert [r.id for r in await radio_service.list_radios("kenwood")] == ["1002"]
    assert [r.id for r in await radio_service.list_radios(radio_type=RadioType.PORTABLE)] == ["1001"]
    assert [r.id for r in await radio_service.list_radios("sn100")] == ["1002", "1001"]


def test_filter_radios_blank_query_keeps_all():
    assert filter_radios([], "  ") == []
