"""Tests du catalogue merk > categorie > model / Catalog tests."""

import pytest

from radio_console.schemas.catalog import CascadeStep, CategoryCreate, CategoryUpdate, ModelCreate
from radio_console.services.catalog import CascadeDeleteError, is_radio_category


@pytest.fixture
def catalog(fake):
    fake.seed(
        "brands",
        {"id": "b1", "name": "Motorola"},
        {"id": "b2", "name": "Bosch"},
    )
    fake.seed(
        "categories",
        {"id": "c1", "brand_id": "b1", "name": "Portable radio's"},
        {"id": "c2", "brand_id": "b1", "name": "Headsets"},
        {"id": "c3", "brand_id": "b2", "name": "Boormachines"},
    )
    fake.seed(
        "models",
        {"id": "m1", "category_id": "c1", "name": "MTP3550"},
        {"id": "m2", "category_id": "c1", "name": "MXP600"},
        {"id": "m3", "category_id": "c2", "name": "Earpiece"},
    )
    return fake


def test_radio_category_tokens():
    assert is_radio_category("Mobiele Radio")
    assert is_radio_category("Base stations")
    assert not is_radio_category("Headsets")


@pytest.mark.asyncio
async def test_collapsed_tree_reads_brands_only(catalog_service, catalog):
    tree = await catalog_service.tree()
    assert [b.name for b in tree] == ["Bosch", "Motorola"]
    assert all(b.categories is None for b in tree)
    assert [c.resource for c in catalog.calls] == ["brands"]


@pytest.mark.asyncio
async def test_expanding_loads_only_opened_rows(catalog_service, catalog):
    tree = await catalog_service.tree(expanded_brands={"b1"}, expanded_categories={"c1"})
    motorola = next(b for b in tree if b.id == "b1")
    bosch = next(b for b in tree if b.id == "b2")
    assert bosch.categories is None
    headsets = next(c for c in motorola.categories if c.id == "c2")
    radios = next(c for c in motorola.categories if c.id == "c1")
    assert headsets.models is None
    assert [m.name for m in radios.models] == ["MTP3550", "MXP600"]
    category_reads = catalog.calls_to("GET", "categories")
    assert [c.params["brand_id"] for c in category_reads] == ["eq.b1"]


@pytest.mark.asyncio
async def test_collapsing_keeps_cache(catalog_service, catalog):
    await catalog_service.tree(expanded_brands={"b1"})
    await catalog_service.tree()
    await catalog_service.tree(expanded_brands={"b1"})
    assert len(catalog.calls_to("GET", "categories")) == 1


@pytest.mark.asyncio
async def test_model_create_invalidates_every_catalog_family(catalog_service, catalog, cache):
    await catalog_service.categories_for_brand("b1")
    await catalog_service.categories_for_brand("b2")
    await catalog_service.radio_brands()
    await catalog_service.stats()
    await catalog_service.create_model(ModelCreate(category_id="c1", name="DP4400"))
    assert cache.keys() == []
    models = await catalog_service.radio_models("b1")
    assert "DP4400" in [m.name for m in models]


@pytest.mark.asyncio
async def test_moving_category_refreshes_both_brands(catalog_service, catalog):
    assert [c.id for c in await catalog_service.categories_for_brand("b1")] == ["c2", "c1"]
    assert [c.id for c in await catalog_service.categories_for_brand("b2")] == ["c3"]

    moved = await catalog_service.update_category("c1", CategoryUpdate(brand_id="b2"))
    assert moved.brand_id == "b2"

    assert [c.id for c in await catalog_service.categories_for_brand("b1")] == ["c2"]
    assert [c.id for c in await catalog_service.categories_for_brand("b2")] == ["c3", "c1"]


@pytest.mark.asyncio
async def test_category_create_refreshes_brand_categories(catalog_service, catalog):
    await catalog_service.categories_for_brand("b2")
    await catalog_service.create_category(CategoryCreate(brand_id="b2", name="Mobiele radio"))
    names = [c.name for c in await catalog_service.categories_for_brand("b2")]
    assert names == ["Boormachines", "Mobiele radio"]


@pytest.mark.asyncio
async def test_radio_brands_filtered_client_side(catalog_service, catalog):
    brands = await catalog_service.radio_brands()
    assert [b.id for b in brands] == ["b1"]
    # lecture non filtree du store / unfiltered store read
    assert "name" not in catalog.calls_to("GET", "brands")[0].params


@pytest.mark.asyncio
async def test_radio_models_skip_non_radio_categories(catalog_service, catalog):
    models = await catalog_service.radio_models("b1")
    assert sorted(m.id for m in models) == ["m1", "m2"]


@pytest.mark.asyncio
async def test_stats(catalog_service, catalog):
    stats = await catalog_service.stats()
    assert (stats.total_brands, stats.total_categories, stats.total_models) == (2, 3, 3)


@pytest.mark.asyncio
async def test_brand_cascade_deletes_children_first(catalog_service, catalog):
    steps = await catalog_service.delete_brand("b1")
    assert steps == [
        CascadeStep(resource="models", id="m3"),
        CascadeStep(resource="categories", id="c2"),
        CascadeStep(resource="models", id="m1"),
        CascadeStep(resource="models", id="m2"),
        CascadeStep(resource="categories", id="c1"),
        CascadeStep(resource="brands", id="b1"),
    ]
    assert [r["id"] for r in catalog.rows("brands")] == ["b2"]
    assert [r["id"] for r in catalog.rows("categories")] == ["c3"]
    assert catalog.rows("models") == []


@pytest.mark.asyncio
async def test_cascade_failure_reports_partial_progress(catalog_service, catalog):
    # Echec persistant (requete + nouvel essai) / Persistent failure (request + retry)
    catalog.fail("DELETE", "models", params={"id": "eq.m2"}, times=2)
    with pytest.raises(CascadeDeleteError) as exc_info:
        await catalog_service.delete_category("c1")

    err = exc_info.value
    assert err.completed == [CascadeStep(resource="models", id="m1")]
    assert err.failed == CascadeStep(resource="models", id="m2")
    # Pas de rollback / No rollback
    assert [r["id"] for r in catalog.rows("models")] == ["m2", "m3"]
    assert "c1" in [r["id"] for r in catalog.rows("categories")]


@pytest.mark.asyncio
async def test_non_cascading_delete(catalog_service, catalog):
    steps = await catalog_service.delete_category("c2", cascade=False)
    assert steps == [CascadeStep(resource="categories", id="c2")]
    assert "m3" in [r["id"] for r in catalog.rows("models")]
