"""
Catalogue merk > categorie > model / Brand > category > model catalog.

Chargement paresseux : les categories d'un merk ne sont lues qu'a l'ouverture
de sa ligne, les modeles d'une categorie idem. Replier ne vide pas le cache.
Lazy loading: a brand's categories are only read when its row is expanded,
same for a category's models. Collapsing does not evict the cache.
"""

import asyncio
import logging

from radio_console.models.catalog import BRANDS, CATEGORIES, MODELS, RADIO_CATEGORY_TOKENS
from radio_console.schemas.catalog import (
    BrandCreate,
    BrandNode,
    BrandRead,
    BrandStats,
    BrandUpdate,
    CascadeStep,
    CategoryCreate,
    CategoryNode,
    CategoryRead,
    CategoryUpdate,
    ModelCreate,
    ModelRead,
    ModelUpdate,
)
from radio_console.services.cache import QueryCache
from radio_console.services.repository import Repository
from radio_console.store import RestStore, TransportError

log = logging.getLogger(__name__)


class CascadeDeleteError(Exception):
    """Suppression en cascade interrompue / Cascading delete interrupted.

    Les etapes deja faites ne sont pas annulees : le store reste partiellement vide.
    Completed steps are not rolled back: the store is left partially deleted.
    """

    def __init__(self, completed: list[CascadeStep], failed: CascadeStep, cause: Exception):
        super().__init__(f"Cascade delete failed at {failed.resource}:{failed.id}: {cause}")
        self.completed = completed
        self.failed = failed
        self.cause = cause


def is_radio_category(name: str) -> bool:
    lowered = name.lower()
    return any(token in lowered for token in RADIO_CATEGORY_TOKENS)


class CatalogService:
    """Service catalogue / Catalog service."""

    def __init__(self, store: RestStore, cache: QueryCache):
        self.store = store
        self.cache = cache
        self.brands = Repository(store, cache, BRANDS, BrandRead)
        self.categories = Repository(store, cache, CATEGORIES, CategoryRead)
        self.models = Repository(store, cache, MODELS, ModelRead)

    # --- Lectures / Reads ---

    async def list_brands(self) -> list[BrandRead]:
        return await self.brands.list_all()

    async def get_brand(self, brand_id: str) -> BrandRead | None:
        return await self.brands.get_by_id(brand_id)

    async def get_category(self, category_id: str) -> CategoryRead | None:
        return await self.categories.get_by_id(category_id)

    async def get_model(self, model_id: str) -> ModelRead | None:
        return await self.models.get_by_id(model_id)

    async def categories_for_brand(self, brand_id: str) -> list[CategoryRead]:
        """Ouverture d'un merk / Brand row expanded."""
        return await self.categories.list_by("brand_id", brand_id)

    async def models_for_category(self, category_id: str) -> list[ModelRead]:
        """Ouverture d'une categorie / Category row expanded."""
        return await self.models.list_by("category_id", category_id)

    async def tree(
        self, expanded_brands: set[str] | None = None, expanded_categories: set[str] | None = None,
    ) -> list[BrandNode]:
        """Arbre avec seulement les lignes ouvertes chargees / Tree with only expanded rows loaded."""
        expanded_brands = expanded_brands or set()
        expanded_categories = expanded_categories or set()
        nodes = []
        for brand in await self.list_brands():
            node = BrandNode(**brand.model_dump())
            if brand.id in expanded_brands:
                node.categories = []
                for category in await self.categories_for_brand(brand.id):
                    category_node = CategoryNode(**category.model_dump())
                    if category.id in expanded_categories:
                        category_node.models = await self.models_for_category(category.id)
                    node.categories.append(category_node)
            nodes.append(node)
        return nodes

    async def radio_brands(self) -> list[BrandRead]:
        """Merken ayant au moins une categorie radio / Brands with at least one radio category.

        Filtre applique cote client apres lecture non filtree.
        Filter applied client-side after an unfiltered read.
        """

        async def load() -> list[BrandRead]:
            selected = []
            for brand in await self.list_brands():
                categories = await self.categories_for_brand(brand.id)
                if any(is_radio_category(c.name) for c in categories):
                    selected.append(brand)
            return selected

        return await self.cache.fetch(("brands-with-radios",), load)

    async def radio_models(self, brand_id: str) -> list[ModelRead]:
        """Modeles des categories radio d'un merk / Models of a brand's radio categories."""

        async def load() -> list[ModelRead]:
            models: list[ModelRead] = []
            for category in await self.categories_for_brand(brand_id):
                if is_radio_category(category.name):
                    models.extend(await self.models_for_category(category.id))
            return models

        return await self.cache.fetch(("radio-models", brand_id), load)

    async def stats(self) -> BrandStats:
        async def load() -> BrandStats:
            brands, categories, models = await asyncio.gather(
                self.store.count(BRANDS.resource),
                self.store.count(CATEGORIES.resource),
                self.store.count(MODELS.resource),
            )
            return BrandStats(total_brands=brands, total_categories=categories, total_models=models)

        return await self.cache.fetch(("brand-stats",), load)

    # --- Mutations ---

    async def create_brand(self, data: BrandCreate) -> BrandRead:
        return await self.brands.create(data)

    async def update_brand(self, brand_id: str, data: BrandUpdate) -> BrandRead | None:
        return await self.brands.update(brand_id, data)

    async def create_category(self, data: CategoryCreate) -> CategoryRead:
        return await self.categories.create(data)

    async def update_category(self, category_id: str, data: CategoryUpdate) -> CategoryRead | None:
        return await self.categories.update(category_id, data)

    async def create_model(self, data: ModelCreate) -> ModelRead:
        return await self.models.create(data)

    async def update_model(self, model_id: str, data: ModelUpdate) -> ModelRead | None:
        return await self.models.update(model_id, data)

    async def delete_model(self, model_id: str) -> list[CascadeStep]:
        return await self._run_steps([CascadeStep(resource=MODELS.resource, id=model_id)], [])

    async def delete_category(self, category_id: str, cascade: bool = True) -> list[CascadeStep]:
        """Supprimer une categorie et ses modeles / Delete a category and its models.

        Un appel de suppression par enfant, sans atomicite.
        One delete call per child, no atomicity.
        """
        steps = []
        if cascade:
            models = await self.models.list_by("category_id", category_id, use_cache=False)
            steps.extend(CascadeStep(resource=MODELS.resource, id=m.id) for m in models)
        steps.append(CascadeStep(resource=CATEGORIES.resource, id=category_id))
        return await self._run_steps(steps, [])

    async def delete_brand(self, brand_id: str, cascade: bool = True) -> list[CascadeStep]:
        """Supprimer un merk, ses categories et leurs modeles / Delete a brand, its categories and their models."""
        steps = []
        if cascade:
            categories = await self.categories.list_by("brand_id", brand_id, use_cache=False)
            for category in categories:
                models = await self.models.list_by("category_id", category.id, use_cache=False)
                steps.extend(CascadeStep(resource=MODELS.resource, id=m.id) for m in models)
                steps.append(CascadeStep(resource=CATEGORIES.resource, id=category.id))
        steps.append(CascadeStep(resource=BRANDS.resource, id=brand_id))
        return await self._run_steps(steps, [])

    async def _run_steps(self, steps: list[CascadeStep], completed: list[CascadeStep]) -> list[CascadeStep]:
        repos = {
            MODELS.resource: self.models,
            CATEGORIES.resource: self.categories,
            BRANDS.resource: self.brands,
        }
        for step in steps:
            try:
                await repos[step.resource].delete(step.id)
            except TransportError as exc:
                log.error(
                    "Cascade delete stopped at %s:%s after %d step(s): %s",
                    step.resource, step.id, len(completed), exc,
                )
                raise CascadeDeleteError(completed, step, exc) from exc
            completed.append(step)
        return completed
