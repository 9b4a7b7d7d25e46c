"""
Depot generique par entite / Generic per-entity repository.

Traduit chaque verbe CRUD en une requete filtree sur le store, memorise les
lectures dans le QueryCache et invalide les familles touchees apres mutation.
Translates each CRUD verb into one filtered store request, memoizes reads in
the QueryCache and invalidates the affected families after a mutation.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from radio_console.models.base import Entity
from radio_console.services.cache import QueryCache, families_for
from radio_console.store import RestStore

ReadT = TypeVar("ReadT", bound=BaseModel)


def to_payload(data: BaseModel | dict, partial: bool = False) -> dict:
    """Corps JSON d'une ecriture / JSON body of a write.

    partial=True n'envoie que les champs fournis / only sends supplied fields.
    """
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", exclude_unset=partial)
    return dict(data)


class Repository(Generic[ReadT]):
    """Depot parametre par entite + schema de lecture / Repository parametrized by entity + read schema."""

    def __init__(self, store: RestStore, cache: QueryCache, entity: Entity, schema: type[ReadT]):
        self.store = store
        self.cache = cache
        self.entity = entity
        self.schema = schema

    @property
    def family(self) -> str:
        return self.entity.family

    def key(self, *params: Any) -> tuple:
        return (self.entity.family, *params)

    def _parse(self, rows: list[dict]) -> list[ReadT]:
        return [self.schema.model_validate(row) for row in rows]

    # --- Lectures / Reads ---

    async def list_all(self, order: str | None = None) -> list[ReadT]:
        """Tout lister, trie cote serveur / List everything, server-side sorted."""
        order = order or self.entity.order
        key = self.key() if order == self.entity.order else self.key("order", order)
        rows = await self.cache.fetch(key, lambda: self.store.select(self.entity.resource, order=order))
        return self._parse(rows)

    async def list_by(
        self, column: str, value: Any, order: str | None = None, use_cache: bool = True,
    ) -> list[ReadT]:
        order = order or self.entity.order

        def load():
            return self.store.select(self.entity.resource, filters={column: value}, order=order)

        if use_cache:
            rows = await self.cache.fetch(self.key("where", column, str(value)), load)
        else:
            rows = await load()
        return self._parse(rows)

    async def recent(self, limit: int, order: str | None = None) -> list[ReadT]:
        order = order or self.entity.order
        rows = await self.cache.fetch(
            self.key("recent", limit),
            lambda: self.store.select(self.entity.resource, order=order, limit=limit),
        )
        return self._parse(rows)

    async def get_by(self, column: str, value: Any, use_cache: bool = True) -> ReadT | None:
        """Premier enregistrement correspondant ou None / First matching record or None."""

        async def load() -> dict | None:
            rows = await self.store.select(self.entity.resource, filters={column: value})
            return rows[0] if rows else None

        if use_cache:
            row = await self.cache.fetch(self.key(column, str(value)), load)
        else:
            row = await load()
        return self.schema.model_validate(row) if row else None

    async def get_by_id(self, record_id: Any, use_cache: bool = True) -> ReadT | None:
        return await self.get_by(self.entity.key, record_id, use_cache=use_cache)

    async def count(self) -> int:
        return await self.cache.fetch(self.key("count"), lambda: self.store.count(self.entity.resource))

    # --- Mutations ---

    async def create(self, data: BaseModel | dict) -> ReadT:
        payload = to_payload(data)
        row = await self.cache.mutate(
            lambda: self.store.insert(self.entity.resource, payload), families_for(self.family),
        )
        return self.schema.model_validate(row)

    async def update(self, record_id: Any, data: BaseModel | dict) -> ReadT | None:
        """PATCH partiel ; None si aucune ligne ne correspond / Partial PATCH; None when no row matches."""
        payload = to_payload(data, partial=True)
        if not payload:
            return await self.get_by_id(record_id)
        row = await self.cache.mutate(
            lambda: self.store.update(self.entity.resource, self.entity.key, record_id, payload),
            families_for(self.family),
        )
        return self.schema.model_validate(row) if row else None

    async def delete(self, record_id: Any) -> None:
        """Suppression definitive, sans verification prealable / Permanent delete, no existence check."""
        await self.cache.mutate(
            lambda: self.store.delete(self.entity.resource, self.entity.key, record_id),
            families_for(self.family),
        )
