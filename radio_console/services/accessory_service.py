"""Service Accessoire / Accessory service."""

from radio_console.models.accessory import ACCESSORIES
from radio_console.schemas.accessory import AccessoryCreate, AccessoryRead, AccessoryStats, AccessoryUpdate
from radio_console.services.cache import QueryCache
from radio_console.services.repository import Repository
from radio_console.store import RestStore


def filter_accessories(accessories: list[AccessoryRead], q: str | None = None) -> list[AccessoryRead]:
    needle = (q or "").strip().lower()
    if not needle:
        return list(accessories)
    return [
        a for a in accessories
        if any(needle in (value or "").lower() for value in (a.merk, a.model, a.serienummer))
    ]


class AccessoryService:
    """Pas de contrainte d'unicite cote client / No client-side uniqueness constraint."""

    def __init__(self, store: RestStore, cache: QueryCache):
        self.accessories = Repository(store, cache, ACCESSORIES, AccessoryRead)
        self.cache = cache

    async def list_accessories(self, q: str | None = None) -> list[AccessoryRead]:
        return filter_accessories(await self.accessories.list_all(), q)

    async def get(self, accessory_id: str) -> AccessoryRead | None:
        return await self.accessories.get_by_id(accessory_id)

    async def stats(self) -> AccessoryStats:
        async def load() -> AccessoryStats:
            return AccessoryStats(total=await self.accessories.store.count(ACCESSORIES.resource))

        return await self.cache.fetch(("accessory-stats",), load)

    async def create(self, data: AccessoryCreate) -> AccessoryRead:
        return await self.accessories.create(data)

    async def update(self, accessory_id: str, data: AccessoryUpdate) -> AccessoryRead | None:
        return await self.accessories.update(accessory_id, data)

    async def delete(self, accessory_id: str) -> None:
        await self.accessories.delete(accessory_id)
