"""
Cache des requetes et invalidation / Query cache and invalidation.

Les lectures sont memorisees par cle (famille, *parametres) et considerees
fraiches pendant stale_time. Toute mutation reussie invalide les familles
touchees, sans distinction de parametre.
Reads are memoized per (family, *params) key and treated as fresh for
stale_time. Every successful mutation invalidates the affected families
regardless of parameter value.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from radio_console.config import settings
from radio_console.store import TransportError

log = logging.getLogger(__name__)

CacheKey = tuple

# Familles du catalogue, toujours invalidees ensemble / Catalog families, always invalidated together
CATALOG_FAMILIES = (
    "brands",
    "brand-stats",
    "categories",
    "models",
    "brands-with-radios",
    "radio-models",
)

# Famille mutee -> familles a invalider / Mutated family -> families to invalidate
INVALIDATION_MAP: dict[str, tuple[str, ...]] = {
    "radios": ("radios", "radio-stats", "radio-history", "dashboard"),
    "radio-history": ("radio-history",),
    "accessories": ("accessories", "accessory-stats", "dashboard"),
    "issues": ("issues", "dashboard"),
    "installations": ("installations", "dashboard"),
    "brands": CATALOG_FAMILIES,
    "categories": CATALOG_FAMILIES,
    "models": CATALOG_FAMILIES,
}


def families_for(family: str) -> tuple[str, ...]:
    """Familles a invalider apres une mutation / Families to invalidate after a mutation."""
    return INVALIDATION_MAP.get(family, (family,))


@dataclass
class _Entry:
    value: Any
    fetched_at: float


class QueryCache:
    """Cache partage par tout le processus / Process-wide shared cache.

    Injecte via une dependance FastAPI, remplacable en test.
    Injected through a FastAPI dependency, replaceable in tests.
    """

    def __init__(
        self,
        stale_time: float = 300.0,
        query_retry: int = 2,
        mutation_retry: int = 1,
        retry_delay: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.stale_time = stale_time
        self.query_retry = query_retry
        self.mutation_retry = mutation_retry
        self.retry_delay = retry_delay
        self._clock = clock
        self._entries: dict[CacheKey, _Entry] = {}
        self._inflight: dict[CacheKey, asyncio.Task] = {}
        # Epoque par famille : une lecture lancee avant une invalidation n'est pas memorisee
        # Per-family epoch: a read started before an invalidation is not stored
        self._epochs: dict[str, int] = {}

    def keys(self) -> list[CacheKey]:
        return list(self._entries)

    def is_fresh(self, key: CacheKey) -> bool:
        entry = self._entries.get(key)
        return entry is not None and self._clock() - entry.fetched_at < self.stale_time

    async def fetch(self, key: CacheKey, loader: Callable[[], Awaitable[Any]]) -> Any:
        """Lecture memorisee / Memoized read.

        Les appels concurrents sur la meme cle partagent une seule requete.
        Concurrent calls on the same key share a single request.
        """
        if self.is_fresh(key):
            return self._entries[key].value

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load(key, loader))
            self._inflight[key] = task
            task.add_done_callback(lambda done, k=key: self._forget(k, done))
        return await asyncio.shield(task)

    def _forget(self, key: CacheKey, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]

    async def _load(self, key: CacheKey, loader: Callable[[], Awaitable[Any]]) -> Any:
        family = key[0]
        epoch = self._epochs.get(family, 0)
        value = await self._with_retry(loader, self.query_retry, f"read {key!r}")
        if self._epochs.get(family, 0) == epoch:
            self._entries[key] = _Entry(value=value, fetched_at=self._clock())
        return value

    async def mutate(self, fn: Callable[[], Awaitable[Any]], families: tuple[str, ...] | list[str]) -> Any:
        """Executer une mutation puis invalider / Run a mutation then invalidate."""
        result = await self._with_retry(fn, self.mutation_retry, "mutation")
        for family in families:
            self.invalidate(family)
        return result

    def invalidate(self, family: str, params: tuple | None = None) -> None:
        """Invalider une famille entiere ou une cle exacte / Invalidate a whole family or one exact key."""
        if params is not None:
            key = (family, *params)
            self._epochs[family] = self._epochs.get(family, 0) + 1
            self._entries.pop(key, None)
            self._inflight.pop(key, None)
            return

        self._epochs[family] = self._epochs.get(family, 0) + 1
        for key in [k for k in self._entries if k[0] == family]:
            del self._entries[key]
        for key in [k for k in self._inflight if k[0] == family]:
            del self._inflight[key]

    async def _with_retry(self, fn: Callable[[], Awaitable[Any]], retries: int, label: str) -> Any:
        attempt = 0
        while True:
            try:
                return await fn()
            except TransportError as exc:
                if attempt >= retries:
                    raise
                delay = self.retry_delay * (2 ** attempt)
                attempt += 1
                log.info("Retrying %s (%d/%d) after error: %s", label, attempt, retries, exc)
                if delay:
                    await asyncio.sleep(delay)


def create_cache() -> QueryCache:
    """Construire le cache depuis la configuration / Build the cache from settings."""
    return QueryCache(
        stale_time=settings.CACHE_STALE_SECONDS,
        query_retry=settings.QUERY_RETRY,
        mutation_retry=settings.MUTATION_RETRY,
        retry_delay=settings.RETRY_DELAY_SECONDS,
    )
