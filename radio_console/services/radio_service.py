"""
Service Radio / Radio service.

CRUD radio + journal append-only. Les changements d'afdeling, d'alias et
d'ID laissent toujours une entree d'historique avec ancienne/nouvelle valeur.
Radio CRUD + append-only log. Department, alias and ID changes always leave
a history entry with old/new value.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from radio_console.models.radio import RADIO_HISTORY, RADIOS, HistoryAction, RadioType
from radio_console.schemas.assignment import InstallationRead, IssueRead
from radio_console.schemas.radio import (
    AliasChange,
    DepartmentChange,
    HistoryDetails,
    IdChange,
    RadioCreate,
    RadioHistoryCreate,
    RadioHistoryRead,
    RadioRead,
    RadioStats,
    RadioUpdate,
    ServiceEvent,
    VehicleInfo,
)
from radio_console.services.cache import QueryCache
from radio_console.services.import_service import CsvImportError
from radio_console.services.repository import Repository
from radio_console.services.validation import UniquenessChecker
from radio_console.store import RestStore, TransportError

log = logging.getLogger(__name__)

# Champ suivi -> (action, libelle) / Tracked field -> (action, label)
TRACKED_FIELDS = {
    "afdeling": (HistoryAction.DEPARTMENT_CHANGED, "Afdeling"),
    "alias": (HistoryAction.ALIAS_CHANGED, "Alias"),
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def filter_radios(radios: list[RadioRead], q: str | None = None, radio_type: RadioType | None = None) -> list[RadioRead]:
    """Recherche locale (merk, model, alias, serienummer) + type / Local search + type filter."""
    needle = (q or "").strip().lower()
    result = []
    for radio in radios:
        if radio_type is not None and radio.type != radio_type:
            continue
        if needle and not any(
            needle in value.lower() for value in (radio.merk, radio.model, radio.alias, radio.serienummer)
        ):
            continue
        result.append(radio)
    return result


class RadioService:
    """Service Radio / Radio service."""

    def __init__(self, store: RestStore, cache: QueryCache, clock: Callable[[], datetime] = _utcnow):
        self.store = store
        self.cache = cache
        self.clock = clock
        self.radios = Repository(store, cache, RADIOS, RadioRead)
        self.history = Repository(store, cache, RADIO_HISTORY, RadioHistoryRead)
        self.checker = UniquenessChecker(self.radios)

    def _today(self) -> str:
        return self.clock().date().isoformat()

    # --- Lectures / Reads ---

    async def list_radios(self, q: str | None = None, radio_type: RadioType | None = None) -> list[RadioRead]:
        return filter_radios(await self.radios.list_all(), q, radio_type)

    async def get(self, radio_id: str) -> RadioRead | None:
        return await self.radios.get_by_id(radio_id)

    async def get_by_serial(self, serienummer: str) -> RadioRead | None:
        return await self.radios.get_by("serienummer", serienummer.upper())

    async def stats(self) -> RadioStats:
        """Comptage par type / Count by type."""

        async def load() -> RadioStats:
            rows = await self.store.select(RADIOS.resource, columns="type")
            types = [row.get("type") for row in rows]
            return RadioStats(
                total=len(types),
                portable=types.count(RadioType.PORTABLE.value),
                mobile=types.count(RadioType.MOBILE.value),
                base=types.count(RadioType.BASE.value),
            )

        return await self.cache.fetch(("radio-stats",), load)

    async def history_for(self, radio_id: str) -> list[RadioHistoryRead]:
        return await self.history.list_by("radio_id", radio_id)

    # --- Mutations ---

    async def create(self, data: RadioCreate, check_unique: bool = True) -> RadioRead:
        """Creer une radio / Create a radio.

        check_unique refait la verification d'ID et de serienummer juste avant l'insert.
        check_unique re-runs the ID and serial number check right before the insert.
        """
        if check_unique:
            await self.checker.ensure_available(radio_id=data.id, serienummer=data.serienummer)
        return await self.radios.create(data)

    async def update(self, radio_id: str, data: RadioUpdate, notes: str | None = None) -> RadioRead | None:
        """PATCH des seuls champs modifies / PATCH of changed fields only.

        L'unicite du serienummer n'est pas reverifiee ici.
        Serial number uniqueness is not re-checked here.
        """
        current = await self.radios.get_by_id(radio_id, use_cache=False)
        if current is None:
            return None

        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if getattr(current, field) != value
        }
        if not changes:
            return current

        updated = await self.radios.update(radio_id, RadioUpdate(**changes))
        for field, (action, label) in TRACKED_FIELDS.items():
            if field in changes:
                old, new = getattr(current, field), changes[field]
                await self.append_history(
                    radio_id,
                    action,
                    f"{label} gewijzigd van {old} naar {new}",
                    HistoryDetails(old_value=old, new_value=new, service_date=self._today(), notes=notes),
                )
        return updated

    async def change_alias(self, radio_id: str, change: AliasChange) -> RadioRead | None:
        return await self._change_tracked(radio_id, "alias", change.new_alias, change)

    async def change_department(self, radio_id: str, change: DepartmentChange) -> RadioRead | None:
        return await self._change_tracked(radio_id, "afdeling", change.new_department, change)

    async def _change_tracked(
        self, radio_id: str, field: str, new_value: str, event: ServiceEvent,
    ) -> RadioRead | None:
        current = await self.radios.get_by_id(radio_id, use_cache=False)
        if current is None:
            return None
        old_value = getattr(current, field)
        action, label = TRACKED_FIELDS[field]
        updated = await self.radios.update(radio_id, RadioUpdate(**{field: new_value}))
        await self.append_history(
            radio_id,
            action,
            f"{label} gewijzigd van {old_value} naar {new_value}",
            HistoryDetails(
                old_value=old_value,
                new_value=new_value,
                service_date=event.service_date or self._today(),
                notes=event.notes,
            ),
        )
        return updated

    async def change_id(self, radio_id: str, change: IdChange) -> RadioRead | None:
        """Seul chemin qui modifie un ID existant / The only path that alters an existing ID."""
        current = await self.radios.get_by_id(radio_id, use_cache=False)
        if current is None:
            return None
        if change.new_id == radio_id:
            return current

        await self.checker.ensure_available(radio_id=change.new_id)
        updated = await self.radios.update(radio_id, {"id": change.new_id})
        # L'entree est rattachee au nouvel ID / The entry is attached to the new ID
        await self.append_history(
            change.new_id,
            HistoryAction.ID_CHANGED,
            f"ID gewijzigd van {radio_id} naar {change.new_id}",
            HistoryDetails(
                old_value=radio_id,
                new_value=change.new_id,
                service_date=change.service_date or self._today(),
                notes=change.notes,
            ),
        )
        return updated

    async def record_battery_replacement(self, radio_id: str, event: ServiceEvent) -> RadioHistoryRead | None:
        if await self.radios.get_by_id(radio_id) is None:
            return None
        return await self.append_history(
            radio_id,
            HistoryAction.BATTERY_REPLACED,
            "Batterij vervangen",
            HistoryDetails(service_date=event.service_date or self._today(), notes=event.notes),
        )

    async def record_service(self, radio_id: str, event: ServiceEvent) -> RadioHistoryRead | None:
        if await self.radios.get_by_id(radio_id) is None:
            return None
        return await self.append_history(
            radio_id,
            HistoryAction.SERVICED,
            "Radio geserviced",
            HistoryDetails(service_date=event.service_date or self._today(), notes=event.notes),
        )

    async def record_issue(self, issue: IssueRead) -> RadioHistoryRead:
        return await self.append_history(
            issue.item_id,
            HistoryAction.ISSUED,
            f"Uitgegeven aan {issue.issued_to} ({issue.afdeling})",
            HistoryDetails(service_date=issue.issued_at[:10], notes=issue.notes),
        )

    async def record_installation(self, installation: InstallationRead) -> RadioHistoryRead:
        return await self.append_history(
            installation.item_id,
            HistoryAction.INSTALLED,
            f"Ingebouwd in {installation.vehicle_merk} {installation.vehicle_model}",
            HistoryDetails(
                service_date=installation.installed_at[:10],
                notes=installation.notes,
                vehicle_info=VehicleInfo(
                    merk=installation.vehicle_merk,
                    model=installation.vehicle_model,
                    afdeling=installation.vehicle_afdeling,
                ),
            ),
        )

    async def append_history(
        self, radio_id: str, action: HistoryAction, description: str, details: HistoryDetails | None = None,
    ) -> RadioHistoryRead:
        """Ajouter une entree (jamais modifiee ensuite) / Append an entry (never modified afterwards)."""
        entry = RadioHistoryCreate(
            radio_id=radio_id,
            action=action,
            description=description,
            timestamp=self.clock().isoformat(),
            details=details,
        )
        return await self.history.create(entry.model_dump(mode="json", exclude_none=True))

    async def delete(self, radio_id: str) -> None:
        await self.radios.delete(radio_id)

    async def import_radios(self, rows: list[RadioCreate]) -> int:
        """Un create par ligne, sans atomicite / One create per row, no atomicity.

        Une erreur laisse les lignes precedentes enregistrees.
        A failure leaves earlier rows committed.
        """
        imported = 0
        for row_number, row in enumerate(rows, start=1):
            try:
                await self.create(row, check_unique=False)
            except TransportError as exc:
                log.error("CSV import stopped at row %d after %d import(s): %s", row_number, imported, exc)
                raise CsvImportError(exc.message, imported=imported, row_number=row_number) from exc
            imported += 1
        return imported
