"""Routes Radios / Radio API routes."""

from fastapi import APIRouter, Depends, HTTPException, Query

from radio_console.api.deps import get_radio_service
from radio_console.models.radio import RadioType
from radio_console.schemas.radio import (
    AliasChange,
    Availability,
    DepartmentChange,
    IdChange,
    RadioCreate,
    RadioHistoryRead,
    RadioRead,
    RadioStats,
    RadioUpdate,
    ServiceEvent,
)
from radio_console.services.radio_service import RadioService

router = APIRouter()


def _found(radio: RadioRead | RadioHistoryRead | None):
    if radio is None:
        raise HTTPException(status_code=404, detail="Radio not found")
    return radio


@router.get("/", response_model=list[RadioRead])
async def list_radios(
    q: str | None = Query(None, description="merk, model, alias ou serienummer"),
    radio_type: RadioType | None = Query(None, alias="type"),
    service: RadioService = Depends(get_radio_service),
):
    """Lister les radios (recherche locale) / List radios (local search)."""
    return await service.list_radios(q, radio_type)


@router.get("/stats", response_model=RadioStats)
async def radio_stats(service: RadioService = Depends(get_radio_service)):
    """Comptage par type / Count by type."""
    return await service.stats()


@router.get("/availability", response_model=Availability)
async def check_availability(
    radio_id: str | None = Query(None, alias="id"),
    serienummer: str | None = Query(None),
    service: RadioService = Depends(get_radio_service),
):
    """Verifier ID / serienummer sans debounce / Check ID / serial number without debounce."""
    return Availability(**await service.checker.availability(radio_id=radio_id, serienummer=serienummer))


@router.get("/by-serial/{serienummer}", response_model=RadioRead)
async def get_radio_by_serial(serienummer: str, service: RadioService = Depends(get_radio_service)):
    """Obtenir une radio par serienummer / Get radio by serial number."""
    return _found(await service.get_by_serial(serienummer))


@router.get("/{radio_id}", response_model=RadioRead)
async def get_radio(radio_id: str, service: RadioService = Depends(get_radio_service)):
    """Obtenir une radio par ID / Get radio by ID."""
    return _found(await service.get(radio_id))


@router.post("/", response_model=RadioRead, status_code=201)
async def create_radio(data: RadioCreate, service: RadioService = Depends(get_radio_service)):
    """Créer une radio / Create a radio."""
    return await service.create(data)


@router.put("/{radio_id}", response_model=RadioRead)
async def update_radio(
    radio_id: str,
    data: RadioUpdate,
    notes: str | None = Query(None),
    service: RadioService = Depends(get_radio_service),
):
    """Modifier une radio (champs modifiés seulement) / Update a radio (changed fields only)."""
    return _found(await service.update(radio_id, data, notes))


@router.delete("/{radio_id}", status_code=204)
async def delete_radio(radio_id: str, service: RadioService = Depends(get_radio_service)):
    """Supprimer une radio / Delete a radio."""
    await service.delete(radio_id)


# --- Historique / History ---

@router.get("/{radio_id}/history", response_model=list[RadioHistoryRead])
async def radio_history(radio_id: str, service: RadioService = Depends(get_radio_service)):
    """Journal d'une radio, plus récent d'abord / Radio log, newest first."""
    return await service.history_for(radio_id)


@router.post("/{radio_id}/battery", response_model=RadioHistoryRead, status_code=201)
async def replace_battery(radio_id: str, event: ServiceEvent, service: RadioService = Depends(get_radio_service)):
    """Batterij vervangen / Battery replaced."""
    return _found(await service.record_battery_replacement(radio_id, event))


@router.post("/{radio_id}/service", response_model=RadioHistoryRead, status_code=201)
async def service_radio(radio_id: str, event: ServiceEvent, service: RadioService = Depends(get_radio_service)):
    """Radio geserviced / Radio serviced."""
    return _found(await service.record_service(radio_id, event))


@router.post("/{radio_id}/change-id", response_model=RadioRead)
async def change_radio_id(radio_id: str, change: IdChange, service: RadioService = Depends(get_radio_service)):
    """Changer l'ID (409 si déjà pris) / Change the ID (409 when taken)."""
    return _found(await service.change_id(radio_id, change))


@router.post("/{radio_id}/alias", response_model=RadioRead)
async def change_radio_alias(radio_id: str, change: AliasChange, service: RadioService = Depends(get_radio_service)):
    """Changer l'alias / Change the alias."""
    return _found(await service.change_alias(radio_id, change))


@router.post("/{radio_id}/department", response_model=RadioRead)
async def change_radio_department(
    radio_id: str, change: DepartmentChange, service: RadioService = Depends(get_radio_service),
):
    """Changer l'afdeling / Change the department."""
    return _found(await service.change_department(radio_id, change))
