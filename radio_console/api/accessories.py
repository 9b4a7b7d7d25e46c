"""Routes Accessoires / Accessory API routes."""

from fastapi import APIRouter, Depends, HTTPException, Query

from radio_console.api.deps import get_accessory_service
from radio_console.schemas.accessory import AccessoryCreate, AccessoryRead, AccessoryStats, AccessoryUpdate
from radio_console.services.accessory_service import AccessoryService

router = APIRouter()


@router.get("/", response_model=list[AccessoryRead])
async def list_accessories(
    q: str | None = Query(None),
    service: AccessoryService = Depends(get_accessory_service),
):
    """Lister les accessoires / List accessories."""
    return await service.list_accessories(q)


@router.get("/stats", response_model=AccessoryStats)
async def accessory_stats(service: AccessoryService = Depends(get_accessory_service)):
    return await service.stats()


@router.get("/{accessory_id}", response_model=AccessoryRead)
async def get_accessory(accessory_id: str, service: AccessoryService = Depends(get_accessory_service)):
    """Obtenir un accessoire par ID / Get accessory by ID."""
    accessory = await service.get(accessory_id)
    if accessory is None:
        raise HTTPException(status_code=404, detail="Accessory not found")
    return accessory


@router.post("/", response_model=AccessoryRead, status_code=201)
async def create_accessory(data: AccessoryCreate, service: AccessoryService = Depends(get_accessory_service)):
    """Créer un accessoire / Create an accessory."""
    return await service.create(data)


@router.put("/{accessory_id}", response_model=AccessoryRead)
async def update_accessory(
    accessory_id: str, data: AccessoryUpdate, service: AccessoryService = Depends(get_accessory_service),
):
    """Modifier un accessoire / Update an accessory."""
    accessory = await service.update(accessory_id, data)
    if accessory is None:
        raise HTTPException(status_code=404, detail="Accessory not found")
    return accessory


@router.delete("/{accessory_id}", status_code=204)
async def delete_accessory(accessory_id: str, service: AccessoryService = Depends(get_accessory_service)):
    """Supprimer un accessoire / Delete an accessory."""
    await service.delete(accessory_id)
