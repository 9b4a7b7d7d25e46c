"""Routes Inbouw (installations véhicule) / Vehicle installation API routes."""

from fastapi import APIRouter, Depends, HTTPException, Query

from radio_console.api.deps import get_assignment_service
from radio_console.schemas.assignment import (
    InstallationCreate,
    InstallationRead,
    InstallationUpdate,
    InstallationView,
)
from radio_console.services.assignment_service import AssignmentService

router = APIRouter()


@router.get("/", response_model=list[InstallationView])
async def list_installations(
    q: str | None = Query(None, description="vehicle_merk, vehicle_model, vehicle_afdeling, item"),
    service: AssignmentService = Depends(get_assignment_service),
):
    """Lister les installations / List installations."""
    return await service.list_installations(q)


@router.get("/{installation_id}", response_model=InstallationView)
async def get_installation(installation_id: str, service: AssignmentService = Depends(get_assignment_service)):
    installation = await service.get_installation(installation_id)
    if installation is None:
        raise HTTPException(status_code=404, detail="Installation not found")
    return installation


@router.post("/", response_model=InstallationRead, status_code=201)
async def create_installation(
    data: InstallationCreate, service: AssignmentService = Depends(get_assignment_service),
):
    """Inbouwen / Install an item in a vehicle."""
    return await service.create_installation(data)


@router.put("/{installation_id}", response_model=InstallationRead)
async def update_installation(
    installation_id: str,
    data: InstallationUpdate,
    service: AssignmentService = Depends(get_assignment_service),
):
    installation = await service.update_installation(installation_id, data)
    if installation is None:
        raise HTTPException(status_code=404, detail="Installation not found")
    return installation


@router.delete("/{installation_id}", status_code=204)
async def delete_installation(installation_id: str, service: AssignmentService = Depends(get_assignment_service)):
    await service.delete_installation(installation_id)
