"""Routes Modellen / Catalog model API routes."""

from fastapi import APIRouter, Depends, HTTPException

from radio_console.api.deps import get_catalog_service
from radio_console.schemas.catalog import CascadeStep, ModelCreate, ModelRead, ModelUpdate
from radio_console.services.catalog import CatalogService

router = APIRouter()


@router.get("/{model_id}", response_model=ModelRead)
async def get_model(model_id: str, service: CatalogService = Depends(get_catalog_service)):
    model = await service.get_model(model_id)
    if model is None:
        raise HTTPException(status_code=404, detail="Model not found")
    return model


@router.post("/", response_model=ModelRead, status_code=201)
async def create_model(data: ModelCreate, service: CatalogService = Depends(get_catalog_service)):
    """Créer un modele / Create a model."""
    return await service.create_model(data)


@router.put("/{model_id}", response_model=ModelRead)
async def update_model(model_id: str, data: ModelUpdate, service: CatalogService = Depends(get_catalog_service)):
    model = await service.update_model(model_id, data)
    if model is None:
        raise HTTPException(status_code=404, detail="Model not found")
    return model


@router.delete("/{model_id}", response_model=list[CascadeStep])
async def delete_model(model_id: str, service: CatalogService = Depends(get_catalog_service)):
    return await service.delete_model(model_id)
