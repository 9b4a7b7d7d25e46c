"""Routes Categorieen / Category API routes."""

from fastapi import APIRouter, Depends, HTTPException, Query

from radio_console.api.deps import get_catalog_service
from radio_console.schemas.catalog import CascadeStep, CategoryCreate, CategoryRead, CategoryUpdate, ModelRead
from radio_console.services.catalog import CatalogService

router = APIRouter()


@router.get("/{category_id}", response_model=CategoryRead)
async def get_category(category_id: str, service: CatalogService = Depends(get_catalog_service)):
    category = await service.get_category(category_id)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.get("/{category_id}/models", response_model=list[ModelRead])
async def category_models(category_id: str, service: CatalogService = Depends(get_catalog_service)):
    """Ouvrir une categorie / Expand a category."""
    return await service.models_for_category(category_id)


@router.post("/", response_model=CategoryRead, status_code=201)
async def create_category(data: CategoryCreate, service: CatalogService = Depends(get_catalog_service)):
    """Créer une categorie / Create a category."""
    return await service.create_category(data)


@router.put("/{category_id}", response_model=CategoryRead)
async def update_category(
    category_id: str, data: CategoryUpdate, service: CatalogService = Depends(get_catalog_service),
):
    category = await service.update_category(category_id, data)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.delete("/{category_id}", response_model=list[CascadeStep])
async def delete_category(
    category_id: str,
    cascade: bool = Query(True),
    service: CatalogService = Depends(get_catalog_service),
):
    """Supprimer une categorie et ses modeles / Delete a category and its models."""
    return await service.delete_category(category_id, cascade=cascade)
