"""Routes Merken / Brand API routes."""

from fastapi import APIRouter, Depends, HTTPException, Query

from radio_console.api.deps import get_catalog_service
from radio_console.schemas.catalog import (
    BrandCreate,
    BrandNode,
    BrandRead,
    BrandStats,
    BrandUpdate,
    CascadeStep,
    CategoryRead,
    ModelRead,
)
from radio_console.services.catalog import CatalogService

router = APIRouter()


@router.get("/", response_model=list[BrandRead])
async def list_brands(service: CatalogService = Depends(get_catalog_service)):
    """Lister tous les merken / List all brands."""
    return await service.list_brands()


@router.get("/stats", response_model=BrandStats)
async def brand_stats(service: CatalogService = Depends(get_catalog_service)):
    """Totaux merken / categorieen / modellen."""
    return await service.stats()


@router.get("/tree", response_model=list[BrandNode])
async def brand_tree(
    expand_brand: list[str] = Query(default=[]),
    expand_category: list[str] = Query(default=[]),
    service: CatalogService = Depends(get_catalog_service),
):
    """Arbre catalogue, lignes ouvertes seulement / Catalog tree, expanded rows only."""
    return await service.tree(set(expand_brand), set(expand_category))


@router.get("/radio-brands", response_model=list[BrandRead])
async def radio_brands(service: CatalogService = Depends(get_catalog_service)):
    """Merken avec une categorie radio / Brands with a radio category."""
    return await service.radio_brands()


@router.get("/{brand_id}", response_model=BrandRead)
async def get_brand(brand_id: str, service: CatalogService = Depends(get_catalog_service)):
    brand = await service.get_brand(brand_id)
    if brand is None:
        raise HTTPException(status_code=404, detail="Brand not found")
    return brand


@router.get("/{brand_id}/categories", response_model=list[CategoryRead])
async def brand_categories(brand_id: str, service: CatalogService = Depends(get_catalog_service)):
    """Ouvrir un merk / Expand a brand."""
    return await service.categories_for_brand(brand_id)


@router.get("/{brand_id}/radio-models", response_model=list[ModelRead])
async def brand_radio_models(brand_id: str, service: CatalogService = Depends(get_catalog_service)):
    """Modeles radio d'un merk / A brand's radio models."""
    return await service.radio_models(brand_id)


@router.post("/", response_model=BrandRead, status_code=201)
async def create_brand(data: BrandCreate, service: CatalogService = Depends(get_catalog_service)):
    """Créer un merk / Create a brand."""
    return await service.create_brand(data)


@router.put("/{brand_id}", response_model=BrandRead)
async def update_brand(brand_id: str, data: BrandUpdate, service: CatalogService = Depends(get_catalog_service)):
    brand = await service.update_brand(brand_id, data)
    if brand is None:
        raise HTTPException(status_code=404, detail="Brand not found")
    return brand


@router.delete("/{brand_id}", response_model=list[CascadeStep])
async def delete_brand(
    brand_id: str,
    cascade: bool = Query(True),
    service: CatalogService = Depends(get_catalog_service),
):
    """Supprimer un merk et ses enfants / Delete a brand and its children.

    Retourne les suppressions effectuees, dans l'ordre.
    Returns the deletes performed, in order.
    """
    return await service.delete_brand(brand_id, cascade=cascade)
