"""Routes API / API routes."""

from fastapi import APIRouter

from radio_console.api import (
    radios,
    accessories,
    issues,
    installations,
    brands,
    categories,
    catalog_models,
    dashboard,
    imports,
    exports,
)

api_router = APIRouter(prefix="/api")

api_router.include_router(radios.router, prefix="/radios", tags=["radios"])
api_router.include_router(accessories.router, prefix="/accessories", tags=["accessories"])
api_router.include_router(issues.router, prefix="/issues", tags=["issues"])
api_router.include_router(installations.router, prefix="/installations", tags=["installations"])
api_router.include_router(brands.router, prefix="/brands", tags=["catalog"])
api_router.include_router(categories.router, prefix="/categories", tags=["catalog"])
api_router.include_router(catalog_models.router, prefix="/models", tags=["catalog"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(imports.router, prefix="/imports", tags=["imports"])
api_router.include_router(exports.router, prefix="/exports", tags=["exports"])
