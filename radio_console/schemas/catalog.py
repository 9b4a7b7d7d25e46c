"""Schémas Catalogue / Catalog schemas."""

from typing import ClassVar

from pydantic import BaseModel

from radio_console.schemas.base import PartialUpdate


class BrandBase(BaseModel):
    name: str
    description: str | None = None


class BrandCreate(BrandBase):
    pass


class BrandUpdate(PartialUpdate):
    NULLABLE: ClassVar[frozenset[str]] = frozenset({"description"})
    name: str | None = None
    description: str | None = None


class BrandRead(BrandBase):
    id: str
    created_at: str | None = None
    updated_at: str | None = None


class CategoryBase(BaseModel):
    brand_id: str
    name: str
    description: str | None = None


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(PartialUpdate):
    NULLABLE: ClassVar[frozenset[str]] = frozenset({"description"})
    brand_id: str | None = None
    name: str | None = None
    description: str | None = None


class CategoryRead(CategoryBase):
    id: str
    created_at: str | None = None
    updated_at: str | None = None


class ModelBase(BaseModel):
    category_id: str
    name: str
    description: str | None = None


class ModelCreate(ModelBase):
    pass


class ModelUpdate(PartialUpdate):
    NULLABLE: ClassVar[frozenset[str]] = frozenset({"description"})
    category_id: str | None = None
    name: str | None = None
    description: str | None = None


class ModelRead(ModelBase):
    id: str
    created_at: str | None = None
    updated_at: str | None = None


class BrandStats(BaseModel):
    total_brands: int = 0
    total_categories: int = 0
    total_models: int = 0


# --- Arbre (chargement paresseux) / Tree (lazy loading) ---

class CategoryNode(CategoryRead):
    # None = ligne repliee, rien charge / None = collapsed row, nothing loaded
    models: list[ModelRead] | None = None


class BrandNode(BrandRead):
    categories: list[CategoryNode] | None = None


class CascadeStep(BaseModel):
    resource: str
    id: str
