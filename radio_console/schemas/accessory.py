"""Schémas Accessoire / Accessory schemas."""

from typing import ClassVar

from pydantic import BaseModel

from radio_console.schemas.base import PartialUpdate


class AccessoryBase(BaseModel):
    merk: str
    model: str
    serienummer: str | None = None
    alias: str | None = None
    opmerking: str | None = None


class AccessoryCreate(AccessoryBase):
    pass


class AccessoryUpdate(PartialUpdate):
    NULLABLE: ClassVar[frozenset[str]] = frozenset({"serienummer", "alias", "opmerking"})
    merk: str | None = None
    model: str | None = None
    serienummer: str | None = None
    alias: str | None = None
    opmerking: str | None = None


class AccessoryRead(AccessoryBase):
    id: str
    created_at: str | None = None
    updated_at: str | None = None


class AccessoryStats(BaseModel):
    total: int = 0
