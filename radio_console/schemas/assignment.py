"""Schémas Uitgifte et Inbouw / Issue and Installation schemas."""

from typing import ClassVar

from pydantic import BaseModel

from radio_console.schemas.base import PartialUpdate

from radio_console.models.assignment import ItemType


class ItemSummary(BaseModel):
    """Article resolu (radio ou accessoire) / Resolved item (radio or accessory)."""
    id: str
    merk: str
    model: str
    serienummer: str | None = None
    alias: str | None = None


# --- Uitgifte / Issue ---

class IssueBase(BaseModel):
    item_type: ItemType
    item_id: str
    afdeling: str
    issued_to: str
    notes: str | None = None


class IssueCreate(IssueBase):
    pass


class IssueUpdate(PartialUpdate):
    NULLABLE: ClassVar[frozenset[str]] = frozenset({"notes"})
    item_type: ItemType | None = None
    item_id: str | None = None
    afdeling: str | None = None
    issued_to: str | None = None
    notes: str | None = None


class IssueRead(IssueBase):
    id: str
    issued_at: str


class IssueView(IssueRead):
    item: ItemSummary | None = None
    item_label: str


# --- Inbouw / Installation ---

class InstallationBase(BaseModel):
    item_type: ItemType
    item_id: str
    vehicle_merk: str
    vehicle_model: str
    vehicle_afdeling: str
    notes: str | None = None


class InstallationCreate(InstallationBase):
    pass


class InstallationUpdate(PartialUpdate):
    NULLABLE: ClassVar[frozenset[str]] = frozenset({"notes"})
    item_type: ItemType | None = None
    item_id: str | None = None
    vehicle_merk: str | None = None
    vehicle_model: str | None = None
    vehicle_afdeling: str | None = None
    notes: str | None = None


class InstallationRead(InstallationBase):
    id: str
    installed_at: str


class InstallationView(InstallationRead):
    item: ItemSummary | None = None
    item_label: str
