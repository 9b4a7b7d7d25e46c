"""Schémas Radio / Radio schemas."""

from typing import Annotated, ClassVar

from pydantic import AfterValidator, BaseModel, Field

from radio_console.models.radio import HistoryAction, RadioType
from radio_console.schemas.base import PartialUpdate

# 4 chiffres exactement / exactly 4 digits
RADIO_ID_PATTERN = r"^\d{4}$"

# Serienummer toujours en majuscules / Serial number always upper-cased
SerialNumber = Annotated[str, AfterValidator(str.upper)]


class RadioBase(BaseModel):
    merk: str
    model: str
    type: RadioType
    serienummer: str
    alias: str
    afdeling: str
    opmerking: str | None = None
    registratiedatum: str


class RadioCreate(RadioBase):
    id: str = Field(pattern=RADIO_ID_PATTERN)
    serienummer: SerialNumber


class RadioUpdate(PartialUpdate):
    """Mise a jour partielle, l'ID passe par change-id / Partial update, ID goes through change-id."""
    NULLABLE: ClassVar[frozenset[str]] = frozenset({"opmerking"})

    merk: str | None = None
    model: str | None = None
    type: RadioType | None = None
    serienummer: SerialNumber | None = None
    alias: str | None = None
    afdeling: str | None = None
    opmerking: str | None = None
    registratiedatum: str | None = None


class RadioRead(RadioBase):
    id: str
    created_at: str | None = None
    updated_at: str | None = None


class RadioStats(BaseModel):
    total: int = 0
    portable: int = 0
    mobile: int = 0
    base: int = 0


# --- Historique / History ---

class VehicleInfo(BaseModel):
    merk: str
    model: str
    afdeling: str


class HistoryDetails(BaseModel):
    old_value: str | None = None
    new_value: str | None = None
    service_date: str | None = None
    notes: str | None = None
    vehicle_info: VehicleInfo | None = None


class RadioHistoryCreate(BaseModel):
    radio_id: str
    action: HistoryAction
    description: str
    timestamp: str
    details: HistoryDetails | None = None


class RadioHistoryRead(RadioHistoryCreate):
    id: str


# --- Workflows (modales) / Workflows (modals) ---

class ServiceEvent(BaseModel):
    """Batterij / service : date + notes."""
    service_date: str | None = None
    notes: str | None = None


class IdChange(ServiceEvent):
    new_id: str = Field(pattern=RADIO_ID_PATTERN)


class AliasChange(ServiceEvent):
    new_alias: str = Field(min_length=1)


class DepartmentChange(ServiceEvent):
    new_department: str = Field(min_length=1)


# --- Validation d'unicite / Uniqueness validation ---

class FieldCheck(BaseModel):
    status: str
    message: str = ""


class Availability(BaseModel):
    id: FieldCheck | None = None
    serienummer: FieldCheck | None = None
