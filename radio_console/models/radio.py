"""Modele Radio / Radio model."""

import enum

from radio_console.models.base import Entity


class RadioType(str, enum.Enum):
    """Type de radio / Radio type."""
    PORTABLE = "Portable"
    MOBILE = "Mobile"
    BASE = "Base"


class HistoryAction(str, enum.Enum):
    """Action du journal radio (append-only) / Radio log action (append-only)."""
    BATTERY_REPLACED = "battery_replaced"
    SERVICED = "serviced"
    DEPARTMENT_CHANGED = "department_changed"
    ALIAS_CHANGED = "alias_changed"
    ID_CHANGED = "id_changed"
    ISSUED = "issued"
    INSTALLED = "installed"


# L'ID radio est choisi par l'utilisateur (4 chiffres) / Radio ID is user-chosen (4 digits)
RADIO_ID_LENGTH = 4

RADIOS = Entity(resource="radios", family="radios", order="created_at.desc")

# Journal immuable, jamais modifie ni supprime / Immutable log, never updated or deleted
RADIO_HISTORY = Entity(resource="radio_history", family="radio-history", order="timestamp.desc")
