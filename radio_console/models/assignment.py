"""Modeles Uitgifte et Inbouw / Issue and Installation models.

item_id est une reference faible vers une radio ou un accessoire : aucune
contrainte d'integrite, la cible peut disparaitre independamment.
item_id is a weak reference to a radio or accessory: no integrity
constraint, the target may be deleted independently.
"""

import enum

from radio_console.models.base import Entity


class ItemType(str, enum.Enum):
    """Famille de l'article reference / Referenced item family."""
    RADIO = "radio"
    ACCESSORY = "accessory"


ISSUES = Entity(resource="issues", family="issues", order="issued_at.desc")
INSTALLATIONS = Entity(resource="installations", family="installations", order="installed_at.desc")
