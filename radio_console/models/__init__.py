"""
Ressources du store distant / Remote store resources.
Chaque entite decrit sa ressource REST, sa famille de cache et son tri par defaut.
Each entity describes its REST resource, cache family and default ordering.
"""

from radio_console.models.base import Entity
from radio_console.models.radio import RADIOS, RADIO_HISTORY, RadioType, HistoryAction
from radio_console.models.accessory import ACCESSORIES
from radio_console.models.assignment import ISSUES, INSTALLATIONS, ItemType
from radio_console.models.catalog import BRANDS, CATEGORIES, MODELS, RADIO_CATEGORY_TOKENS
