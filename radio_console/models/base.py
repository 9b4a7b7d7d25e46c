"""Descripteur d'entite / Entity descriptor."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Entity:
    """Ressource REST + famille de cache / REST resource + cache family.

    family sert de prefixe a toutes les cles de cache de l'entite.
    family prefixes every cache key of the entity.
    """

    resource: str
    family: str
    order: str
    key: str = "id"

    def __repr__(self) -> str:
        return f"<Entity {self.resource} ({self.family})>"
