"""Base des mises a jour partielles / Partial update base."""

from typing import ClassVar

from pydantic import BaseModel, model_validator


class PartialUpdate(BaseModel):
    """Champs absents = inchanges ; null explicite refuse hors NULLABLE.
    Missing fields stay unchanged; an explicit null is rejected outside NULLABLE.
    """

    NULLABLE: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_explicit_nulls(self):
        nulled = sorted(
            name for name in self.model_fields_set
            if getattr(self, name) is None and name not in self.NULLABLE
        )
        if nulled:
            raise ValueError(f"Field(s) cannot be null: {', '.join(nulled)}")
        return self
