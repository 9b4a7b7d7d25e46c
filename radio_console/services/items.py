"""
Resolution des references faibles / Weak reference resolution.

Une uitgifte ou une inbouw pointe vers une radio ou un accessoire par
(item_type, item_id) sans cle etrangere. La jointure est faite ici ; une
cible absente est un cas normal, rendu comme "Onbekend item".
An issue or installation points at a radio or accessory through
(item_type, item_id) without a foreign key. The join happens here; a missing
target is a normal outcome, rendered as "Onbekend item".
"""

from dataclasses import dataclass

from radio_console.models.assignment import ItemType
from radio_console.schemas.accessory import AccessoryRead
from radio_console.schemas.assignment import (
    InstallationRead,
    InstallationView,
    IssueRead,
    IssueView,
    ItemSummary,
)
from radio_console.schemas.radio import RadioRead

UNKNOWN_ITEM = "Onbekend item"


@dataclass(frozen=True)
class ItemRef:
    item_type: ItemType
    item_id: str


class ItemIndex:
    """Index en memoire des articles / In-memory item index."""

    def __init__(self, radios: list[RadioRead], accessories: list[AccessoryRead]):
        self._items: dict[ItemRef, ItemSummary] = {}
        for radio in radios:
            self._items[ItemRef(ItemType.RADIO, radio.id)] = ItemSummary(
                id=radio.id, merk=radio.merk, model=radio.model,
                serienummer=radio.serienummer, alias=radio.alias,
            )
        for accessory in accessories:
            self._items[ItemRef(ItemType.ACCESSORY, accessory.id)] = ItemSummary(
                id=accessory.id, merk=accessory.merk, model=accessory.model,
                serienummer=accessory.serienummer, alias=accessory.alias,
            )

    def resolve(self, ref: ItemRef) -> ItemSummary | None:
        return self._items.get(ref)

    def label(self, ref: ItemRef) -> str:
        item = self.resolve(ref)
        return f"{item.merk} {item.model}" if item else UNKNOWN_ITEM


def _matches(needle: str, *haystack: str | None) -> bool:
    return any(needle in value.lower() for value in haystack if value)


def issue_views(issues: list[IssueRead], index: ItemIndex, q: str | None = None) -> list[IssueView]:
    """Joindre les articles et filtrer / Join items and filter.

    Avec une recherche vide, les lignes orphelines restent visibles.
    With an empty search, dangling rows stay visible.
    """
    needle = (q or "").strip().lower()
    views = []
    for issue in issues:
        ref = ItemRef(issue.item_type, issue.item_id)
        item = index.resolve(ref)
        if needle and not (
            (item is not None and _matches(needle, item.merk, item.model))
            or _matches(needle, issue.issued_to, issue.afdeling)
        ):
            continue
        views.append(IssueView(**issue.model_dump(), item=item, item_label=index.label(ref)))
    return views


def installation_views(
    installations: list[InstallationRead], index: ItemIndex, q: str | None = None,
) -> list[InstallationView]:
    needle = (q or "").strip().lower()
    views = []
    for installation in installations:
        ref = ItemRef(installation.item_type, installation.item_id)
        item = index.resolve(ref)
        if needle and not (
            (item is not None and _matches(needle, item.merk, item.model))
            or _matches(
                needle,
                installation.vehicle_merk,
                installation.vehicle_model,
                installation.vehicle_afdeling,
            )
        ):
            continue
        views.append(
            InstallationView(**installation.model_dump(), item=item, item_label=index.label(ref))
        )
    return views
