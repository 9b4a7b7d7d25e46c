"""
Service Uitgifte et Inbouw / Issue and Installation service.

Les lectures sont jointes aux radios et accessoires en memoire ; une
reference orpheline reste affichee comme "Onbekend item".
Reads are joined with radios and accessories in memory; a dangling
reference is still shown as "Onbekend item".
"""

from radio_console.models.assignment import INSTALLATIONS, ISSUES, ItemType
from radio_console.schemas.assignment import (
    InstallationCreate,
    InstallationRead,
    InstallationUpdate,
    InstallationView,
    IssueCreate,
    IssueRead,
    IssueUpdate,
    IssueView,
)
from radio_console.services.accessory_service import AccessoryService
from radio_console.services.items import ItemIndex, installation_views, issue_views
from radio_console.services.radio_service import RadioService
from radio_console.services.repository import Repository, to_payload


class AssignmentService:
    """Uitgiftes et inbouwen / Issues and installations."""

    def __init__(self, radio_service: RadioService, accessory_service: AccessoryService):
        self.radio_service = radio_service
        self.accessory_service = accessory_service
        store, cache = radio_service.store, radio_service.cache
        self.issues = Repository(store, cache, ISSUES, IssueRead)
        self.installations = Repository(store, cache, INSTALLATIONS, InstallationRead)

    def _now(self) -> str:
        return self.radio_service.clock().isoformat()

    async def item_index(self) -> ItemIndex:
        radios = await self.radio_service.radios.list_all()
        accessories = await self.accessory_service.accessories.list_all()
        return ItemIndex(radios, accessories)

    # --- Uitgifte / Issue ---

    async def list_issues(self, q: str | None = None) -> list[IssueView]:
        issues = await self.issues.list_all()
        return issue_views(issues, await self.item_index(), q)

    async def get_issue(self, issue_id: str) -> IssueView | None:
        issue = await self.issues.get_by_id(issue_id)
        if issue is None:
            return None
        return issue_views([issue], await self.item_index())[0]

    async def create_issue(self, data: IssueCreate) -> IssueRead:
        payload = {**to_payload(data), "issued_at": self._now()}
        issue = await self.issues.create(payload)
        if issue.item_type == ItemType.RADIO and await self.radio_service.get(issue.item_id) is not None:
            await self.radio_service.record_issue(issue)
        return issue

    async def update_issue(self, issue_id: str, data: IssueUpdate) -> IssueRead | None:
        return await self.issues.update(issue_id, data)

    async def delete_issue(self, issue_id: str) -> None:
        await self.issues.delete(issue_id)

    # --- Inbouw / Installation ---

    async def list_installations(self, q: str | None = None) -> list[InstallationView]:
        installations = await self.installations.list_all()
        return installation_views(installations, await self.item_index(), q)

    async def get_installation(self, installation_id: str) -> InstallationView | None:
        installation = await self.installations.get_by_id(installation_id)
        if installation is None:
            return None
        return installation_views([installation], await self.item_index())[0]

    async def create_installation(self, data: InstallationCreate) -> InstallationRead:
        payload = {**to_payload(data), "installed_at": self._now()}
        installation = await self.installations.create(payload)
        if installation.item_type == ItemType.RADIO and await self.radio_service.get(installation.item_id) is not None:
            await self.radio_service.record_installation(installation)
        return installation

    async def update_installation(self, installation_id: str, data: InstallationUpdate) -> InstallationRead | None:
        return await self.installations.update(installation_id, data)

    async def delete_installation(self, installation_id: str) -> None:
        await self.installations.delete(installation_id)
