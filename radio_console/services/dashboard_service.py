"""
Service Tableau de bord / Dashboard service.
Agrégats radio par type, total accessoires et dernières activités.
Radio counts by type, accessory total and latest activity.
"""

import asyncio

from radio_console.config import settings
from radio_console.schemas.dashboard import DashboardStats
from radio_console.services.accessory_service import AccessoryService
from radio_console.services.assignment_service import AssignmentService
from radio_console.services.radio_service import RadioService


class DashboardService:
    """Service tableau de bord / Dashboard service."""

    def __init__(
        self,
        radio_service: RadioService,
        accessory_service: AccessoryService,
        assignment_service: AssignmentService,
        recent_limit: int | None = None,
    ):
        self.radio_service = radio_service
        self.accessory_service = accessory_service
        self.assignment_service = assignment_service
        self.recent_limit = recent_limit or settings.RECENT_LIMIT

    async def stats(self) -> DashboardStats:
        async def load() -> DashboardStats:
            limit = self.recent_limit
            radio_stats, accessory_stats, installations, issues, registrations = await asyncio.gather(
                self.radio_service.stats(),
                self.accessory_service.stats(),
                self.assignment_service.installations.recent(limit),
                self.assignment_service.issues.recent(limit),
                self.radio_service.radios.recent(limit),
            )
            return DashboardStats(
                total_radios=radio_stats.total,
                portable_radios=radio_stats.portable,
                mobile_radios=radio_stats.mobile,
                base_radios=radio_stats.base,
                total_accessories=accessory_stats.total,
                recent_installations=installations,
                recent_issues=issues,
                recent_registrations=registrations,
            )

        return await self.radio_service.cache.fetch(("dashboard",), load)
