"""
Dépendances partagées des routes / Shared route dependencies.
Injectées dans les routes via Depends() ; remplaçables en test par dependency_overrides.
"""

from fastapi import Depends
from starlette.requests import HTTPConnection

from radio_console.config import settings
from radio_console.services.accessory_service import AccessoryService
from radio_console.services.assignment_service import AssignmentService
from radio_console.services.cache import QueryCache
from radio_console.services.catalog import CatalogService
from radio_console.services.dashboard_service import DashboardService
from radio_console.services.radio_service import RadioService
from radio_console.store import RestStore


def get_store(conn: HTTPConnection) -> RestStore:
    """Client du store cree au demarrage / Store client created at startup."""
    return conn.app.state.store


def get_cache(conn: HTTPConnection) -> QueryCache:
    """Cache partage du processus / Process-wide shared cache."""
    return conn.app.state.cache


def get_debounce_delay() -> float:
    return settings.VALIDATION_DEBOUNCE_MS / 1000


def get_radio_service(
    store: RestStore = Depends(get_store),
    cache: QueryCache = Depends(get_cache),
) -> RadioService:
    return RadioService(store, cache)


def get_accessory_service(
    store: RestStore = Depends(get_store),
    cache: QueryCache = Depends(get_cache),
) -> AccessoryService:
    return AccessoryService(store, cache)


def get_assignment_service(
    radio_service: RadioService = Depends(get_radio_service),
    accessory_service: AccessoryService = Depends(get_accessory_service),
) -> AssignmentService:
    return AssignmentService(radio_service, accessory_service)


def get_catalog_service(
    store: RestStore = Depends(get_store),
    cache: QueryCache = Depends(get_cache),
) -> CatalogService:
    return CatalogService(store, cache)


def get_dashboard_service(
    radio_service: RadioService = Depends(get_radio_service),
    accessory_service: AccessoryService = Depends(get_accessory_service),
    assignment_service: AssignmentService = Depends(get_assignment_service),
) -> DashboardService:
    return DashboardService(radio_service, accessory_service, assignment_service)
