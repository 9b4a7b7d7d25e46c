"""Schémas Tableau de bord / Dashboard schemas."""

from pydantic import BaseModel

from radio_console.schemas.assignment import InstallationRead, IssueRead
from radio_console.schemas.radio import RadioRead


class DashboardStats(BaseModel):
    total_radios: int = 0
    portable_radios: int = 0
    mobile_radios: int = 0
    base_radios: int = 0
    total_accessories: int = 0
    recent_installations: list[InstallationRead] = []
    recent_issues: list[IssueRead] = []
    recent_registrations: list[RadioRead] = []
