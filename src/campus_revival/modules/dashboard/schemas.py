"""Dashboard schemas."""

from datetime import datetime

from campus_revival.modules.adoptions.schemas import AdoptionJournalEntryResponse
from campus_revival.modules.journal.schemas import JournalEntryResponse
from campus_revival.modules.shared import CamelModel, SuccessResponse


class DashboardUser(CamelModel):
    name: str
    email: str
    role: str
    member_since: datetime


class DashboardStats(CamelModel):
    """Totals across the user's adoptions and journal."""

    schools_count: int
    total_prayers: int
    journal_count: int
    total_journal_entries: int
    days_active: int


class DashboardAdoption(CamelModel):
    """One adopted school as summarised on the dashboard. ``id`` is the school id."""

    id: str
    name: str
    address: str
    date_adopted: datetime
    prayer_count: int
    journal_entries: int
    latest_journal: AdoptionJournalEntryResponse | None = None


class Dashboard(CamelModel):
    user: DashboardUser
    stats: DashboardStats
    adoptions: list[DashboardAdoption]
    recent_journals: list[JournalEntryResponse]


class DashboardResponse(SuccessResponse):
    dashboard: Dashboard
