"""
Dashboard Service

Read-only summary of a user's adoptions and journal activity.
"""

import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from campus_revival.modules.adoptions import repository as adoption_repository
from campus_revival.modules.adoptions.models import Adoption
from campus_revival.modules.adoptions.schemas import AdoptionJournalEntryResponse
from campus_revival.modules.dashboard.schemas import (
    Dashboard,
    DashboardAdoption,
    DashboardStats,
    DashboardUser,
)
from campus_revival.modules.journal import repository as journal_repository
from campus_revival.modules.journal.service import to_entry_response
from campus_revival.modules.shared import as_utc, utcnow
from campus_revival.modules.users.models import User

logger = logging.getLogger(__name__)

RECENT_JOURNALS_LIMIT = 5


def days_between(start: datetime, end: datetime) -> int:
    """Whole days elapsed from ``start`` to ``end``, never negative."""
    return max((as_utc(end) - as_utc(start)).days, 0)


def _summarize_adoption(adoption: Adoption) -> DashboardAdoption:
    entries = adoption.journal_entries
    latest = None
    if entries:
        last = entries[-1]
        latest = AdoptionJournalEntryResponse(
            id=str(last.id),
            text=last.text,
            date=as_utc(last.date),
        )

    return DashboardAdoption(
        id=str(adoption.school.id),
        name=adoption.school.name,
        address=adoption.school.address,
        date_adopted=as_utc(adoption.date_adopted),
        prayer_count=adoption.prayer_count,
        journal_entries=len(entries),
        latest_journal=latest,
    )


async def build_dashboard(db: AsyncSession, user: User) -> Dashboard:
    """
    Compose the dashboard for a user.

    Args:
        db: Database session
        user: Authenticated user

    Returns:
        Profile, stats, adoption summaries and the five newest journal entries
    """
    adoptions = await adoption_repository.list_for_user(db, str(user.id))
    journal_count = await journal_repository.count_for_user(db, str(user.id))
    recent = await journal_repository.list_for_user(
        db, str(user.id), limit=RECENT_JOURNALS_LIMIT
    )

    stats = DashboardStats(
        schools_count=len(adoptions),
        total_prayers=sum(a.prayer_count for a in adoptions),
        journal_count=journal_count,
        total_journal_entries=sum(len(a.journal_entries) for a in adoptions),
        days_active=days_between(user.created_at, utcnow()),
    )

    logger.debug(f"Built dashboard for user {user.id}: {stats.schools_count} adoptions")

    return Dashboard(
        user=DashboardUser(
            name=user.name,
            email=user.email,
            role=user.role.value,
            member_since=as_utc(user.created_at),
        ),
        stats=stats,
        adoptions=[_summarize_adoption(a) for a in adoptions],
        recent_journals=[to_entry_response(entry) for entry in recent],
    )
