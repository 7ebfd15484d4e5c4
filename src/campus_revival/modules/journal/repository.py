"""
Journal Repository

Database operations for standalone journal entries. Every query is scoped
to the owning user.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import JournalEntry

logger = logging.getLogger(__name__)


async def create(
    db: AsyncSession,
    user_id: str,
    entry_text: str,
    school_id: str | None = None,
) -> JournalEntry:
    """Create an entry and return it with its school loaded."""
    entry = JournalEntry(
        user_id=str(user_id),
        entry_text=entry_text,
        school_id=school_id,
    )
    db.add(entry)
    await db.commit()

    result = await db.execute(
        select(JournalEntry)
        .where(JournalEntry.id == entry.id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def list_for_user(
    db: AsyncSession,
    user_id: str,
    school_id: str | None = None,
    limit: int = 50,
) -> list[JournalEntry]:
    """List a user's entries newest first, optionally for one school."""
    query = select(JournalEntry).where(JournalEntry.user_id == str(user_id))
    if school_id is not None:
        query = query.where(JournalEntry.school_id == school_id)

    result = await db.execute(
        query.order_by(JournalEntry.date.desc(), JournalEntry.created_at.desc()).limit(limit)
    )
    return list(result.scalars().all())


async def get_owned(db: AsyncSession, user_id: str, entry_id: str) -> JournalEntry | None:
    """Get an entry only if it belongs to the user."""
    result = await db.execute(
        select(JournalEntry).where(
            JournalEntry.id == str(entry_id),
            JournalEntry.user_id == str(user_id),
        )
    )
    return result.scalar_one_or_none()


async def delete(db: AsyncSession, entry: JournalEntry) -> None:
    await db.delete(entry)
    await db.commit()
    logger.info(f"Deleted journal entry {entry.id}")


async def count_for_user(db: AsyncSession, user_id: str) -> int:
    result = await db.execute(
        select(func.count()).select_from(JournalEntry).where(JournalEntry.user_id == str(user_id))
    )
    return int(result.scalar_one())
