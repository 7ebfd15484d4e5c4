"""
Journal Service

Append, list and delete a user's standalone journal entries.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from campus_revival.core.errors import NotFoundError, ValidationError
from campus_revival.modules.journal import repository
from campus_revival.modules.journal.models import ENTRY_TEXT_MAX_LENGTH, JournalEntry
from campus_revival.modules.journal.schemas import JournalEntryResponse, JournalSchool
from campus_revival.modules.schools.repository import SchoolRepository
from campus_revival.modules.schools.service import SchoolNotFoundError
from campus_revival.modules.shared import as_utc, parse_uuid

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 50
MAX_LIST_LIMIT = 100


class JournalEntryNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__(message="Journal entry not found")


def to_entry_response(entry: JournalEntry) -> JournalEntryResponse:
    school = None
    if entry.school is not None:
        school = JournalSchool(
            id=str(entry.school.id),
            name=entry.school.name,
            address=entry.school.address,
        )

    return JournalEntryResponse(
        id=str(entry.id),
        user_id=str(entry.user_id),
        entry_text=entry.entry_text,
        school_id=str(entry.school_id) if entry.school_id else None,
        school=school,
        date=as_utc(entry.date),
        created_at=as_utc(entry.created_at),
    )


def _normalize_school_id(school_id: str | None) -> str | None:
    """Return the canonical school id, None when absent, or raise if malformed."""
    if not school_id:
        return None
    canonical_id = parse_uuid(school_id)
    if canonical_id is None:
        raise ValidationError("Invalid school ID", field="schoolId")
    return canonical_id


async def append_entry(
    db: AsyncSession,
    user_id: str,
    entry_text: str | None,
    school_id: str | None = None,
) -> JournalEntryResponse:
    """
    Add a journal entry for a user.

    Args:
        db: Database session
        user_id: Owner of the entry
        entry_text: Raw text; stored trimmed
        school_id: Optional school the entry is about

    Returns:
        The stored entry

    Raises:
        ValidationError: If the text is empty after trimming or too long,
            or the school id is malformed
        SchoolNotFoundError: If the school does not exist
    """
    text = (entry_text or "").strip()
    if not text:
        raise ValidationError("Journal entry text is required", field="entryText")
    if len(text) > ENTRY_TEXT_MAX_LENGTH:
        raise ValidationError(
            f"Journal entry cannot exceed {ENTRY_TEXT_MAX_LENGTH} characters",
            field="entryText",
        )

    canonical_school_id = _normalize_school_id(school_id)
    if canonical_school_id is not None:
        if await SchoolRepository.get_by_id(db, canonical_school_id) is None:
            raise SchoolNotFoundError()

    entry = await repository.create(db, user_id, text, canonical_school_id)
    logger.info(f"Journal entry {entry.id} created by user {user_id}")
    return to_entry_response(entry)


async def list_entries(
    db: AsyncSession,
    user_id: str,
    school_id: str | None = None,
    limit: int = DEFAULT_LIST_LIMIT,
) -> list[JournalEntryResponse]:
    """
    List a user's entries, newest first.

    Raises:
        ValidationError: If the school filter or limit is invalid
    """
    if limit < 1 or limit > MAX_LIST_LIMIT:
        raise ValidationError(f"limit must be between 1 and {MAX_LIST_LIMIT}", field="limit")

    canonical_school_id = _normalize_school_id(school_id)
    entries = await repository.list_for_user(db, user_id, canonical_school_id, limit)
    return [to_entry_response(entry) for entry in entries]


async def remove_entry(db: AsyncSession, user_id: str, entry_id: str) -> None:
    """
    Delete one of the user's entries.

    Raises:
        JournalEntryNotFoundError: If the id is malformed, unknown or owned by
            someone else
    """
    canonical_id = parse_uuid(entry_id)
    if canonical_id is None:
        raise JournalEntryNotFoundError()

    entry = await repository.get_owned(db, user_id, canonical_id)
    if entry is None:
        raise JournalEntryNotFoundError()

    await repository.delete(db, entry)
    logger.info(f"Journal entry {canonical_id} deleted by user {user_id}")
