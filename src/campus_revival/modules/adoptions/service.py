"""
Adoption Service

The claim workflow that binds an unadopted school to a single user, and the
listing of a user's adoptions.

A claim runs in one transaction:

1. Validate the school id and load the school
2. Reject schools that are already adopted
3. Insert the adoption row (unique per user and school)
4. Compare-and-set the school's adoption flag
5. Commit, or roll back both writes together
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_revival.core.errors import (
    AlreadyAdoptedBySomeoneError,
    AlreadyAdoptedByYouError,
    ValidationError,
)
from campus_revival.modules.adoptions import repository
from campus_revival.modules.adoptions.models import Adoption
from campus_revival.modules.adoptions.schemas import (
    AdoptedSchool,
    AdoptionJournalEntryResponse,
    AdoptionResponse,
)
from campus_revival.modules.schools.repository import SchoolRepository
from campus_revival.modules.schools.service import SchoolNotFoundError
from campus_revival.modules.shared import as_utc, parse_uuid

logger = logging.getLogger(__name__)


def to_adoption_response(adoption: Adoption) -> AdoptionResponse:
    """Build the API view of an adoption with its school resolved."""
    school = adoption.school
    return AdoptionResponse(
        id=str(adoption.id),
        user_id=str(adoption.user_id),
        school_id=str(adoption.school_id),
        school=AdoptedSchool(
            id=str(school.id),
            name=school.name,
            address=school.address,
            lat=school.lat,
            lng=school.lng,
            description=school.description,
        ),
        date_adopted=as_utc(adoption.date_adopted),
        prayer_count=adoption.prayer_count,
        journal_entries=[
            AdoptionJournalEntryResponse(
                id=str(entry.id),
                text=entry.text,
                date=as_utc(entry.date),
            )
            for entry in adoption.journal_entries
        ],
        created_at=as_utc(adoption.created_at),
    )


async def claim_school(
    db: AsyncSession,
    user_id: str,
    school_id: str | None,
) -> AdoptionResponse:
    """
    Adopt a school for a user.

    Args:
        db: Database session
        user_id: Adopting user's id
        school_id: Raw school id from the request body

    Returns:
        The new adoption with its school resolved

    Raises:
        ValidationError: If the school id is missing or malformed
        SchoolNotFoundError: If the school does not exist
        AlreadyAdoptedBySomeoneError: If the school is, or concurrently became, adopted
        AlreadyAdoptedByYouError: If this user already holds an adoption for the school
    """
    if not school_id:
        raise ValidationError("School ID is required", field="schoolId")

    canonical_id = parse_uuid(school_id)
    if canonical_id is None:
        raise ValidationError("Invalid school ID", field="schoolId")

    school = await SchoolRepository.get_by_id(db, canonical_id)
    if school is None:
        raise SchoolNotFoundError()

    if school.adopted:
        logger.info(f"Claim rejected: school {canonical_id} is already adopted")
        raise AlreadyAdoptedBySomeoneError()

    try:
        adoption = await repository.insert(db, user_id, canonical_id)
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Duplicate claim by user {user_id} for school {canonical_id}")
        raise AlreadyAdoptedByYouError() from e

    if not await SchoolRepository.mark_adopted(db, canonical_id, user_id):
        # Another claim committed between our read and this update
        await db.rollback()
        logger.warning(f"Claim race lost by user {user_id} for school {canonical_id}")
        raise AlreadyAdoptedBySomeoneError()

    adoption_id = adoption.id
    await db.commit()

    logger.info(f"School {canonical_id} adopted by user {user_id}")

    created = await repository.get_by_id(db, adoption_id)
    return to_adoption_response(created)


async def list_adoptions(db: AsyncSession, user_id: str) -> list[AdoptionResponse]:
    """Return a user's adoptions, newest first."""
    adoptions = await repository.list_for_user(db, user_id)
    return [to_adoption_response(adoption) for adoption in adoptions]
