"""
School Service

Business logic for the school registry: listing, lookup and admin creation.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_revival.core.errors import ConflictError, NotFoundError
from campus_revival.modules.schools.models import School
from campus_revival.modules.schools.repository import SchoolRepository
from campus_revival.modules.schools.schemas import AdopterSummary, SchoolCreate, SchoolResponse
from campus_revival.modules.shared import as_utc, parse_uuid

logger = logging.getLogger(__name__)


class SchoolNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__(message="School not found")


class DuplicateSchoolError(ConflictError):
    """Raised when a school with the same name already exists."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            message=f"A school named '{name}' already exists",
            error_code="DUPLICATE_SCHOOL",
        )


def to_school_response(school: School) -> SchoolResponse:
    """Build the API view of a school, including its adopter when adopted."""
    adopter = None
    if school.adopter is not None:
        adopter = AdopterSummary(
            id=str(school.adopter.id),
            name=school.adopter.name,
            email=school.adopter.email,
        )

    return SchoolResponse(
        id=str(school.id),
        name=school.name,
        lat=school.lat,
        lng=school.lng,
        address=school.address,
        description=school.description,
        adopted=school.adopted,
        adopter_id=str(school.adopter_id) if school.adopter_id else None,
        adopter=adopter,
        created_at=as_utc(school.created_at),
        updated_at=as_utc(school.updated_at),
    )


async def list_schools(db: AsyncSession) -> list[SchoolResponse]:
    """Return every school ordered by name."""
    schools = await SchoolRepository.list_all(db)
    return [to_school_response(school) for school in schools]


async def get_school(db: AsyncSession, school_id: str) -> SchoolResponse:
    """
    Look up one school.

    Raises:
        SchoolNotFoundError: If the id is malformed or unknown
    """
    canonical_id = parse_uuid(school_id)
    if canonical_id is None:
        raise SchoolNotFoundError()

    school = await SchoolRepository.get_by_id(db, canonical_id)
    if school is None:
        raise SchoolNotFoundError()

    return to_school_response(school)


async def create_school(db: AsyncSession, data: SchoolCreate, created_by: str) -> SchoolResponse:
    """
    Add a school to the registry.

    Args:
        db: Database session
        data: Validated school fields
        created_by: Admin user id, for the audit log

    Raises:
        DuplicateSchoolError: If the name is already registered
    """
    if await SchoolRepository.get_by_name(db, data.name) is not None:
        logger.warning(f"Duplicate school rejected: {data.name}")
        raise DuplicateSchoolError(data.name)

    try:
        school = await SchoolRepository.create(
            db,
            name=data.name,
            lat=data.lat,
            lng=data.lng,
            address=data.address,
            description=data.description,
        )
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Duplicate school rejected by unique index: {data.name}")
        raise DuplicateSchoolError(data.name) from e

    logger.info(f"School {school.id} created by admin {created_by}")
    return to_school_response(school)
