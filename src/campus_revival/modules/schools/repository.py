"""
School Repository

Database operations for the school registry.
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from campus_revival.modules.schools.models import School

logger = logging.getLogger(__name__)


class SchoolRepository:
    """Repository for school database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        name: str,
        lat: float,
        lng: float,
        address: str,
        description: str | None = None,
    ) -> School:
        """
        Create a new, unadopted school record.

        Args:
            db: Database session
            name: School name (unique)
            lat: Latitude in degrees
            lng: Longitude in degrees
            address: Street address
            description: Free text description (optional)

        Returns:
            Created School instance

        Raises:
            sqlalchemy.exc.IntegrityError: If the name is already taken
        """
        school = School(
            name=name,
            lat=lat,
            lng=lng,
            address=address,
            description=description,
            adopted=False,
            adopter_id=None,
        )

        db.add(school)
        await db.commit()

        logger.info(f"Created school: {school.id} - {school.name}")
        return await SchoolRepository.get_by_id(db, school.id)

    @staticmethod
    async def get_by_id(db: AsyncSession, school_id: str) -> School | None:
        """
        Get a school by ID with its adopter loaded.

        Always reloads from the database so adoption state is current.

        Args:
            db: Database session
            school_id: School UUID string

        Returns:
            School instance or None if not found
        """
        result = await db.execute(
            select(School)
            .where(School.id == str(school_id))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_name(db: AsyncSession, name: str) -> School | None:
        result = await db.execute(select(School).where(School.name == name))
        return result.scalar_one_or_none()

    @staticmethod
    async def list_all(db: AsyncSession) -> list[School]:
        """
        List every school ordered by name.

        Args:
            db: Database session

        Returns:
            List of School instances with adopters loaded
        """
        result = await db.execute(select(School).order_by(School.name.asc()))
        return list(result.scalars().all())

    @staticmethod
    async def mark_adopted(db: AsyncSession, school_id: str, user_id: str) -> bool:
        """
        Assign an unadopted school to a user.

        Compare-and-set: the row only changes while ``adopted`` is still false,
        so of two concurrent claims exactly one sees a row updated. Does not
        commit.

        Args:
            db: Database session
            school_id: School UUID string
            user_id: Adopting user's UUID string

        Returns:
            True if this call adopted the school, False if it was already taken
        """
        result = await db.execute(
            update(School)
            .where(School.id == str(school_id), School.adopted.is_(False))
            .values(adopted=True, adopter_id=str(user_id))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
