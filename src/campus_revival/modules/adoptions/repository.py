"""
Adoption Repository

Database operations for the adoption ledger. Writes here only flush; the
claim workflow in the service owns the transaction.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Adoption


async def insert(db: AsyncSession, user_id: str, school_id: str) -> Adoption:
    """
    Stage a new adoption row and flush it.

    Raises:
        sqlalchemy.exc.IntegrityError: If the user already adopted the school
    """
    adoption = Adoption(
        user_id=str(user_id),
        school_id=str(school_id),
        prayer_count=0,
    )
    db.add(adoption)
    await db.flush()
    return adoption


async def get_by_id(db: AsyncSession, adoption_id: str) -> Adoption | None:
    """Get an adoption with its school and journal notes freshly loaded."""
    result = await db.execute(
        select(Adoption)
        .where(Adoption.id == str(adoption_id))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def list_for_user(db: AsyncSession, user_id: str) -> list[Adoption]:
    """List a user's adoptions, most recently adopted first."""
    result = await db.execute(
        select(Adoption)
        .where(Adoption.user_id == str(user_id))
        .order_by(Adoption.date_adopted.desc())
    )
    return list(result.scalars().all())
