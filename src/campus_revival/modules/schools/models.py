"""
School Models

Database model for the registry of schools available for adoption.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, Float, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campus_revival.modules.shared import BaseModel

if TYPE_CHECKING:
    from campus_revival.modules.users.models import User

DESCRIPTION_MAX_LENGTH = 2000


class School(BaseModel):
    """
    School that can be adopted by exactly one user.

    ``adopted`` and ``adopter_id`` always change together: a school is
    adopted exactly when it has an adopter.
    """

    __tablename__ = "schools"
    __table_args__ = (
        CheckConstraint(
            "(adopted AND adopter_id IS NOT NULL) OR (NOT adopted AND adopter_id IS NULL)",
            name="ck_schools_adopted_has_adopter",
        ),
        CheckConstraint("lat >= -90 AND lat <= 90", name="ck_schools_lat_range"),
        CheckConstraint("lng >= -180 AND lng <= 180", name="ck_schools_lng_range"),
        Index("ix_schools_lat_lng", "lat", "lng"),
    )

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        unique=True,
    )
    lat: Mapped[float] = mapped_column(
        Float,
        nullable=False,
    )
    lng: Mapped[float] = mapped_column(
        Float,
        nullable=False,
    )
    address: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH),
        nullable=True,
    )

    # Adoption state
    adopted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
    )
    adopter_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=True,
    )

    # Relationships
    adopter: Mapped["User | None"] = relationship(
        "User",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<School(id={self.id}, name={self.name}, adopted={self.adopted})>"
