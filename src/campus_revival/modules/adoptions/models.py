"""
Adoption Models

Database models for the adoption ledger: which user adopted which school,
plus the prayer journal notes kept with each adoption.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campus_revival.modules.shared import BaseModel, utcnow

if TYPE_CHECKING:
    from campus_revival.modules.schools.models import School

ADOPTION_JOURNAL_TEXT_MAX_LENGTH = 5000


class Adoption(BaseModel):
    """
    A user's adoption of a school.

    A user holds at most one adoption per school. The school's own
    ``adopted`` flag is updated in the same transaction that inserts the row.
    """

    __tablename__ = "adoptions"
    __table_args__ = (
        UniqueConstraint("user_id", "school_id", name="uq_adoptions_user_school"),
        CheckConstraint("prayer_count >= 0", name="ck_adoptions_prayer_count_non_negative"),
    )

    user_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    school_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date_adopted: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    prayer_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    # Relationships
    school: Mapped["School"] = relationship(
        "School",
        lazy="selectin",
    )
    journal_entries: Mapped[list["AdoptionJournalEntry"]] = relationship(
        "AdoptionJournalEntry",
        back_populates="adoption",
        order_by="AdoptionJournalEntry.date",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Adoption(id={self.id}, user_id={self.user_id}, school_id={self.school_id})>"


class AdoptionJournalEntry(BaseModel):
    """Journal note stored with an adoption, ordered by date."""

    __tablename__ = "adoption_journal_entries"

    adoption_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("adoptions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    text: Mapped[str] = mapped_column(
        String(ADOPTION_JOURNAL_TEXT_MAX_LENGTH),
        nullable=False,
    )
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    adoption: Mapped["Adoption"] = relationship(
        "Adoption",
        back_populates="journal_entries",
    )
