"""
Journal Models

Standalone prayer journal entries, optionally linked to a school.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campus_revival.modules.shared import BaseModel, utcnow

if TYPE_CHECKING:
    from campus_revival.modules.schools.models import School

ENTRY_TEXT_MAX_LENGTH = 5000


class JournalEntry(BaseModel):
    """A user's journal entry. Only its owner can read or delete it."""

    __tablename__ = "journal_entries"
    __table_args__ = (Index("ix_journal_entries_user_date", "user_id", "date"),)

    user_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    entry_text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    school_id: Mapped[str | None] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("schools.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # Relationships
    school: Mapped["School | None"] = relationship(
        "School",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<JournalEntry(id={self.id}, user_id={self.user_id})>"
