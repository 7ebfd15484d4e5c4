"""Journal schemas."""

from datetime import datetime

from campus_revival.modules.shared import CamelModel, SuccessResponse


class JournalCreate(CamelModel):
    """
    Request body for a journal entry.

    Text is checked by the service after trimming, so both fields are
    optional at the schema level.
    """

    entry_text: str | None = None
    school_id: str | None = None


class JournalSchool(CamelModel):
    id: str
    name: str
    address: str


class JournalEntryResponse(CamelModel):
    """Journal entry as returned by the API."""

    id: str
    user_id: str
    entry_text: str
    school_id: str | None = None
    school: JournalSchool | None = None
    date: datetime
    created_at: datetime


class JournalListResponse(SuccessResponse):
    count: int
    entries: list[JournalEntryResponse]


class JournalCreatedResponse(SuccessResponse):
    message: str
    entry: JournalEntryResponse
