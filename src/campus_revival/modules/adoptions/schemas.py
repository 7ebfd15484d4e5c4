"""Adoption schemas."""

from datetime import datetime

from campus_revival.modules.shared import CamelModel, SuccessResponse


class AdoptRequest(CamelModel):
    """
    Request body for claiming a school.

    ``schoolId`` is optional here, and the whole body is optional on the
    route, so a missing value gets the service's "School ID is required"
    message rather than a generic validation error.
    """

    school_id: str | None = None


class AdoptedSchool(CamelModel):
    """School fields embedded in an adoption."""

    id: str
    name: str
    address: str
    lat: float
    lng: float
    description: str | None = None


class AdoptionJournalEntryResponse(CamelModel):
    id: str
    text: str
    date: datetime


class AdoptionResponse(CamelModel):
    """Adoption as returned by the API, with its school resolved."""

    id: str
    user_id: str
    school_id: str
    school: AdoptedSchool
    date_adopted: datetime
    prayer_count: int
    journal_entries: list[AdoptionJournalEntryResponse]
    created_at: datetime


class AdoptionListResponse(SuccessResponse):
    count: int
    adoptions: list[AdoptionResponse]


class AdoptionCreatedResponse(SuccessResponse):
    message: str
    adoption: AdoptionResponse
