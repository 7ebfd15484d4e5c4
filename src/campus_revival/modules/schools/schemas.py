"""School schemas."""

from datetime import datetime

from pydantic import Field, field_validator

from campus_revival.modules.schools.models import DESCRIPTION_MAX_LENGTH
from campus_revival.modules.shared import CamelModel, SuccessResponse


def _strip(v: object) -> object:
    if isinstance(v, str):
        return v.strip()
    return v


class SchoolCreate(CamelModel):
    """Request body for creating a school."""

    name: str = Field(..., min_length=1, max_length=200)
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    address: str = Field(..., min_length=1)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)

    @field_validator("name", "address", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        return _strip(v)

    @field_validator("description", mode="before")
    @classmethod
    def blank_description_is_none(cls, v: object) -> object:
        v = _strip(v)
        return v or None


class AdopterSummary(CamelModel):
    """Adopting user as shown on a school."""

    id: str
    name: str
    email: str


class SchoolResponse(CamelModel):
    """School as returned by the API."""

    id: str
    name: str
    lat: float
    lng: float
    address: str
    description: str | None = None
    adopted: bool
    adopter_id: str | None = None
    adopter: AdopterSummary | None = None
    created_at: datetime
    updated_at: datetime


class SchoolListResponse(SuccessResponse):
    count: int
    schools: list[SchoolResponse]


class SchoolDetailResponse(SuccessResponse):
    school: SchoolResponse


class SchoolCreatedResponse(SuccessResponse):
    message: str
    school: SchoolResponse
