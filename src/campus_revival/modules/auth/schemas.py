"""Authentication schemas."""

from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from campus_revival.modules.shared import CamelModel, SuccessResponse


class RegisterRequest(CamelModel):
    """Registration request schema."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., min_length=2, max_length=100)

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip()
        return v


class LoginRequest(CamelModel):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserSummary(CamelModel):
    """Public view of a user returned with a token."""

    id: str
    email: str
    name: str
    role: str


class UserProfile(UserSummary):
    """Current user as returned by /me."""

    created_at: datetime


class AuthResponse(SuccessResponse):
    """Response for register and login."""

    message: str
    token: str
    user: UserSummary


class MeResponse(SuccessResponse):
    user: UserProfile
