"""
Adoptions Router

Endpoints:
- GET /adoptions - List the caller's adoptions
- POST /adoptions - Claim a school for the caller
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_revival.core.auth import CurrentUser
from campus_revival.core.database import get_db
from campus_revival.core.errors import ServiceError, to_http_exception
from campus_revival.modules.adoptions import service
from campus_revival.modules.adoptions.schemas import (
    AdoptionCreatedResponse,
    AdoptionListResponse,
    AdoptRequest,
)

router = APIRouter(prefix="/adoptions", tags=["Adoptions"])


@router.get("", response_model=AdoptionListResponse, summary="List My Adoptions")
async def list_adoptions(
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AdoptionListResponse:
    """List the caller's adoptions, most recent first, with school details."""
    adoptions = await service.list_adoptions(db, str(user.id))
    return AdoptionListResponse(count=len(adoptions), adoptions=adoptions)


@router.post(
    "",
    response_model=AdoptionCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Adopt School",
)
async def adopt_school(
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    data: AdoptRequest | None = None,
) -> AdoptionCreatedResponse:
    """
    Claim an unadopted school.

    The body may be omitted entirely; a missing school id is reported by the
    claim workflow.

    Raises:
        HTTPException 400: Missing/invalid school id, or the school is already adopted
        HTTPException 404: If the school does not exist
    """
    school_id = data.school_id if data else None
    try:
        adoption = await service.claim_school(db, str(user.id), school_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
    return AdoptionCreatedResponse(message="School adopted successfully", adoption=adoption)
