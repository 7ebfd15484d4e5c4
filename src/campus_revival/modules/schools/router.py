"""
Schools Router

Endpoints:
- GET /schools - List all schools (public)
- GET /schools/{school_id} - Get one school (public)
- POST /schools - Create a school (admin only)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_revival.core.auth import AdminUser
from campus_revival.core.database import get_db
from campus_revival.core.errors import ServiceError, to_http_exception
from campus_revival.modules.schools import service
from campus_revival.modules.schools.schemas import (
    SchoolCreate,
    SchoolCreatedResponse,
    SchoolDetailResponse,
    SchoolListResponse,
)

router = APIRouter(prefix="/schools", tags=["Schools"])


@router.get("", response_model=SchoolListResponse, summary="List Schools")
async def list_schools(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SchoolListResponse:
    """List all schools ordered by name, with adopter details where adopted."""
    schools = await service.list_schools(db)
    return SchoolListResponse(count=len(schools), schools=schools)


@router.get("/{school_id}", response_model=SchoolDetailResponse, summary="Get School")
async def get_school(
    school_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SchoolDetailResponse:
    """
    Get a single school.

    Raises:
        HTTPException 404: If the school does not exist
    """
    try:
        school = await service.get_school(db, school_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
    return SchoolDetailResponse(school=school)


@router.post(
    "",
    response_model=SchoolCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create School",
)
async def create_school(
    data: SchoolCreate,
    admin: AdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SchoolCreatedResponse:
    """
    Create a new school. Admin only.

    Raises:
        HTTPException 400: If the body is invalid or the name is taken
        HTTPException 401: If not authenticated
        HTTPException 403: If the caller is not an admin
    """
    try:
        school = await service.create_school(db, data, created_by=str(admin.id))
    except ServiceError as e:
        raise to_http_exception(e) from e
    return SchoolCreatedResponse(message="School created", school=school)
