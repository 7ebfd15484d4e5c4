"""
Journal Router

Endpoints:
- GET /journal - List the caller's entries (optional schoolId filter, limit)
- POST /journal - Add an entry
- DELETE /journal/{entry_id} - Delete one of the caller's entries
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_revival.core.auth import CurrentUser
from campus_revival.core.database import get_db
from campus_revival.core.errors import ServiceError, to_http_exception
from campus_revival.modules.journal import service
from campus_revival.modules.journal.schemas import (
    JournalCreate,
    JournalCreatedResponse,
    JournalListResponse,
)
from campus_revival.modules.shared import MessageResponse

router = APIRouter(prefix="/journal", tags=["Journal"])


@router.get("", response_model=JournalListResponse, summary="List Journal Entries")
async def list_entries(
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    school_id: Annotated[str | None, Query(alias="schoolId")] = None,
    limit: Annotated[
        int, Query(ge=1, le=service.MAX_LIST_LIMIT)
    ] = service.DEFAULT_LIST_LIMIT,
) -> JournalListResponse:
    """List the caller's journal entries, newest first."""
    try:
        entries = await service.list_entries(db, str(user.id), school_id, limit)
    except ServiceError as e:
        raise to_http_exception(e) from e
    return JournalListResponse(count=len(entries), entries=entries)


@router.post(
    "",
    response_model=JournalCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Journal Entry",
)
async def create_entry(
    data: JournalCreate,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> JournalCreatedResponse:
    """
    Add a journal entry, optionally linked to a school.

    Raises:
        HTTPException 400: If the text is blank or the school id is malformed
        HTTPException 404: If the linked school does not exist
    """
    try:
        entry = await service.append_entry(db, str(user.id), data.entry_text, data.school_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
    return JournalCreatedResponse(message="Journal entry created", entry=entry)


@router.delete("/{entry_id}", response_model=MessageResponse, summary="Delete Journal Entry")
async def delete_entry(
    entry_id: str,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """
    Delete one of the caller's journal entries.

    Raises:
        HTTPException 404: If the entry does not exist or belongs to someone else
    """
    try:
        await service.remove_entry(db, str(user.id), entry_id)
    except ServiceError as e:
        raise to_http_exception(e) from e
    return MessageResponse(message="Journal entry deleted")
