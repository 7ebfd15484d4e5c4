"""
Dashboard Router

Endpoints:
- GET /dashboard - Summary of the caller's adoptions and journal
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from campus_revival.core.auth import CurrentUser
from campus_revival.core.database import get_db
from campus_revival.modules.dashboard import service
from campus_revival.modules.dashboard.schemas import DashboardResponse

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardResponse, summary="My Dashboard")
async def get_dashboard(
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DashboardResponse:
    """Return profile, stats, adopted schools and recent journal entries."""
    dashboard = await service.build_dashboard(db, user)
    return DashboardResponse(dashboard=dashboard)
