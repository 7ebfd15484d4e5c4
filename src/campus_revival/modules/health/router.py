"""
Health Router

Liveness endpoint for load balancers and container health checks.
"""

import time
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from campus_revival.core.database import check_db, get_db
from campus_revival.modules.shared import SuccessResponse, utcnow

router = APIRouter(tags=["Health"])

# Process start, for uptime reporting
_start_time = time.monotonic()


class HealthResponse(SuccessResponse):
    status: str
    timestamp: datetime
    uptime: float
    database: str


@router.get("/health", response_model=HealthResponse, summary="Health Check")
async def health_check(
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> HealthResponse:
    """
    Report service health.

    Returns 503 with ``database: disconnected`` when the database is unreachable.
    """
    database_ok = await check_db(db)
    if not database_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        success=database_ok,
        status="healthy" if database_ok else "unhealthy",
        timestamp=utcnow(),
        uptime=round(time.monotonic() - _start_time, 2),
        database="connected" if database_ok else "disconnected",
    )
