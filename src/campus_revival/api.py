from fastapi import APIRouter

from campus_revival.modules.adoptions.router import router as adoptions_router
from campus_revival.modules.auth.router import router as auth_router
from campus_revival.modules.dashboard.router import router as dashboard_router
from campus_revival.modules.health.router import router as health_router
from campus_revival.modules.journal.router import router as journal_router
from campus_revival.modules.schools.router import router as schools_router

api_router = APIRouter()

api_router.include_router(health_router)

api_router.include_router(auth_router)

api_router.include_router(schools_router)

api_router.include_router(adoptions_router)

api_router.include_router(journal_router)

api_router.include_router(dashboard_router)
