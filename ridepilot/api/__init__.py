"""
API router aggregation.
"""
from fastapi import APIRouter

from ridepilot.api.endpoints import driver_auth, projects

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    driver_auth.router,
    prefix="/driver",
    tags=["Driver Authentication"],
)

api_router.include_router(
    projects.router,
    prefix="/driver",
    tags=["Driver Projects"],
)
