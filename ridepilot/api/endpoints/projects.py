"""
Driver trip listing endpoint.
"""
from fastapi import APIRouter, Depends

from ridepilot.core.dependencies import get_driver_store
from ridepilot.schemas.project import DriverProjectListResponse
from ridepilot.services.driver_store import DriverStore
from ridepilot.services.projects import list_driver_projects

router = APIRouter()


@router.get("/{driver_uuid}/projects", response_model=DriverProjectListResponse)
async def get_driver_projects(
    driver_uuid: str,
    store: DriverStore = Depends(get_driver_store),
):
    """
    List the active trips assigned to a driver.

    - Ordered by date, then time
    - **company_name** falls back to "Unknown Company", **car_type_name** to "Standard"
    - **driver_fee** may be null; the client shows **price** in that case
    """
    projects = await list_driver_projects(store, driver_uuid)
    return DriverProjectListResponse(projects=projects)
