"""Driver authentication endpoints (PIN, magic-link token, token rotation)."""
from typing import Annotated

from fastapi import APIRouter, Depends

from ridepilot.core.dependencies import get_driver_store
from ridepilot.schemas.driver import (
    DriverAuthResponse,
    DriverLoginRequest,
    TokenRotationResponse,
)
from ridepilot.services import driver_auth
from ridepilot.services.driver_store import DriverStore

router = APIRouter()


@router.post("/login", response_model=DriverAuthResponse)
async def login(
    data: DriverLoginRequest,
    store: Annotated[DriverStore, Depends(get_driver_store)],
) -> DriverAuthResponse:
    """Log a driver in with driver code + PIN.

    Request:
        - driverId: Driver code (license)
        - pin: PIN; drivers without one use the default PIN

    Raises:
        400: driverId or pin missing
        401: Unknown driver code or wrong PIN
        500: Data store error
    """
    driver = await driver_auth.authenticate_with_pin(store, data.driver_id, data.pin)
    return DriverAuthResponse(driver=driver)


@router.get("/auth/{token}", response_model=DriverAuthResponse)
async def authenticate_token(
    token: str,
    store: Annotated[DriverStore, Depends(get_driver_store)],
) -> DriverAuthResponse:
    """Exchange a magic-link token for the driver identity.

    Raises:
        400: Blank token
        401: Token unknown, rotated, or driver inactive
        500: Data store error
    """
    driver = await driver_auth.authenticate_with_token(store, token)
    return DriverAuthResponse(driver=driver)


@router.post("/regenerate-token/{driver_id}", response_model=TokenRotationResponse)
async def regenerate_token(
    driver_id: str,
    store: Annotated[DriverStore, Depends(get_driver_store)],
) -> TokenRotationResponse:
    """Issue a new magic-link token; the previous token stops working."""
    new_token = await driver_auth.regenerate_token(store, driver_id)
    return TokenRotationResponse(new_token=new_token)
