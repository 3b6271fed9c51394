"""
Driver authentication: PIN login, magic-link tokens and token rotation.

The store connects with an elevated credential, so these functions are the
only gate between a caller and driver data.
"""
import logging
from typing import Optional

from ridepilot.core.errors import (
    InvalidCredential,
    InvalidInput,
    InvalidOrExpiredToken,
    UpstreamFailure,
)
from ridepilot.models import Driver
from ridepilot.schemas.driver import DriverIdentity
from ridepilot.services.driver_store import DriverStore, StoreError

logger = logging.getLogger(__name__)

# PIN accepted for drivers that have none stored
DEFAULT_PIN = "1234"


def expected_pin(stored_pin: Optional[str]) -> str:
    """PIN a driver must enter: the stored one, or the default when unset."""
    stored = (stored_pin or "").strip()
    return stored or DEFAULT_PIN


def pin_matches(supplied_pin: str, stored_pin: Optional[str]) -> bool:
    """Compare PINs after trimming; case-sensitive, no other normalization."""
    return supplied_pin.strip() == expected_pin(stored_pin)


def to_identity(driver: Driver) -> DriverIdentity:
    """Public projection of *driver*."""
    return DriverIdentity(
        id=driver.license,
        name=driver.name,
        uuid=driver.id,
        phone=driver.phone,
    )


async def authenticate_with_pin(
    store: DriverStore,
    driver_code: Optional[str],
    pin: Optional[str],
) -> DriverIdentity:
    """Validate a driver code + PIN pair.

    Raises:
        InvalidInput: code or PIN missing
        InvalidCredential: unknown code or wrong PIN
        UpstreamFailure: store error
    """
    if not driver_code or not driver_code.strip() or not pin or not pin.strip():
        raise InvalidInput("Driver ID and PIN are required")

    code = driver_code.strip()
    try:
        driver = await store.find_driver_by_code(code)
    except StoreError as e:
        logger.error(f"Database error during driver login: {e}")
        raise UpstreamFailure("Database error occurred") from e

    if driver is None:
        logger.warning(f"Driver login failed: unknown driver code '{code}'")
        raise InvalidCredential("Invalid Driver ID")

    if not pin_matches(pin, driver.pin):
        logger.warning(f"Driver login failed: invalid PIN for driver '{code}'")
        raise InvalidCredential("Invalid PIN")

    logger.info(f"Driver '{code}' logged in with PIN")
    return to_identity(driver)


async def authenticate_with_token(store: DriverStore, token: Optional[str]) -> DriverIdentity:
    """Resolve a magic-link token to an active driver.

    Raises:
        InvalidInput: token blank
        InvalidOrExpiredToken: no active driver holds the token
        UpstreamFailure: store error
    """
    if not token or not token.strip():
        raise InvalidInput("Token is required")

    try:
        driver = await store.find_driver_by_token(token)
    except StoreError as e:
        logger.error(f"Database error during token authentication: {e}")
        raise UpstreamFailure("Database error occurred") from e

    if driver is None:
        logger.warning("Token authentication failed: no active driver for token")
        raise InvalidOrExpiredToken("Invalid or expired token")

    logger.info(f"Driver '{driver.license}' logged in with token")
    return to_identity(driver)


async def regenerate_token(store: DriverStore, driver_id: Optional[str]) -> str:
    """Rotate the driver's token; the previous one stops working.

    Raises:
        InvalidInput: driver id blank
        UpstreamFailure: store error or no token produced
    """
    if not driver_id or not driver_id.strip():
        raise InvalidInput("Driver ID is required")

    driver_id = driver_id.strip()
    try:
        new_token = await store.rotate_token(driver_id)
    except StoreError as e:
        logger.error(f"Token rotation failed for driver {driver_id}: {e}")
        raise UpstreamFailure("Failed to regenerate token") from e

    if not new_token:
        logger.error(f"Token rotation for driver {driver_id} returned no token")
        raise UpstreamFailure("Failed to regenerate token")

    logger.info(f"Rotated token for driver {driver_id}")
    return new_token
