"""
Presentation rules for the driver dashboard.

Pure functions: every computation takes the current local time (or date)
explicitly so results are reproducible.
"""
import re
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional
from urllib.parse import quote

from ridepilot.schemas.driver import DriverIdentity
from ridepilot.schemas.project import DriverProject


@dataclass(frozen=True)
class Urgency:
    """Urgency bucket of a trip, with the badge color and text shown."""
    status: str
    color: str
    message: str


OVERDUE = Urgency("overdue", "red", "Overdue")
STARTING_SOON = Urgency("urgent", "orange", "Starting Soon")
DUE_TODAY = Urgency("today", "blue", "Today")
SCHEDULED = Urgency("scheduled", "gray", "Scheduled")


def trip_start(project: DriverProject) -> datetime:
    """Naive local datetime of the pickup."""
    return datetime.combine(project.date, project.time)


def hours_until(project: DriverProject, now: datetime) -> float:
    return (trip_start(project) - now).total_seconds() / 3600


def urgency_for(project: DriverProject, now: datetime) -> Urgency:
    """Bucket a trip by hours until pickup; each upper edge is inclusive."""
    hours = hours_until(project, now)
    if hours <= 0:
        return OVERDUE
    if hours <= 2:
        return STARTING_SOON
    if hours <= 24:
        return DUE_TODAY
    return SCHEDULED


def date_label(day: date, today: date) -> str:
    """'Today', 'Tomorrow', or e.g. 'Saturday, Jun 1'."""
    if day == today:
        return "Today"
    if day == today + timedelta(days=1):
        return "Tomorrow"
    return f"{day:%A}, {day:%b} {day.day}"


def time_label(value: time) -> str:
    """Pickup time as HH:MM."""
    return value.strftime("%H:%M")


def display_price(project: DriverProject) -> float:
    """The driver's fee when set, otherwise the trip price."""
    if project.driver_fee is not None:
        return project.driver_fee
    return project.price


def format_money(amount: float, decimals: int = 2) -> str:
    """Euro amount rounded half up, so 12.5 shows as 13 in whole euros."""
    rounded = Decimal(str(amount)).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
    return f"€{rounded}"


def group_by_date(projects: Iterable[DriverProject]) -> list[tuple[str, list[DriverProject]]]:
    """Group trips by date string, groups in ascending date order.

    Keys are ISO ``YYYY-MM-DD`` strings, so string order is date order.
    Trips keep their incoming order within a group.
    """
    groups: dict[str, list[DriverProject]] = defaultdict(list)
    for project in projects:
        groups[project.date.isoformat()].append(project)
    return [(key, groups[key]) for key in sorted(groups)]


def today_count(projects: Iterable[DriverProject], today: date) -> int:
    key = today.isoformat()
    return sum(1 for p in projects if p.date.isoformat() == key)


def total_earnings(projects: Iterable[DriverProject]) -> float:
    return sum(display_price(p) for p in projects)


def plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


# =========================================================================
# Action links
# =========================================================================
def call_link(phone: Optional[str]) -> Optional[str]:
    return f"tel:{phone}" if phone else None


def whatsapp_link(project: DriverProject, driver_name: str) -> Optional[str]:
    """Prefilled WhatsApp greeting to the client, or None without a phone."""
    digits = re.sub(r"\D", "", project.client_phone or "")
    if not digits:
        return None
    text = (
        f"Hello {project.client_name}, this is your driver {driver_name}. "
        f"I will be picking you up at {project.time.isoformat()} "
        f"from {project.pickup_location}."
    )
    return f"https://wa.me/{digits}?text={quote(text, safe='')}"


def navigate_link(location: str) -> str:
    return f"https://maps.google.com/maps?daddr={quote(location, safe='')}"


# =========================================================================
# View models
# =========================================================================
@dataclass
class TripDetails:
    """Content of an expanded trip card."""
    instructions: str
    date_label: str
    time_label: str
    vehicle: str
    fee_label: str
    # Full trip price, shown only when the driver's fee differs from it
    total_label: Optional[str]
    navigate_pickup: str
    navigate_dropoff: str


@dataclass
class TripCard:
    id: str
    urgency: Urgency
    price_label: str
    booking_label: Optional[str]
    time_label: str
    company_name: str
    client_name: str
    phone_label: str
    pickup_location: str
    dropoff_location: str
    passengers_label: str
    car_type_name: str
    call_link: Optional[str]
    whatsapp_link: Optional[str]
    expanded: bool = False
    details: Optional[TripDetails] = None


@dataclass
class DateGroup:
    date: str
    label: str
    count_label: str
    cards: list[TripCard] = field(default_factory=list)


@dataclass
class DashboardView:
    """Everything the dashboard screen shows."""
    driver_name: str
    driver_code: str
    status: str
    error: Optional[str]
    today_count: int
    earnings_label: str
    groups: list[DateGroup]
    last_updated_label: Optional[str]

    @property
    def is_empty(self) -> bool:
        return not self.groups


def build_details(project: DriverProject, today: date) -> TripDetails:
    price = display_price(project)
    total_label = None
    if project.driver_fee is not None and project.driver_fee != project.price:
        total_label = f"Total: {format_money(project.price)}"
    return TripDetails(
        instructions=project.description,
        date_label=date_label(project.date, today),
        time_label=time_label(project.time),
        vehicle=project.car_type_name,
        fee_label=f"Your Fee: {format_money(price)}",
        total_label=total_label,
        navigate_pickup=navigate_link(project.pickup_location),
        navigate_dropoff=navigate_link(project.dropoff_location),
    )


def build_card(
    project: DriverProject,
    driver_name: str,
    now: datetime,
    expanded: bool = False,
) -> TripCard:
    return TripCard(
        id=str(project.id),
        urgency=urgency_for(project, now),
        price_label=format_money(display_price(project)),
        booking_label=f"#{project.booking_id}" if project.booking_id else None,
        time_label=time_label(project.time),
        company_name=project.company_name,
        client_name=project.client_name,
        phone_label=project.client_phone or "No phone provided",
        pickup_location=project.pickup_location,
        dropoff_location=project.dropoff_location,
        passengers_label=plural(project.passengers, "passenger"),
        car_type_name=project.car_type_name,
        call_link=call_link(project.client_phone),
        whatsapp_link=whatsapp_link(project, driver_name),
        expanded=expanded,
        details=build_details(project, now.date()) if expanded else None,
    )


def build_dashboard_view(
    driver: DriverIdentity,
    projects: list[DriverProject],
    now: datetime,
    expanded: Optional[set] = None,
    status: str = "ready",
    error: Optional[str] = None,
    last_refresh: Optional[datetime] = None,
) -> DashboardView:
    """Assemble the dashboard for *driver* as of *now* (local time)."""
    expanded = expanded or set()
    today = now.date()
    groups = [
        DateGroup(
            date=key,
            label=date_label(trips[0].date, today),
            count_label=plural(len(trips), "trip"),
            cards=[
                build_card(p, driver.name, now, expanded=p.id in expanded)
                for p in trips
            ],
        )
        for key, trips in group_by_date(projects)
    ]
    return DashboardView(
        driver_name=driver.name,
        driver_code=driver.id,
        status=status,
        error=error,
        today_count=today_count(projects, today),
        earnings_label=format_money(total_earnings(projects), decimals=0),
        groups=groups,
        last_updated_label=last_refresh.strftime("%H:%M:%S") if last_refresh else None,
    )
