"""
Plain-text rendering of the dashboard for the terminal front end.
"""
from ridepilot.portal.presentation import DashboardView, TripCard

# Color output
RED = "\033[91m"
ORANGE = "\033[93m"
BLUE = "\033[94m"
GRAY = "\033[90m"
GREEN = "\033[92m"
RESET = "\033[0m"

URGENCY_COLORS = {"red": RED, "orange": ORANGE, "blue": BLUE, "gray": GRAY}


def render_card(card: TripCard, color: bool = True) -> list[str]:
    badge = card.urgency.message
    if color:
        badge = f"{URGENCY_COLORS.get(card.urgency.color, '')}{badge}{RESET}"

    header = f"  [{badge}] {card.time_label}  {card.price_label}"
    if card.booking_label:
        header += f"  {card.booking_label}"

    lines = [
        header,
        f"    {card.client_name} ({card.phone_label}) - {card.company_name}",
        f"    PICKUP:  {card.pickup_location}",
        f"    DROPOFF: {card.dropoff_location}",
        f"    {card.passengers_label}, {card.car_type_name}",
    ]
    if card.call_link:
        lines.append(f"    Call: {card.call_link}")
    if card.whatsapp_link:
        lines.append(f"    WhatsApp: {card.whatsapp_link}")

    details = card.details
    if details is not None:
        if details.instructions:
            lines.append(f"    Special Instructions: {details.instructions}")
        lines.append(f"    Date: {details.date_label}  Time: {details.time_label}  Vehicle: {details.vehicle}")
        fee = details.fee_label
        if details.total_label:
            fee += f" ({details.total_label})"
        lines.append(f"    {fee}")
        lines.append(f"    Navigate to Pickup: {details.navigate_pickup}")
        lines.append(f"    Navigate to Dropoff: {details.navigate_dropoff}")
    return lines


def render_dashboard(view: DashboardView, color: bool = True) -> str:
    """Render *view* as a block of text."""
    lines = [
        f"Welcome, {view.driver_name}",
        f"Driver ID: {view.driver_code}",
        "",
    ]

    if view.status == "loading":
        lines.append("Loading your trips...")
        return "\n".join(lines)

    if view.error:
        error = f"{RED}{view.error}{RESET}" if color else view.error
        lines.extend([f"! {error}", ""])

    lines.append(f"Today's Trips: {view.today_count}    Total Earnings: {view.earnings_label}")
    lines.append("")

    if view.is_empty:
        lines.append("No trips assigned")
        lines.append("Check back later for new assignments")
    for group in view.groups:
        lines.append(f"{group.label} ({group.count_label})")
        for card in group.cards:
            lines.extend(render_card(card, color=color))
        lines.append("")

    if view.last_updated_label:
        lines.append(f"Last updated: {view.last_updated_label}")
    return "\n".join(lines)
