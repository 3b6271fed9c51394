"""
Terminal front end for the driver portal.

Usage:
    # Magic link
    python -m ridepilot.portal --base-url https://portal.example.com \
        --url "https://portal.example.com/driver?token=abc123"

    # PIN login, print once and exit
    python -m ridepilot.portal --base-url https://portal.example.com \
        --driver-id D100 --pin 1234 --once
"""
import argparse
import asyncio
import sys
from typing import Optional

from ridepilot.portal.api_client import DriverPortalClient
from ridepilot.portal.dashboard import DashboardController, DashboardStatus
from ridepilot.portal.render import render_dashboard
from ridepilot.portal.shell import PortalShell, Screen, token_from_url


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ridepilot.portal",
        description="Show a driver's assigned trips.",
    )
    parser.add_argument("--base-url", required=True, help="Portal API base URL")
    parser.add_argument("--url", help="Dashboard link carrying a ?token= parameter")
    parser.add_argument("--driver-id", help="Driver ID for PIN login")
    parser.add_argument("--pin", help="PIN for PIN login")
    parser.add_argument("--once", action="store_true", help="Fetch once and exit")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    color = not args.no_color

    def show(dashboard: DashboardController) -> None:
        print(render_dashboard(dashboard.view(), color=color), flush=True)

    async with DriverPortalClient(args.base_url) as client:
        shell = PortalShell(client, autostart=False)
        await shell.resolve(token_from_url(args.url) if args.url else None)

        if shell.screen is Screen.LOGIN:
            if not (args.driver_id and args.pin):
                print("Sign in with --driver-id and --pin, or pass a token link with --url.", file=sys.stderr)
                return 1
            if not await shell.login(args.driver_id, args.pin):
                print(shell.login_error, file=sys.stderr)
                return 1

        dashboard = shell.dashboard
        dashboard.on_update = show

        if args.once:
            await dashboard.refresh()
            return 0 if dashboard.status is DashboardStatus.READY else 1

        dashboard.start()
        try:
            await asyncio.Event().wait()
        finally:
            await shell.logout()
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
