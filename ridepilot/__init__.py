"""RidePilot driver portal: driver-facing API and portal client."""
