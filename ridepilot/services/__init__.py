"""Business logic for the driver portal."""
