"""Driver API endpoints."""
