"""API v1 router aggregation and health endpoints."""
