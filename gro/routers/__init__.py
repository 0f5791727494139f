"""Routers subpackage: HTTP layer for all API endpoints."""

from gro.routers import points, records, transform

__all__ = ["points", "records", "transform"]
