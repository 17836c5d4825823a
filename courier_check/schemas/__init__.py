"""Pydantic schemas package."""

from .courier_schema import (
    CourierCheckRequest,
    HealthResponse,
    PathaoStats,
    RedxStats,
    SteadfastStats,
)

__all__ = ["CourierCheckRequest", "HealthResponse", "PathaoStats", "RedxStats", "SteadfastStats"]
