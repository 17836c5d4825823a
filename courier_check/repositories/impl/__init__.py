"""Repositories implementation package."""

from .license_repository import LicenseRepository

__all__ = ["LicenseRepository"]
