"""Repositories - export only."""

from .impl import LicenseRepository

__all__ = ["LicenseRepository"]
