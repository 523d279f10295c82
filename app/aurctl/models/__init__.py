"""Data models for aurctl.

This module exports the core data structures used throughout the application.
"""

from aurctl.models.package import OutdatedEntry, PackageRecord

__all__ = [
    "OutdatedEntry",
    "PackageRecord",
]
