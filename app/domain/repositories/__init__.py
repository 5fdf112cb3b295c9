"""
Repository interfaces for the domain layer.
This module exports all repository interfaces (ports) for dependency injection.
"""

from .entry_repository import EntryRepository, EntryFilter
from .user_repository import UserRepository

__all__ = [
    "EntryRepository",
    "EntryFilter",
    "UserRepository",
]
