"""
Infrastructure mappers module.
Contains mappers for converting between domain entities and database models.
"""

from .user_mapper import UserMapper
from .entry_mapper import EntryMapper

__all__ = [
    "UserMapper",
    "EntryMapper",
]
