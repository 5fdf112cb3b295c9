"""
Infrastructure repositories module.
Contains SQLAlchemy and in-memory implementations of domain repositories.
"""

from .user_repository import SQLAlchemyUserRepository
from .entry_repository import SQLAlchemyEntryRepository
from .memory import InMemoryStore, InMemoryUserRepository, InMemoryEntryRepository

__all__ = [
    "SQLAlchemyUserRepository",
    "SQLAlchemyEntryRepository",
    "InMemoryStore",
    "InMemoryUserRepository",
    "InMemoryEntryRepository",
]
