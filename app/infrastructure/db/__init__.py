"""
Database infrastructure for the HR portal.
"""

from .database import (
    Base,
    create_db_engine,
    create_session_factory,
    create_all_tables,
    drop_all_tables,
    session_scope
)
from .models import UserModel, EntryModel

__all__ = [
    "Base",
    "create_db_engine",
    "create_session_factory",
    "create_all_tables",
    "drop_all_tables",
    "session_scope",
    "UserModel",
    "EntryModel",
]
