"""
Domain services for the HR self-service portal.
This module exports all domain services for complex business logic.
"""

from .entry_aggregator import EntryAggregator, WindowKind, CalendarView, CalendarDay, CalendarTotals
from .moderation_service import ModerationService
from .auth_service import AuthService
from .file_storage import FileStorage, RECEIPT_CONTENT_TYPES

__all__ = [
    "EntryAggregator",
    "WindowKind",
    "CalendarView",
    "CalendarDay",
    "CalendarTotals",
    "ModerationService",
    "AuthService",
    "FileStorage",
    "RECEIPT_CONTENT_TYPES",
]
