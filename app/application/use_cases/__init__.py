"""
Application layer use cases.
Business logic for the HR self-service portal.
"""

from .base_use_case import *
from .entry_use_cases import *
from .user_use_cases import *
from .stats_use_cases import *
from .upload_use_cases import *

__all__ = [
    # Base Use Cases
    "BaseUseCase",
    "QueryUseCase",
    "CommandUseCase",
    "AuthorizedUseCase",

    # Entry Use Cases
    "SubmitEntryUseCase",
    "ListOwnEntriesUseCase",
    "GetCalendarUseCase",
    "ListEntriesForReviewUseCase",
    "ModerateEntryUseCase",

    # User Use Cases
    "RegisterUserUseCase",
    "AuthenticateUserUseCase",
    "GetCurrentUserUseCase",
    "ListUsersUseCase",
    "DeleteUserUseCase",

    # Stats and uploads
    "MonthlyStatsUseCase",
    "UploadReceiptUseCase",
]
