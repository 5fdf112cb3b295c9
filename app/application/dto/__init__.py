"""
Application layer DTOs.
Data Transfer Objects for API requests and responses.
"""

from .base_dto import *
from .entry_dto import *
from .user_dto import *
from .stats_dto import *
from .upload_dto import *

__all__ = [
    # Base DTOs
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "HealthCheckResponseDTO",
    "ErrorResponseDTO",
    "FieldErrorDTO",
    "field_errors_from_pydantic",

    # Entry DTOs
    "CreateEntryRequestDTO",
    "CreateWorkHoursRequestDTO",
    "CreateExpenseRequestDTO",
    "CreateVacationRequestDTO",
    "CreateTravelRequestDTO",
    "ListEntriesRequestDTO",
    "CalendarRequestDTO",
    "ReviewEntriesRequestDTO",
    "EntryStatusUpdateDTO",
    "ModerateEntryRequestDTO",
    "EntryResponseDTO",
    "WorkHoursEntryResponseDTO",
    "ExpenseEntryResponseDTO",
    "VacationEntryResponseDTO",
    "TravelEntryResponseDTO",
    "EntryListResponseDTO",
    "CalendarDayDTO",
    "CalendarTotalsDTO",
    "CalendarResponseDTO",
    "entry_to_response",

    # User DTOs
    "RegisterRequestDTO",
    "LoginRequestDTO",
    "ListUsersRequestDTO",
    "DeleteUserRequestDTO",
    "UserResponseDTO",
    "UserListResponseDTO",
    "AuthResponseDTO",

    # Stats DTOs
    "StatsRequestDTO",
    "UserStatsDTO",
    "EntryStatsDTO",
    "MonthTotalsDTO",
    "StatsResponseDTO",

    # Upload DTOs
    "UploadReceiptRequestDTO",
    "UploadResponseDTO",
]
