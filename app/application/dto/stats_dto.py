"""
Dashboard statistics DTOs.
"""

from datetime import date, datetime
from pydantic import Field

from .base_dto import BaseDTO, RequestDTO


class StatsRequestDTO(RequestDTO):
    """DTO for the admin dashboard statistics."""

    today: date = Field(default_factory=date.today, description="Day whose month is reported")


class UserStatsDTO(BaseDTO):
    total: int = 0
    admin: int = 0
    employee: int = 0
    volunteer: int = 0


class EntryStatsDTO(BaseDTO):
    pending: int = Field(default=0, description="Entries awaiting review")
    approved_this_month: int = Field(default=0, description="Approved entries created this month")


class MonthTotalsDTO(BaseDTO):
    total_hours: float = Field(default=0.0, description="Approved hours dated this month")
    total_expenses: float = Field(default=0.0, description="Approved expenses dated this month")


class StatsResponseDTO(BaseDTO):
    """Admin dashboard statistics for one month."""

    period_start: date = Field(description="First day of the month")
    period_end: date = Field(description="Last day of the month")
    users: UserStatsDTO
    entries: EntryStatsDTO
    this_month: MonthTotalsDTO
    generated_at: datetime = Field(default_factory=datetime.utcnow, description="When stats were generated")
