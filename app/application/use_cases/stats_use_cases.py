"""
Dashboard statistics use case.
"""

from typing import Optional

from app.application.use_cases.base_use_case import AuthorizedUseCase, QueryUseCase
from app.application.dto.stats_dto import (
    StatsRequestDTO, StatsResponseDTO, UserStatsDTO, EntryStatsDTO, MonthTotalsDTO
)
from app.domain.models.entry import EntryStatus
from app.domain.models.user import Principal, UserRole
from app.domain.repositories.entry_repository import EntryFilter, EntryRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.services.entry_aggregator import EntryAggregator, WindowKind


class MonthlyStatsUseCase(AuthorizedUseCase, QueryUseCase[StatsRequestDTO, StatsResponseDTO]):
    """
    Use case for the admin dashboard.

    "Approved this month" counts approved entries created in the month; the
    hour and expense totals cover approved entries dated in the month.
    """

    required_role = UserRole.ADMIN

    def __init__(
        self,
        entry_repository: EntryRepository,
        user_repository: UserRepository,
        aggregator: Optional[EntryAggregator] = None
    ):
        super().__init__()
        self.entry_repository = entry_repository
        self.user_repository = user_repository
        self.aggregator = aggregator or EntryAggregator()

    async def _execute_business_logic(self, request: StatsRequestDTO, principal: Principal) -> StatsResponseDTO:
        month = self.aggregator.date_window(WindowKind.MONTH, request.today)

        role_counts = await self.user_repository.count_by_role()
        pending = await self.entry_repository.count(EntryFilter(status=EntryStatus.PENDING))
        approved_this_month = await self.entry_repository.count(EntryFilter(
            status=EntryStatus.APPROVED,
            created_range=month
        ))

        approved_in_month = await self.entry_repository.find_entries(EntryFilter(
            status=EntryStatus.APPROVED,
            date_range=month
        ))

        return StatsResponseDTO(
            period_start=month.start,
            period_end=month.end,
            users=UserStatsDTO(
                total=sum(role_counts.values()),
                admin=role_counts.get(UserRole.ADMIN, 0),
                employee=role_counts.get(UserRole.EMPLOYEE, 0),
                volunteer=role_counts.get(UserRole.VOLUNTEER, 0)
            ),
            entries=EntryStatsDTO(
                pending=pending,
                approved_this_month=approved_this_month
            ),
            this_month=MonthTotalsDTO(
                total_hours=self.aggregator.sum_hours(approved_in_month),
                total_expenses=self.aggregator.sum_expenses(approved_in_month)
            )
        )
