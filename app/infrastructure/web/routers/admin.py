"""
Administration router.
Review queue, moderation, user management and dashboard statistics.
Every route requires the ADMIN role.
"""

from typing import Optional

from fastapi import APIRouter, Query, Response, status

from app.application.dto.entry_dto import (
    EntryListResponseDTO,
    EntryResponseDTO,
    EntryStatusUpdateDTO,
    ModerateEntryRequestDTO,
    ReviewEntriesRequestDTO
)
from app.application.dto.stats_dto import StatsRequestDTO, StatsResponseDTO
from app.application.dto.user_dto import (
    DeleteUserRequestDTO,
    ListUsersRequestDTO,
    UserListResponseDTO
)
from app.application.use_cases.entry_use_cases import (
    ListEntriesForReviewUseCase,
    ModerateEntryUseCase
)
from app.application.use_cases.stats_use_cases import MonthlyStatsUseCase
from app.application.use_cases.user_use_cases import DeleteUserUseCase, ListUsersUseCase
from app.domain.models.entry import EntryStatus, EntryType
from app.domain.models.user import UserRole
from app.infrastructure.auth.dependencies import AdminPrincipal, AppContainer


router = APIRouter()


@router.get("/entries", response_model=EntryListResponseDTO)
async def list_entries_for_review(
    principal: AdminPrincipal,
    container: AppContainer,
    status: Optional[EntryStatus] = Query(None, description="Filter by status"),
    type: Optional[EntryType] = Query(None, description="Filter by entry type"),
    user_id: Optional[str] = Query(None, description="Filter by owner")
):
    """
    List entries of every user, newest submissions first.
    """
    use_case = ListEntriesForReviewUseCase(container.entry_repository, container.user_repository)
    request = ReviewEntriesRequestDTO(status=status, type=type, user_id=user_id)
    return await use_case.execute(request, principal)


@router.patch("/entries/{entry_id}/status", response_model=EntryResponseDTO)
async def moderate_entry(
    entry_id: str,
    request: EntryStatusUpdateDTO,
    principal: AdminPrincipal,
    container: AppContainer
):
    """
    Approve or reject a pending entry.

    - **status**: APPROVED or REJECTED

    Entries that are no longer PENDING are refused with 409.
    """
    use_case = ModerateEntryUseCase(container.entry_repository, container.moderation_service)
    moderation = ModerateEntryRequestDTO(entry_id=entry_id, status=request.status)
    return await use_case.execute(moderation, principal)


@router.get("/users", response_model=UserListResponseDTO)
async def list_users(
    principal: AdminPrincipal,
    container: AppContainer,
    role: Optional[UserRole] = Query(None, description="Filter by role")
):
    """List users with their entry counts, newest first."""
    use_case = ListUsersUseCase(container.user_repository)
    return await use_case.execute(ListUsersRequestDTO(role=role), principal)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: str, principal: AdminPrincipal, container: AppContainer):
    """
    Delete a user and every entry they submitted.
    Administrators cannot delete their own account.
    """
    use_case = DeleteUserUseCase(container.user_repository)
    await use_case.execute(DeleteUserRequestDTO(user_id=user_id), principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/stats", response_model=StatsResponseDTO)
async def get_stats(principal: AdminPrincipal, container: AppContainer):
    """
    Dashboard statistics for the current month.
    """
    use_case = MonthlyStatsUseCase(container.entry_repository, container.user_repository, container.aggregator)
    return await use_case.execute(StatsRequestDTO(), principal)
