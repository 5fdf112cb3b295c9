"""
Entry use cases for the application layer.
Implements submission, listing, calendar and moderation of entries.
"""

import logging
from datetime import date
from typing import Dict, Optional

from app.application.use_cases.base_use_case import (
    AuthorizedUseCase, CommandUseCase, QueryUseCase
)
from app.application.dto.entry_dto import (
    CreateEntryRequestDTO, ListEntriesRequestDTO, CalendarRequestDTO,
    ReviewEntriesRequestDTO, ModerateEntryRequestDTO, EntryListResponseDTO,
    CalendarResponseDTO, EntryResponseDTO, entry_to_response
)
from app.domain.models.base import AuthenticationError, DateWindow, EntityNotFoundError
from app.domain.models.entry import EntryStatus, EntryType
from app.domain.models.user import Principal, UserRole
from app.domain.repositories.entry_repository import EntryFilter, EntryRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.services.entry_aggregator import EntryAggregator, WindowKind
from app.domain.services.moderation_service import ModerationService

logger = logging.getLogger(__name__)


class SubmitEntryUseCase(AuthorizedUseCase, CommandUseCase[CreateEntryRequestDTO, EntryResponseDTO]):
    """Use case for submitting an entry of any variant for review."""

    def __init__(self, entry_repository: EntryRepository, user_repository: UserRepository):
        super().__init__()
        self.entry_repository = entry_repository
        self.user_repository = user_repository

    async def _execute_command_logic(self, request: CreateEntryRequestDTO, principal: Principal):
        # The owner must still exist; a token can outlive its user
        owner = await self.user_repository.find_by_id(principal.user_id)
        if owner is None:
            raise AuthenticationError("User no longer exists")

        entry = request.to_domain(principal.user_id)
        entry.prepare_submission(principal.user_id)
        entry.validate()

        saved_entry = await self.entry_repository.save(entry)
        saved_entry.mark_submitted()
        self._collect_events(saved_entry)

        logger.info(
            f"Entry {saved_entry.id} ({saved_entry.entry_type.value}) submitted by {principal.user_id}"
        )
        return entry_to_response(saved_entry)


class ListOwnEntriesUseCase(AuthorizedUseCase, QueryUseCase[ListEntriesRequestDTO, EntryListResponseDTO]):
    """
    Use case for listing the caller's own entries.
    A vacation is included when any day of it falls inside the requested window.
    """

    def __init__(self, entry_repository: EntryRepository):
        super().__init__()
        self.entry_repository = entry_repository

    async def _execute_business_logic(
        self, request: ListEntriesRequestDTO, principal: Principal
    ) -> EntryListResponseDTO:
        date_range = None
        if request.start_date is not None or request.end_date is not None:
            date_range = DateWindow(request.start_date or date.min, request.end_date or date.max)

        entries = await self.entry_repository.find_entries(EntryFilter(
            owner_id=principal.user_id,
            entry_type=EntryType(request.type) if request.type else None,
            date_range=date_range
        ))

        return EntryListResponseDTO(
            entries=[entry_to_response(entry) for entry in entries],
            total=len(entries)
        )


class GetCalendarUseCase(AuthorizedUseCase, QueryUseCase[CalendarRequestDTO, CalendarResponseDTO]):
    """Use case for a month or week calendar of the caller's entries."""

    def __init__(self, entry_repository: EntryRepository, aggregator: Optional[EntryAggregator] = None):
        super().__init__()
        self.entry_repository = entry_repository
        self.aggregator = aggregator or EntryAggregator()

    async def _execute_business_logic(
        self, request: CalendarRequestDTO, principal: Principal
    ) -> CalendarResponseDTO:
        kind = WindowKind(request.view)
        reference = request.date or date.today()
        window = self.aggregator.date_window(kind, reference)

        entries = await self.entry_repository.find_entries(EntryFilter(
            owner_id=principal.user_id,
            date_range=window
        ))

        view = self.aggregator.build_calendar(entries, window)
        return CalendarResponseDTO.from_view(view, kind, reference, self.aggregator)


class ListEntriesForReviewUseCase(AuthorizedUseCase, QueryUseCase[ReviewEntriesRequestDTO, EntryListResponseDTO]):
    """Use case for the admin review queue, newest submissions first."""

    required_role = UserRole.ADMIN

    def __init__(self, entry_repository: EntryRepository, user_repository: UserRepository):
        super().__init__()
        self.entry_repository = entry_repository
        self.user_repository = user_repository

    async def _execute_business_logic(
        self, request: ReviewEntriesRequestDTO, principal: Principal
    ) -> EntryListResponseDTO:
        entries = await self.entry_repository.find_entries(EntryFilter(
            owner_id=request.user_id,
            entry_type=EntryType(request.type) if request.type else None,
            status=EntryStatus(request.status) if request.status else None
        ))
        entries = sorted(entries, key=lambda entry: entry.created_at, reverse=True)

        owner_names = await self._owner_names()
        return EntryListResponseDTO(
            entries=[entry_to_response(entry, owner_names.get(entry.owner_id)) for entry in entries],
            total=len(entries)
        )

    async def _owner_names(self) -> Dict[str, str]:
        users = await self.user_repository.find_all()
        return {user.id: user.display_name for user in users}


class ModerateEntryUseCase(CommandUseCase[ModerateEntryRequestDTO, EntryResponseDTO]):
    """
    Use case for approving or rejecting an entry.

    The decision is applied to the loaded entry by the moderation service and
    then written with a conditional update, so an entry decided concurrently
    by another admin is refused with InvalidStateError.
    """

    def __init__(self, entry_repository: EntryRepository, moderation_service: Optional[ModerationService] = None):
        super().__init__()
        self.entry_repository = entry_repository
        self.moderation_service = moderation_service or ModerationService()

    async def _execute_command_logic(self, request: ModerateEntryRequestDTO, principal: Optional[Principal]):
        self.moderation_service.ensure_can_moderate(principal)

        entry = await self.entry_repository.find_by_id(request.entry_id)
        if entry is None:
            raise EntityNotFoundError("Entry", request.entry_id)

        self.moderation_service.decide(entry, EntryStatus(request.status), principal)

        updated_entry = await self.entry_repository.update_status(
            entry.id,
            entry.status,
            expected_status=EntryStatus.PENDING,
            reviewed_by=entry.reviewed_by,
            reviewed_at=entry.reviewed_at
        )
        self._collect_events(entry)

        logger.info(f"Entry {entry.id} {updated_entry.status.value} by {principal.user_id}")
        return entry_to_response(updated_entry)

