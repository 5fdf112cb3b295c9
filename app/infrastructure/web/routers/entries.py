"""
Entry router.
Submission and listing of the caller's own entries, plus the calendar view.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Query, status

from app.application.dto.entry_dto import (
    CalendarRequestDTO,
    CalendarResponseDTO,
    CreateEntryRequestDTO,
    CreateExpenseRequestDTO,
    CreateTravelRequestDTO,
    CreateVacationRequestDTO,
    CreateWorkHoursRequestDTO,
    EntryListResponseDTO,
    EntryResponseDTO,
    ListEntriesRequestDTO
)
from app.application.use_cases.entry_use_cases import (
    GetCalendarUseCase,
    ListOwnEntriesUseCase,
    SubmitEntryUseCase
)
from app.domain.models.entry import EntryType
from app.domain.services.entry_aggregator import WindowKind
from app.domain.models.user import Principal
from app.infrastructure.auth.dependencies import AppContainer, CurrentPrincipal
from app.infrastructure.container import Container


router = APIRouter()


async def _submit(request: CreateEntryRequestDTO, principal: Principal, container: Container):
    use_case = SubmitEntryUseCase(container.entry_repository, container.user_repository)
    return await use_case.execute(request, principal)


@router.get("", response_model=EntryListResponseDTO)
async def list_entries(
    principal: CurrentPrincipal,
    container: AppContainer,
    type: Optional[EntryType] = Query(None, description="Filter by entry type"),
    start_date: Optional[date] = Query(None, description="Window start (inclusive)"),
    end_date: Optional[date] = Query(None, description="Window end (inclusive)")
):
    """
    List the caller's entries, newest first.

    Vacations are included when any of their days falls inside the window.
    """
    use_case = ListOwnEntriesUseCase(container.entry_repository)
    request = ListEntriesRequestDTO(type=type, start_date=start_date, end_date=end_date)
    return await use_case.execute(request, principal)


@router.get("/calendar", response_model=CalendarResponseDTO)
async def get_calendar(
    principal: CurrentPrincipal,
    container: AppContainer,
    view: WindowKind = Query(WindowKind.MONTH, description="month or week"),
    day: Optional[date] = Query(None, alias="date", description="Any day inside the window; today if omitted")
):
    """
    Get a month or week of the caller's entries binned by day, with totals.
    """
    use_case = GetCalendarUseCase(container.entry_repository, container.aggregator)
    return await use_case.execute(CalendarRequestDTO(view=view, date=day), principal)


@router.post("/hours", status_code=status.HTTP_201_CREATED, response_model=EntryResponseDTO)
async def submit_hours(request: CreateWorkHoursRequestDTO, principal: CurrentPrincipal, container: AppContainer):
    """
    Submit hours worked on a day.

    - **date**: Day worked
    - **hours_worked**: More than 0, at most 24
    - **description**: Optional notes
    """
    return await _submit(request, principal, container)


@router.post("/expenses", status_code=status.HTTP_201_CREATED, response_model=EntryResponseDTO)
async def submit_expense(request: CreateExpenseRequestDTO, principal: CurrentPrincipal, container: AppContainer):
    """
    Submit an expense.

    - **date**: Day of the expense
    - **amount**: Positive amount
    - **category**: Expense category
    - **receipt_url**: Optional URL returned by the receipt upload endpoint
    """
    return await _submit(request, principal, container)


@router.post("/vacation", status_code=status.HTTP_201_CREATED, response_model=EntryResponseDTO)
async def submit_vacation(request: CreateVacationRequestDTO, principal: CurrentPrincipal, container: AppContainer):
    """
    Request vacation.

    - **start_date** / **end_date**: Inclusive range; end may not precede start
    - **days**: Number of days requested
    """
    return await _submit(request, principal, container)


@router.post("/travel", status_code=status.HTTP_201_CREATED, response_model=EntryResponseDTO)
async def submit_travel(request: CreateTravelRequestDTO, principal: CurrentPrincipal, container: AppContainer):
    """
    Log a business trip.

    - **travel_date**: Day of travel
    - **from_location** / **to_location**: Origin and destination
    - **distance_km**: Positive distance
    """
    return await _submit(request, principal, container)
