"""
Entry DTOs for the application layer.
Data Transfer Objects for entry submission, listing, calendar and moderation.
"""

import datetime as dt
from abc import abstractmethod
from typing import Annotated, Optional, List, Union, Literal
from pydantic import Field, field_validator

from .base_dto import BaseDTO, RequestDTO, ResponseDTO
from app.domain.models.entry import (
    Entry,
    EntryStatus,
    EntryType,
    WorkHoursEntry,
    ExpenseEntry,
    VacationEntry,
    TravelEntry,
    MAX_HOURS_PER_DAY,
    MAX_DESCRIPTION_LENGTH
)
from app.domain.services.entry_aggregator import CalendarView, EntryAggregator, WindowKind


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        return None
    return value


# Request DTOs
class CreateEntryRequestDTO(RequestDTO):
    """Fields shared by every entry submission."""

    description: Optional[str] = Field(
        default=None, max_length=MAX_DESCRIPTION_LENGTH, description="Free-text description"
    )

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return _blank_to_none(v)

    @abstractmethod
    def to_domain(self, owner_id: str) -> Entry:
        """Build the unsaved domain entity owned by ``owner_id``."""
        pass


class CreateWorkHoursRequestDTO(CreateEntryRequestDTO):
    """DTO for submitting hours worked on a day."""

    date: dt.date = Field(description="Day the hours were worked")
    hours_worked: float = Field(gt=0, le=MAX_HOURS_PER_DAY, description="Hours worked (0-24)")

    def to_domain(self, owner_id: str) -> WorkHoursEntry:
        return WorkHoursEntry(
            owner_id=owner_id,
            description=self.description,
            date=self.date,
            hours_worked=self.hours_worked
        )


class CreateExpenseRequestDTO(CreateEntryRequestDTO):
    """DTO for submitting an expense."""

    date: dt.date = Field(description="Day the expense was incurred")
    amount: float = Field(gt=0, description="Amount spent")
    category: str = Field(min_length=1, max_length=100, description="Expense category")
    receipt_url: Optional[str] = Field(
        default=None, max_length=500, description="Reference returned by the receipt upload endpoint"
    )

    @field_validator("category")
    @classmethod
    def validate_category(cls, v):
        if not v.strip():
            raise ValueError("Category is required")
        return v.strip()

    @field_validator("receipt_url")
    @classmethod
    def validate_receipt_url(cls, v):
        return _blank_to_none(v)

    def to_domain(self, owner_id: str) -> ExpenseEntry:
        return ExpenseEntry(
            owner_id=owner_id,
            description=self.description,
            date=self.date,
            amount=self.amount,
            category=self.category,
            receipt_ref=self.receipt_url
        )


class CreateVacationRequestDTO(CreateEntryRequestDTO):
    """
    DTO for requesting vacation.
    The start/end ordering is checked by the domain so it reports INVALID_RANGE.
    """

    start_date: dt.date = Field(description="First day of vacation")
    end_date: dt.date = Field(description="Last day of vacation (inclusive)")
    days: int = Field(gt=0, description="Number of vacation days requested")

    def to_domain(self, owner_id: str) -> VacationEntry:
        return VacationEntry(
            owner_id=owner_id,
            description=self.description,
            start_date=self.start_date,
            end_date=self.end_date,
            days=self.days
        )


class CreateTravelRequestDTO(CreateEntryRequestDTO):
    """DTO for logging a business trip."""

    travel_date: dt.date = Field(description="Day of travel")
    from_location: str = Field(min_length=1, max_length=255, description="Origin")
    to_location: str = Field(min_length=1, max_length=255, description="Destination")
    distance_km: float = Field(gt=0, description="Distance travelled in kilometres")

    @field_validator("from_location", "to_location")
    @classmethod
    def validate_location(cls, v):
        if not v.strip():
            raise ValueError("Location is required")
        return v.strip()

    def to_domain(self, owner_id: str) -> TravelEntry:
        return TravelEntry(
            owner_id=owner_id,
            description=self.description,
            travel_date=self.travel_date,
            from_location=self.from_location,
            to_location=self.to_location,
            distance_km=self.distance_km
        )


class ListEntriesRequestDTO(RequestDTO):
    """DTO for listing the caller's own entries."""

    type: Optional[EntryType] = Field(default=None, description="Only entries of this type")
    start_date: Optional[dt.date] = Field(default=None, description="Window start (inclusive)")
    end_date: Optional[dt.date] = Field(default=None, description="Window end (inclusive)")


class CalendarRequestDTO(RequestDTO):
    """DTO for a calendar window of the caller's entries."""

    view: WindowKind = Field(default=WindowKind.MONTH, description="Window size: month or week")
    date: Optional[dt.date] = Field(default=None, description="Any day inside the window; today if omitted")


class ReviewEntriesRequestDTO(RequestDTO):
    """DTO for the admin review queue."""

    status: Optional[EntryStatus] = Field(default=None, description="Filter by status")
    type: Optional[EntryType] = Field(default=None, description="Filter by entry type")
    user_id: Optional[str] = Field(default=None, description="Filter by owner")


class EntryStatusUpdateDTO(RequestDTO):
    """Body of a moderation request."""

    status: EntryStatus = Field(description="APPROVED or REJECTED")

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        if EntryStatus(v) == EntryStatus.PENDING:
            raise ValueError("Status must be APPROVED or REJECTED")
        return v


class ModerateEntryRequestDTO(RequestDTO):
    """DTO for a moderation decision on one entry."""

    entry_id: str = Field(min_length=1, description="Entry to moderate")
    status: EntryStatus = Field(description="APPROVED or REJECTED")


# Response DTOs
class EntryResponseBaseDTO(ResponseDTO):
    """Envelope fields common to every entry response."""

    owner_id: str = Field(description="Owning user")
    status: EntryStatus = Field(description="Moderation status")
    description: Optional[str] = None
    reviewed_by: Optional[str] = Field(default=None, description="Admin who decided the entry")
    reviewed_at: Optional[dt.datetime] = Field(default=None, description="When the entry was decided")
    owner_name: Optional[str] = Field(default=None, description="Owner display name (admin listings)")


class WorkHoursEntryResponseDTO(EntryResponseBaseDTO):
    type: Literal["WORK_HOURS"] = "WORK_HOURS"
    date: Optional[dt.date] = None
    hours_worked: Optional[float] = None


class ExpenseEntryResponseDTO(EntryResponseBaseDTO):
    type: Literal["EXPENSE"] = "EXPENSE"
    date: Optional[dt.date] = None
    amount: Optional[float] = None
    category: Optional[str] = None
    receipt_url: Optional[str] = None


class VacationEntryResponseDTO(EntryResponseBaseDTO):
    type: Literal["VACATION"] = "VACATION"
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    days: Optional[int] = None


class TravelEntryResponseDTO(EntryResponseBaseDTO):
    type: Literal["TRAVEL"] = "TRAVEL"
    travel_date: Optional[dt.date] = None
    from_location: Optional[str] = None
    to_location: Optional[str] = None
    distance_km: Optional[float] = None


EntryResponseDTO = Annotated[
    Union[
        WorkHoursEntryResponseDTO,
        ExpenseEntryResponseDTO,
        VacationEntryResponseDTO,
        TravelEntryResponseDTO
    ],
    Field(discriminator="type")
]


def entry_to_response(entry: Entry, owner_name: Optional[str] = None):
    """Convert an entry of any variant to its response DTO."""
    common = dict(
        id=entry.id,
        created_at=entry.created_at,
        owner_id=entry.owner_id,
        status=entry.status,
        description=entry.description,
        reviewed_by=entry.reviewed_by,
        reviewed_at=entry.reviewed_at,
        owner_name=owner_name
    )

    if isinstance(entry, WorkHoursEntry):
        return WorkHoursEntryResponseDTO(date=entry.date, hours_worked=entry.hours_worked, **common)
    if isinstance(entry, ExpenseEntry):
        return ExpenseEntryResponseDTO(
            date=entry.date,
            amount=entry.amount,
            category=entry.category,
            receipt_url=entry.receipt_ref,
            **common
        )
    if isinstance(entry, VacationEntry):
        return VacationEntryResponseDTO(
            start_date=entry.start_date,
            end_date=entry.end_date,
            days=entry.days,
            **common
        )
    if isinstance(entry, TravelEntry):
        return TravelEntryResponseDTO(
            travel_date=entry.travel_date,
            from_location=entry.from_location,
            to_location=entry.to_location,
            distance_km=entry.distance_km,
            **common
        )
    raise TypeError(f"Unsupported entry class: {type(entry).__name__}")


class EntryListResponseDTO(BaseDTO):
    """List of entries."""

    entries: List[EntryResponseDTO] = Field(default_factory=list)
    total: int = Field(description="Number of entries returned")


class CalendarDayDTO(BaseDTO):
    """One day cell of a calendar window."""

    date: dt.date
    entries: List[EntryResponseDTO] = Field(default_factory=list)
    entry_types: List[EntryType] = Field(default_factory=list)
    labels: List[str] = Field(default_factory=list, description="Short per-entry labels (8h, $20, 3d, 12km)")


class CalendarTotalsDTO(BaseDTO):
    """Totals over the entries fetched for a window."""

    total_hours: float = 0.0
    total_expenses: float = 0.0
    total_vacation_days: int = 0
    entry_count: int = 0


class CalendarResponseDTO(BaseDTO):
    """Calendar window with per-day bins and totals."""

    view: WindowKind
    reference_date: dt.date
    start_date: dt.date
    end_date: dt.date
    previous_date: dt.date = Field(description="Reference day of the previous window")
    next_date: dt.date = Field(description="Reference day of the next window")
    days: List[CalendarDayDTO]
    totals: CalendarTotalsDTO

    @classmethod
    def from_view(
        cls,
        view: CalendarView,
        kind: WindowKind,
        reference: dt.date,
        aggregator: EntryAggregator
    ) -> "CalendarResponseDTO":
        """Build the response from an aggregated calendar view."""
        return cls(
            view=kind,
            reference_date=reference,
            start_date=view.window.start,
            end_date=view.window.end,
            previous_date=aggregator.shift_window(kind, reference, -1),
            next_date=aggregator.shift_window(kind, reference, 1),
            days=[
                CalendarDayDTO(
                    date=day.day,
                    entries=[entry_to_response(entry) for entry in day.entries],
                    entry_types=day.entry_types,
                    labels=[aggregator.summarize(entry) for entry in day.entries]
                )
                for day in view.days
            ],
            totals=CalendarTotalsDTO(
                total_hours=view.totals.total_hours,
                total_expenses=view.totals.total_expenses,
                total_vacation_days=view.totals.total_vacation_days,
                entry_count=view.totals.entry_count
            )
        )
