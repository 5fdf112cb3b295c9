"""
Entry domain model.
An Entry is a user-submitted record subject to moderation. It is a tagged union:
one envelope class with four variant subclasses, each carrying only its own fields.
"""

import datetime as dt
from abc import abstractmethod
from dataclasses import dataclass
from typing import Optional, ClassVar, Tuple, Dict, Any
from enum import Enum

from app.domain.models.base import (
    BaseEntity,
    DomainEvent,
    ValidationError,
    InvalidRangeError,
    InvalidStateError
)


MAX_HOURS_PER_DAY = 24
MAX_DESCRIPTION_LENGTH = 1000


class EntryStatus(str, Enum):
    """Moderation status of an entry."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self is not EntryStatus.PENDING


class EntryType(str, Enum):
    """Entry variant discriminator."""
    WORK_HOURS = "WORK_HOURS"
    EXPENSE = "EXPENSE"
    VACATION = "VACATION"
    TRAVEL = "TRAVEL"


# Domain Events

class EntrySubmittedEvent(DomainEvent):
    """Event raised when an entry is submitted for review."""

    def __init__(self, entry_id: Optional[str], owner_id: str, entry_type: EntryType):
        super().__init__()
        self.entry_id = entry_id
        self.owner_id = owner_id
        self.entry_type = entry_type.value

    @property
    def event_name(self) -> str:
        return "entry.submitted"


class EntryStatusChangedEvent(DomainEvent):
    """Event raised when an admin approves or rejects an entry."""

    def __init__(self, entry_id: Optional[str], old_status: EntryStatus, new_status: EntryStatus, reviewed_by: str):
        super().__init__()
        self.entry_id = entry_id
        self.old_status = old_status.value
        self.new_status = new_status.value
        self.reviewed_by = reviewed_by

    @property
    def event_name(self) -> str:
        return f"entry.{self.new_status.lower()}"


def _is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def _require_text(value: Optional[str], field: str, label: str) -> None:
    if value is None or not str(value).strip():
        raise ValidationError(f"{label} is required", field)


@dataclass(eq=False)
class Entry(BaseEntity):
    """
    Common envelope shared by every entry variant.

    Entities are not validated on construction: records rehydrated from storage
    must still reach the aggregator even when their data is inconsistent.
    Call ``validate()`` before accepting a new submission.
    """

    entry_type: ClassVar[EntryType]

    owner_id: Optional[str] = None
    status: EntryStatus = EntryStatus.PENDING
    description: Optional[str] = None

    # Review stamp, written by a successful moderation transition
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[dt.datetime] = None

    def validate(self) -> None:
        """Validate envelope fields, then the variant fields."""
        _require_text(self.owner_id, "owner_id", "Owner ID")

        if not isinstance(self.status, EntryStatus):
            raise ValidationError(f"Invalid status: {self.status}", "status")

        if self.description and len(self.description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                f"Description too long (max {MAX_DESCRIPTION_LENGTH} characters)", "description"
            )

        self._validate_variant()

    def _validate_variant(self) -> None:
        pass

    @property
    def is_pending(self) -> bool:
        return self.status == EntryStatus.PENDING

    @abstractmethod
    def span(self) -> Tuple[Optional[dt.date], Optional[dt.date]]:
        """First and last calendar day the entry refers to, as stored."""
        pass

    @property
    def primary_date(self) -> Optional[dt.date]:
        """The date used for ordering and single-day lookups."""
        return self.span()[0]

    def approve(self, reviewer_id: str) -> None:
        """Move a pending entry to APPROVED."""
        self._transition(EntryStatus.APPROVED, reviewer_id)

    def reject(self, reviewer_id: str) -> None:
        """Move a pending entry to REJECTED."""
        self._transition(EntryStatus.REJECTED, reviewer_id)

    def _transition(self, new_status: EntryStatus, reviewer_id: str) -> None:
        if self.status != EntryStatus.PENDING:
            raise InvalidStateError(
                f"Entry {self.id} is {self.status.value}; only PENDING entries can be "
                f"{new_status.value.lower()}"
            )

        old_status = self.status
        self.status = new_status
        self.reviewed_by = reviewer_id
        self.reviewed_at = dt.datetime.utcnow()

        self.add_event(EntryStatusChangedEvent(
            entry_id=self.id,
            old_status=old_status,
            new_status=new_status,
            reviewed_by=reviewer_id
        ))

    def prepare_submission(self, owner_id: str) -> None:
        """Bind a brand new submission to its owner and reset moderation fields."""
        self.owner_id = owner_id
        self.status = EntryStatus.PENDING
        self.reviewed_by = None
        self.reviewed_at = None

    def mark_submitted(self) -> None:
        """Record that the stored entry is awaiting review."""
        self.add_event(EntrySubmittedEvent(self.id, self.owner_id, self.entry_type))

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["type"] = self.entry_type.value
        return data


@dataclass(eq=False)
class WorkHoursEntry(Entry):
    """Hours worked on a single day."""

    entry_type: ClassVar[EntryType] = EntryType.WORK_HOURS

    date: Optional[dt.date] = None
    hours_worked: Optional[float] = None

    def _validate_variant(self) -> None:
        if self.date is None:
            raise ValidationError("Date is required", "date")
        if not _is_positive_number(self.hours_worked):
            raise ValidationError("Hours must be positive", "hours_worked")
        if self.hours_worked > MAX_HOURS_PER_DAY:
            raise ValidationError(f"Hours cannot exceed {MAX_HOURS_PER_DAY}", "hours_worked")

    def span(self) -> Tuple[Optional[dt.date], Optional[dt.date]]:
        return self.date, self.date


@dataclass(eq=False)
class ExpenseEntry(Entry):
    """An expense incurred on a single day, optionally with a receipt."""

    entry_type: ClassVar[EntryType] = EntryType.EXPENSE

    date: Optional[dt.date] = None
    amount: Optional[float] = None
    category: Optional[str] = None
    receipt_ref: Optional[str] = None

    def _validate_variant(self) -> None:
        if self.date is None:
            raise ValidationError("Date is required", "date")
        if not _is_positive_number(self.amount):
            raise ValidationError("Amount must be positive", "amount")
        _require_text(self.category, "category", "Category")
        if self.receipt_ref is not None and len(self.receipt_ref) > 500:
            raise ValidationError("Receipt reference too long (max 500 characters)", "receipt_ref")

    def span(self) -> Tuple[Optional[dt.date], Optional[dt.date]]:
        return self.date, self.date


@dataclass(eq=False)
class VacationEntry(Entry):
    """Vacation spanning an inclusive range of days."""

    entry_type: ClassVar[EntryType] = EntryType.VACATION

    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    days: Optional[int] = None

    def _validate_variant(self) -> None:
        if self.start_date is None:
            raise ValidationError("Start date is required", "start_date")
        if self.end_date is None:
            raise ValidationError("End date is required", "end_date")
        if self.end_date < self.start_date:
            raise InvalidRangeError(self.start_date, self.end_date)
        if not isinstance(self.days, int) or isinstance(self.days, bool) or self.days <= 0:
            raise ValidationError("Days must be a positive whole number", "days")

    def span(self) -> Tuple[Optional[dt.date], Optional[dt.date]]:
        return self.start_date, self.end_date


@dataclass(eq=False)
class TravelEntry(Entry):
    """A business trip taken on a single day."""

    entry_type: ClassVar[EntryType] = EntryType.TRAVEL

    travel_date: Optional[dt.date] = None
    from_location: Optional[str] = None
    to_location: Optional[str] = None
    distance_km: Optional[float] = None

    def _validate_variant(self) -> None:
        if self.travel_date is None:
            raise ValidationError("Travel date is required", "travel_date")
        _require_text(self.from_location, "from_location", "Origin")
        _require_text(self.to_location, "to_location", "Destination")
        if not _is_positive_number(self.distance_km):
            raise ValidationError("Distance must be positive", "distance_km")

    def span(self) -> Tuple[Optional[dt.date], Optional[dt.date]]:
        return self.travel_date, self.travel_date


ENTRY_CLASSES: Dict[EntryType, type] = {
    EntryType.WORK_HOURS: WorkHoursEntry,
    EntryType.EXPENSE: ExpenseEntry,
    EntryType.VACATION: VacationEntry,
    EntryType.TRAVEL: TravelEntry,
}


def entry_class_for(entry_type: EntryType) -> type:
    """Return the variant class for a discriminator value."""
    try:
        return ENTRY_CLASSES[EntryType(entry_type)]
    except (KeyError, ValueError):
        raise ValidationError(f"Unknown entry type: {entry_type}", "type")
