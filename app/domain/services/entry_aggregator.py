"""Entry aggregation service.
Places entries on the calendar, bins them by day and computes rollups over date windows.
"""

import calendar
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union

from app.domain.models.base import DateWindow, InvalidRangeError, ValidationError
from app.domain.models.entry import (
    Entry,
    EntryStatus,
    EntryType,
    ExpenseEntry,
    TravelEntry,
    VacationEntry,
    WorkHoursEntry
)

logger = logging.getLogger(__name__)


DATE_KEY_FORMAT = "%Y-%m-%d"

# Weeks run Sunday to Saturday (Python weekday numbering: Monday=0 ... Sunday=6)
WEEK_START = calendar.SUNDAY

GroupedEntries = Dict[str, List[Entry]]


class WindowKind(str, Enum):
    """Aggregation window sizes."""
    MONTH = "month"
    WEEK = "week"


@dataclass
class CalendarDay:
    """One day of a calendar view."""

    day: date
    entries: List[Entry] = field(default_factory=list)

    @property
    def key(self) -> str:
        return self.day.strftime(DATE_KEY_FORMAT)

    @property
    def entry_types(self) -> List[EntryType]:
        return _unique_types(self.entries)


@dataclass
class CalendarTotals:
    """Rollups over the entries fetched for a window."""

    total_hours: float = 0.0
    total_expenses: float = 0.0
    total_vacation_days: int = 0
    entry_count: int = 0


@dataclass
class CalendarView:
    """Entries of a window binned per day, with window totals."""

    window: DateWindow
    days: List[CalendarDay]
    totals: CalendarTotals


def as_date(value: Union[date, datetime, str, None]) -> Optional[date]:
    """
    Normalize to a date-only value.
    Time of day and timezone offset are discarded without conversion.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value)[:10], DATE_KEY_FORMAT).date()


def date_key(value: Union[date, datetime, str]) -> str:
    """Canonical bucket key (YYYY-MM-DD) for a day."""
    return as_date(value).strftime(DATE_KEY_FORMAT)


def _plain_number(value: Union[int, float, None]) -> str:
    """Decimal text without exponent or trailing zeros: 8, 125.5, 1234567.5."""
    return format(Decimal(str(value or 0)).normalize(), "f")


def _out_of_range(day: date) -> ValidationError:
    return ValidationError(f"Date {day.isoformat()} is too close to the calendar limits", "date")


def _unique_types(entries: Iterable[Entry]) -> List[EntryType]:
    seen: List[EntryType] = []
    for entry in entries:
        if entry.entry_type not in seen:
            seen.append(entry.entry_type)
    return seen


class EntryAggregator:
    """
    Domain service for calendar placement and rollups of entries.

    Pure and synchronous: it works on records already fetched for one request and
    never raises for bad stored data. Status filtering is the caller's job.
    """

    # Placement

    def placement_dates(self, entry: Entry) -> List[date]:
        """
        Every calendar day the entry is considered to occur on.

        Single-date variants give one day; a vacation gives every day of
        [start_date, end_date] inclusive. A reversed or incomplete range gives
        an empty list and is logged.
        """
        start, end = entry.span()
        start, end = as_date(start), as_date(end)

        if start is None or end is None:
            logger.warning(f"Entry {entry.id} ({entry.entry_type.value}) has no date; skipping placement")
            return []

        if end < start:
            error = InvalidRangeError(start, end)
            logger.warning(f"Entry {entry.id} skipped from calendar: {error.message}")
            return []

        return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]

    def group_by_date(self, entries: Iterable[Entry]) -> GroupedEntries:
        """
        Bin entries by day key.

        An entry is appended to the bucket of every day in its placement, so a
        vacation appears in each day of its span. Bucket order follows input order.
        """
        grouped: GroupedEntries = {}

        for entry in entries:
            for day in self.placement_dates(entry):
                grouped.setdefault(date_key(day), []).append(entry)

        return grouped

    def entries_for_date(self, day: Union[date, datetime, str], grouped: GroupedEntries) -> List[Entry]:
        """Entries placed on a day, or an empty list."""
        return list(grouped.get(date_key(day), []))

    def has_entries(self, day: Union[date, datetime, str], grouped: GroupedEntries) -> bool:
        return bool(grouped.get(date_key(day)))

    def entry_types_for_date(self, day: Union[date, datetime, str], grouped: GroupedEntries) -> List[EntryType]:
        """Distinct entry types placed on a day, in first-seen order."""
        return _unique_types(grouped.get(date_key(day), []))

    # Rollups

    def sum_hours(self, entries: Iterable[Entry]) -> float:
        """Total hours_worked over work-hours entries."""
        return float(sum(
            entry.hours_worked or 0
            for entry in entries
            if isinstance(entry, WorkHoursEntry)
        ))

    def sum_expenses(self, entries: Iterable[Entry]) -> float:
        """Total amount over expense entries."""
        return float(sum(
            entry.amount or 0
            for entry in entries
            if isinstance(entry, ExpenseEntry)
        ))

    def sum_vacation_days(self, entries: Iterable[Entry]) -> int:
        """Total days over vacation entries."""
        return int(sum(
            entry.days or 0
            for entry in entries
            if isinstance(entry, VacationEntry)
        ))

    def filter_by_status(self, entries: Iterable[Entry], status: EntryStatus) -> List[Entry]:
        return [entry for entry in entries if entry.status == status]

    def summarize(self, entry: Entry) -> str:
        """Short label for calendar cells: 8h, $125.5, 5d, 45.5km."""
        if isinstance(entry, WorkHoursEntry):
            return f"{_plain_number(entry.hours_worked)}h"
        if isinstance(entry, ExpenseEntry):
            return f"${_plain_number(entry.amount)}"
        if isinstance(entry, VacationEntry):
            return f"{entry.days or 0}d"
        if isinstance(entry, TravelEntry):
            return f"{_plain_number(entry.distance_km)}km"
        return ""

    # Windows

    def date_window(self, kind: Union[WindowKind, str], reference: Union[date, datetime]) -> DateWindow:
        """
        Inclusive window containing the reference day.

        month: first to last day of the month.
        week: the seven days from Sunday to Saturday.
        """
        kind = self._window_kind(kind)
        day = as_date(reference)

        if kind == WindowKind.MONTH:
            last_day = calendar.monthrange(day.year, day.month)[1]
            return DateWindow(day.replace(day=1), day.replace(day=last_day))

        offset = (day.weekday() - WEEK_START) % 7
        try:
            start = day - timedelta(days=offset)
            return DateWindow(start, start + timedelta(days=6))
        except OverflowError:
            raise _out_of_range(day)

    def window_dates(self, window: DateWindow) -> List[date]:
        return [window.start + timedelta(days=offset) for offset in range(window.days)]

    def month_dates(self, reference: Union[date, datetime]) -> List[date]:
        return self.window_dates(self.date_window(WindowKind.MONTH, reference))

    def week_dates(self, reference: Union[date, datetime]) -> List[date]:
        return self.window_dates(self.date_window(WindowKind.WEEK, reference))

    def shift_window(self, kind: Union[WindowKind, str], reference: Union[date, datetime], steps: int) -> date:
        """
        Move the reference day by whole months or weeks.
        Month moves keep the day of month, clamped to the target month's length.
        """
        kind = self._window_kind(kind)
        day = as_date(reference)

        try:
            if kind == WindowKind.WEEK:
                return day + timedelta(weeks=steps)

            month_index = day.year * 12 + (day.month - 1) + steps
            year, month = divmod(month_index, 12)
            month += 1
            last_day = calendar.monthrange(year, month)[1]
            return date(year, month, min(day.day, last_day))
        except (OverflowError, ValueError):
            raise _out_of_range(day)

    def build_calendar(self, entries: List[Entry], window: DateWindow) -> CalendarView:
        """
        Bin entries into every day of the window and total them.
        Totals cover the entries given, including days outside the window.
        """
        grouped = self.group_by_date(entries)
        days = [
            CalendarDay(day=day, entries=self.entries_for_date(day, grouped))
            for day in self.window_dates(window)
        ]
        totals = CalendarTotals(
            total_hours=self.sum_hours(entries),
            total_expenses=self.sum_expenses(entries),
            total_vacation_days=self.sum_vacation_days(entries),
            entry_count=len(entries)
        )
        return CalendarView(window=window, days=days, totals=totals)

    def _window_kind(self, kind: Any) -> WindowKind:
        try:
            return WindowKind(kind.lower() if isinstance(kind, str) else kind)
        except ValueError:
            raise ValidationError(f"Unknown window kind: {kind}. Use 'month' or 'week'", "view")
