"""
Entry mapper for converting between domain entities and database models.
"""

from decimal import Decimal
from typing import Any, Optional

from app.domain.models.entry import (
    Entry,
    EntryStatus,
    EntryType,
    WorkHoursEntry,
    ExpenseEntry,
    VacationEntry,
    TravelEntry,
    entry_class_for
)
from app.infrastructure.db.models import EntryModel


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return float(value)
    return value


class EntryMapper:
    """
    Maps between Entry domain variants and the single EntryModel table.
    Only the columns of the row's own variant are read back.
    """

    def domain_to_model(self, entry: Entry) -> EntryModel:
        """Convert an Entry variant to EntryModel."""
        model = EntryModel(
            id=entry.id,
            owner_id=entry.owner_id,
            type=entry.entry_type,
            status=entry.status,
            description=entry.description,
            reviewed_by=entry.reviewed_by,
            reviewed_at=entry.reviewed_at,
            created_at=entry.created_at
        )

        if isinstance(entry, WorkHoursEntry):
            model.date = entry.date
            model.hours_worked = entry.hours_worked
        elif isinstance(entry, ExpenseEntry):
            model.date = entry.date
            model.amount = entry.amount
            model.category = entry.category
            model.receipt_url = entry.receipt_ref
        elif isinstance(entry, VacationEntry):
            model.start_date = entry.start_date
            model.end_date = entry.end_date
            model.days = entry.days
        elif isinstance(entry, TravelEntry):
            model.travel_date = entry.travel_date
            model.from_location = entry.from_location
            model.to_location = entry.to_location
            model.distance_km = entry.distance_km

        return model

    def model_to_domain(self, model: EntryModel) -> Entry:
        """Convert EntryModel to the Entry variant named by its type column."""
        entry_type = EntryType(model.type)
        common = dict(
            id=model.id,
            owner_id=model.owner_id,
            status=EntryStatus(model.status) if model.status else EntryStatus.PENDING,
            description=model.description,
            reviewed_by=model.reviewed_by,
            reviewed_at=model.reviewed_at,
            created_at=model.created_at
        )

        entry_class = entry_class_for(entry_type)

        if entry_class is WorkHoursEntry:
            return WorkHoursEntry(date=model.date, hours_worked=_to_float(model.hours_worked), **common)
        if entry_class is ExpenseEntry:
            return ExpenseEntry(
                date=model.date,
                amount=_to_float(model.amount),
                category=model.category,
                receipt_ref=model.receipt_url,
                **common
            )
        if entry_class is VacationEntry:
            return VacationEntry(
                start_date=model.start_date,
                end_date=model.end_date,
                days=model.days,
                **common
            )
        return TravelEntry(
            travel_date=model.travel_date,
            from_location=model.from_location,
            to_location=model.to_location,
            distance_km=_to_float(model.distance_km),
            **common
        )
