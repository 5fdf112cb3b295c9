"""
Entry repository implementation using SQLAlchemy.
"""

import uuid
from datetime import datetime, time, timedelta
from typing import List, Optional

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Query, sessionmaker
from starlette.concurrency import run_in_threadpool

from app.domain.models.base import EntityNotFoundError, InvalidStateError
from app.domain.models.entry import Entry, EntryStatus, EntryType
from app.domain.repositories.entry_repository import EntryFilter, EntryRepository
from app.infrastructure.db.database import session_scope
from app.infrastructure.db.models import EntryModel
from app.infrastructure.mappers.entry_mapper import EntryMapper


SINGLE_DATE_TYPES = (EntryType.WORK_HOURS, EntryType.EXPENSE)


class SQLAlchemyEntryRepository(EntryRepository):
    """
    SQLAlchemy implementation of entry repository.
    Each call runs in its own session on the threadpool.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory
        self.mapper = EntryMapper()

    async def save(self, entry: Entry) -> Entry:
        return await run_in_threadpool(self._save, entry)

    async def find_by_id(self, entry_id: str) -> Optional[Entry]:
        return await run_in_threadpool(self._find_by_id, entry_id)

    async def find_entries(self, entry_filter: EntryFilter, limit: Optional[int] = None) -> List[Entry]:
        return await run_in_threadpool(self._find_entries, entry_filter, limit)

    async def count(self, entry_filter: EntryFilter) -> int:
        return await run_in_threadpool(self._count, entry_filter)

    async def update_status(
        self,
        entry_id: str,
        new_status: EntryStatus,
        expected_status: Optional[EntryStatus] = EntryStatus.PENDING,
        reviewed_by: Optional[str] = None,
        reviewed_at: Optional[datetime] = None
    ) -> Entry:
        return await run_in_threadpool(
            self._update_status, entry_id, new_status, expected_status, reviewed_by, reviewed_at
        )

    # Synchronous implementations

    def _save(self, entry: Entry) -> Entry:
        with session_scope(self.session_factory) as session:
            model = self.mapper.domain_to_model(entry)
            if model.id is None:
                model.id = str(uuid.uuid4())
            if model.created_at is None:
                model.created_at = datetime.utcnow()

            session.add(model)
            session.flush()
            return self.mapper.model_to_domain(model)

    def _find_by_id(self, entry_id: str) -> Optional[Entry]:
        with session_scope(self.session_factory) as session:
            model = session.query(EntryModel).filter_by(id=entry_id).first()

            if not model:
                return None

            return self.mapper.model_to_domain(model)

    def _find_entries(self, entry_filter: EntryFilter, limit: Optional[int]) -> List[Entry]:
        with session_scope(self.session_factory) as session:
            query = self._apply_filter(session.query(EntryModel), entry_filter)

            placement_date = func.coalesce(EntryModel.date, EntryModel.start_date, EntryModel.travel_date)
            query = query.order_by(placement_date.desc(), EntryModel.created_at.desc())

            if limit:
                query = query.limit(limit)

            return [self.mapper.model_to_domain(model) for model in query.all()]

    def _count(self, entry_filter: EntryFilter) -> int:
        with session_scope(self.session_factory) as session:
            query = self._apply_filter(session.query(func.count(EntryModel.id)), entry_filter)
            return query.scalar() or 0

    def _update_status(
        self,
        entry_id: str,
        new_status: EntryStatus,
        expected_status: Optional[EntryStatus],
        reviewed_by: Optional[str],
        reviewed_at: Optional[datetime]
    ) -> Entry:
        with session_scope(self.session_factory) as session:
            query = session.query(EntryModel).filter(EntryModel.id == entry_id)
            if expected_status is not None:
                query = query.filter(EntryModel.status == expected_status)

            # Compare-and-set: zero rows means missing or already decided
            updated = query.update(
                {
                    EntryModel.status: new_status,
                    EntryModel.reviewed_by: reviewed_by,
                    EntryModel.reviewed_at: reviewed_at,
                },
                synchronize_session=False
            )

            model = session.query(EntryModel).filter_by(id=entry_id).first()
            if model is None:
                raise EntityNotFoundError("Entry", entry_id)

            if updated == 0:
                current = EntryStatus(model.status)
                raise InvalidStateError(
                    f"Entry {entry_id} is {current.value}; only "
                    f"{expected_status.value} entries can be moved to {new_status.value}"
                )

            session.refresh(model)
            return self.mapper.model_to_domain(model)

    def _apply_filter(self, query: Query, entry_filter: EntryFilter) -> Query:
        if entry_filter.owner_id is not None:
            query = query.filter(EntryModel.owner_id == entry_filter.owner_id)

        if entry_filter.entry_type is not None:
            query = query.filter(EntryModel.type == entry_filter.entry_type)

        if entry_filter.status is not None:
            query = query.filter(EntryModel.status == entry_filter.status)

        if entry_filter.date_range is not None:
            start, end = entry_filter.date_range.start, entry_filter.date_range.end
            query = query.filter(or_(
                and_(EntryModel.type.in_(SINGLE_DATE_TYPES), EntryModel.date.between(start, end)),
                and_(EntryModel.type == EntryType.TRAVEL, EntryModel.travel_date.between(start, end)),
                and_(
                    EntryModel.type == EntryType.VACATION,
                    EntryModel.start_date <= end,
                    EntryModel.end_date >= start
                )
            ))

        if entry_filter.created_range is not None:
            created_from = datetime.combine(entry_filter.created_range.start, time.min)
            created_to = datetime.combine(entry_filter.created_range.end + timedelta(days=1), time.min)
            query = query.filter(
                EntryModel.created_at >= created_from,
                EntryModel.created_at < created_to
            )

        return query
