"""Entry repository interface.
Defines the contract for entry data persistence operations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from app.domain.models.base import DateWindow
from app.domain.models.entry import Entry, EntryStatus, EntryType


@dataclass(frozen=True)
class EntryFilter:
    """
    Query filter for entries. Unset fields do not restrict the result.

    ``date_range`` matches an entry whose placement touches the window:
    single-date entries by their date, vacations by overlap of
    [start_date, end_date] with the window.
    """

    owner_id: Optional[str] = None
    entry_type: Optional[EntryType] = None
    status: Optional[EntryStatus] = None
    date_range: Optional[DateWindow] = None
    created_range: Optional[DateWindow] = None

    def matches(self, entry: Entry) -> bool:
        """Evaluate the filter against a single entry in memory."""
        if self.owner_id is not None and entry.owner_id != self.owner_id:
            return False
        if self.entry_type is not None and entry.entry_type != self.entry_type:
            return False
        if self.status is not None and entry.status != self.status:
            return False
        if self.date_range is not None:
            start, end = entry.span()
            if start is None or end is None:
                return False
            if not self.date_range.overlaps(start, end):
                return False
        if self.created_range is not None:
            if entry.created_at is None or entry.created_at.date() not in self.created_range:
                return False
        return True


class EntryRepository(ABC):
    """
    Repository interface for Entry entities.
    Defines all operations needed for entry data persistence.
    """

    @abstractmethod
    async def save(self, entry: Entry) -> Entry:
        """
        Persist a new entry.
        Assigns the id and creation timestamp and returns the stored entry.
        """
        pass

    @abstractmethod
    async def find_by_id(self, entry_id: str) -> Optional[Entry]:
        """
        Find an entry by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    async def find_entries(self, entry_filter: EntryFilter, limit: Optional[int] = None) -> List[Entry]:
        """
        Find entries matching a filter, newest placement date first.
        """
        pass

    @abstractmethod
    async def count(self, entry_filter: EntryFilter) -> int:
        """
        Count entries matching a filter.
        """
        pass

    @abstractmethod
    async def update_status(
        self,
        entry_id: str,
        new_status: EntryStatus,
        expected_status: Optional[EntryStatus] = EntryStatus.PENDING,
        reviewed_by: Optional[str] = None,
        reviewed_at: Optional[datetime] = None
    ) -> Entry:
        """
        Write a new status and review stamp, and nothing else.

        The write only happens while the stored status equals ``expected_status``;
        otherwise InvalidStateError is raised. Raises EntityNotFoundError when
        the entry does not exist.
        """
        pass
