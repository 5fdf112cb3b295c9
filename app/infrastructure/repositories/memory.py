"""
In-memory repository implementations.
Used for demos, local development without a database, and tests.
"""

import copy
import uuid
from datetime import datetime
from typing import Dict, List, Optional

from app.domain.models.base import DuplicateEntityError, EntityNotFoundError, InvalidStateError
from app.domain.models.entry import Entry, EntryStatus
from app.domain.models.user import User, UserRole
from app.domain.repositories.entry_repository import EntryFilter, EntryRepository
from app.domain.repositories.user_repository import UserRepository


def _detached(entity):
    """Copy an entity so callers never share state with the store."""
    clone = copy.deepcopy(entity)
    clone.pull_events()
    return clone


class InMemoryStore:
    """Shared record storage for the in-memory user and entry repositories."""

    def __init__(self):
        self.users: Dict[str, User] = {}
        self.entries: Dict[str, Entry] = {}

    def clear(self) -> None:
        self.users.clear()
        self.entries.clear()


def _entry_sort_key(entry: Entry):
    return (entry.primary_date is not None, entry.primary_date, entry.created_at)


class InMemoryEntryRepository(EntryRepository):
    """
    In-memory implementation of entry repository.
    Methods never await between reading and writing a record, so each
    operation is atomic with respect to other requests on the event loop.
    """

    def __init__(self, store: InMemoryStore):
        self.store = store

    async def save(self, entry: Entry) -> Entry:
        stored = _detached(entry)
        if stored.id is None:
            stored.id = str(uuid.uuid4())
        if stored.created_at is None:
            stored.created_at = datetime.utcnow()

        self.store.entries[stored.id] = stored
        return _detached(stored)

    async def find_by_id(self, entry_id: str) -> Optional[Entry]:
        entry = self.store.entries.get(entry_id)
        return _detached(entry) if entry else None

    async def find_entries(self, entry_filter: EntryFilter, limit: Optional[int] = None) -> List[Entry]:
        matches = [entry for entry in self.store.entries.values() if entry_filter.matches(entry)]
        matches.sort(key=_entry_sort_key, reverse=True)

        if limit:
            matches = matches[:limit]

        return [_detached(entry) for entry in matches]

    async def count(self, entry_filter: EntryFilter) -> int:
        return sum(1 for entry in self.store.entries.values() if entry_filter.matches(entry))

    async def update_status(
        self,
        entry_id: str,
        new_status: EntryStatus,
        expected_status: Optional[EntryStatus] = EntryStatus.PENDING,
        reviewed_by: Optional[str] = None,
        reviewed_at: Optional[datetime] = None
    ) -> Entry:
        entry = self.store.entries.get(entry_id)
        if entry is None:
            raise EntityNotFoundError("Entry", entry_id)

        if expected_status is not None and entry.status != expected_status:
            raise InvalidStateError(
                f"Entry {entry_id} is {entry.status.value}; only "
                f"{expected_status.value} entries can be moved to {new_status.value}"
            )

        entry.status = new_status
        entry.reviewed_by = reviewed_by
        entry.reviewed_at = reviewed_at
        return _detached(entry)


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of user repository."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    async def save(self, user: User) -> User:
        email = str(user.email)
        if any(str(existing.email) == email for existing in self.store.users.values()):
            raise DuplicateEntityError("User", "email", email)

        stored = _detached(user)
        if stored.id is None:
            stored.id = str(uuid.uuid4())
        if stored.created_at is None:
            stored.created_at = datetime.utcnow()

        self.store.users[stored.id] = stored
        return _detached(stored)

    async def find_by_id(self, user_id: str) -> Optional[User]:
        user = self.store.users.get(user_id)
        return _detached(user) if user else None

    async def find_by_email(self, email: str) -> Optional[User]:
        email = email.strip().lower()
        for user in self.store.users.values():
            if str(user.email) == email:
                return _detached(user)
        return None

    async def find_all(self, role: Optional[UserRole] = None) -> List[User]:
        entry_counts: Dict[str, int] = {}
        for entry in self.store.entries.values():
            entry_counts[entry.owner_id] = entry_counts.get(entry.owner_id, 0) + 1

        users = []
        for user in self.store.users.values():
            if role is not None and user.role != role:
                continue
            listed = _detached(user)
            listed.entry_count = entry_counts.get(user.id, 0)
            users.append(listed)

        users.sort(key=lambda user: user.created_at, reverse=True)
        return users

    async def count_by_role(self) -> Dict[UserRole, int]:
        counts = {role: 0 for role in UserRole}
        for user in self.store.users.values():
            counts[user.role] += 1
        return counts

    async def delete(self, user_id: str) -> None:
        if user_id not in self.store.users:
            raise EntityNotFoundError("User", user_id)

        del self.store.users[user_id]
        for entry_id in [eid for eid, entry in self.store.entries.items() if entry.owner_id == user_id]:
            del self.store.entries[entry_id]
