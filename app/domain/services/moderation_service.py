"""Moderation service for entries.
Enforces who may decide an entry and which transitions are allowed.
"""

from typing import Optional

from app.domain.models.base import AuthenticationError, AuthorizationError, ValidationError
from app.domain.models.entry import Entry, EntryStatus
from app.domain.models.user import Principal


class ModerationService:
    """
    Domain service for the PENDING -> APPROVED | REJECTED workflow.

    The role check runs before the status check, so a non-admin is refused
    with AuthorizationError whatever the entry's status is.
    """

    def approve(self, entry: Entry, principal: Optional[Principal]) -> Entry:
        """
        Approve a pending entry.
        """
        return self.decide(entry, EntryStatus.APPROVED, principal)

    def reject(self, entry: Entry, principal: Optional[Principal]) -> Entry:
        """
        Reject a pending entry.
        """
        return self.decide(entry, EntryStatus.REJECTED, principal)

    def decide(self, entry: Entry, decision: EntryStatus, principal: Optional[Principal]) -> Entry:
        """
        Apply a moderation decision to the entry in place.

        Raises AuthenticationError without a principal, AuthorizationError for
        non-admins, ValidationError for a decision other than APPROVED/REJECTED,
        and InvalidStateError when the entry is not PENDING.
        """
        self.ensure_can_moderate(principal)

        if decision == EntryStatus.APPROVED:
            entry.approve(principal.user_id)
        elif decision == EntryStatus.REJECTED:
            entry.reject(principal.user_id)
        else:
            raise ValidationError("Status must be APPROVED or REJECTED", "status")

        return entry

    def ensure_can_moderate(self, principal: Optional[Principal]) -> None:
        if principal is None:
            raise AuthenticationError()
        if not principal.is_admin:
            raise AuthorizationError("Only administrators can moderate entries")
