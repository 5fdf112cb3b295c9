"""
Unit tests for ModerationService domain service.
"""

import pytest
from datetime import date

from app.domain.models.base import (
    AuthenticationError,
    AuthorizationError,
    InvalidStateError,
    ValidationError
)
from app.domain.models.entry import EntryStatus, ExpenseEntry
from app.domain.models.user import Principal, UserRole
from app.domain.services.moderation_service import ModerationService


class TestModerationService:
    """Test cases for ModerationService."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = ModerationService()
        self.admin = Principal(user_id="admin-1", role=UserRole.ADMIN)
        self.employee = Principal(user_id="user-1", role=UserRole.EMPLOYEE)

    def _entry(self, status=EntryStatus.PENDING):
        return ExpenseEntry(
            id="entry-1",
            owner_id="user-1",
            date=date(2024, 1, 16),
            amount=50,
            category="Office Supplies",
            status=status
        )

    def test_admin_approves_pending_entry(self):
        """Test approval by an admin."""
        entry = self._entry()

        result = self.service.approve(entry, self.admin)

        assert result is entry
        assert entry.status == EntryStatus.APPROVED
        assert entry.reviewed_by == "admin-1"

    def test_admin_rejects_pending_entry(self):
        """Test rejection by an admin."""
        entry = self._entry()

        self.service.reject(entry, self.admin)

        assert entry.status == EntryStatus.REJECTED
        assert entry.reviewed_by == "admin-1"

    def test_reject_approved_entry_fails(self):
        """Test an approved entry cannot be rejected and stays approved."""
        entry = self._entry(EntryStatus.APPROVED)

        with pytest.raises(InvalidStateError):
            self.service.reject(entry, self.admin)

        assert entry.status == EntryStatus.APPROVED

    def test_approve_rejected_entry_fails(self):
        """Test a rejected entry cannot be approved."""
        entry = self._entry(EntryStatus.REJECTED)

        with pytest.raises(InvalidStateError):
            self.service.approve(entry, self.admin)

        assert entry.status == EntryStatus.REJECTED

    def test_non_admin_cannot_moderate(self):
        """Test employees are refused and the entry is unchanged."""
        entry = self._entry()

        with pytest.raises(AuthorizationError):
            self.service.approve(entry, self.employee)

        assert entry.status == EntryStatus.PENDING
        assert entry.reviewed_by is None

    def test_role_checked_before_state(self):
        """Test a non-admin gets AuthorizationError even for a decided entry."""
        entry = self._entry(EntryStatus.APPROVED)

        with pytest.raises(AuthorizationError):
            self.service.reject(entry, self.employee)

    def test_unauthenticated_caller(self):
        """Test a missing principal is an authentication failure."""
        with pytest.raises(AuthenticationError):
            self.service.approve(self._entry(), None)

    def test_pending_is_not_a_decision(self):
        """Test PENDING is rejected as a decision."""
        entry = self._entry()

        with pytest.raises(ValidationError):
            self.service.decide(entry, EntryStatus.PENDING, self.admin)

        assert entry.status == EntryStatus.PENDING
