"""
Unit tests for User domain model.
"""

import pytest

from app.domain.models.base import Email, ValidationError
from app.domain.models.user import Principal, User, UserRole


class TestUser:
    """Test cases for User domain model."""

    def _user(self, **overrides):
        data = dict(
            email="John@Example.com",
            name="John Doe",
            role=UserRole.EMPLOYEE,
            department="Engineering",
            phone_number="+1 (555) 123-4567",
            password_hash="hashed"
        )
        data.update(overrides)
        return User(**data)

    def test_create_user(self):
        """Test email normalization and defaults."""
        user = self._user()

        user.validate()

        assert isinstance(user.email, Email)
        assert str(user.email) == "john@example.com"
        assert user.role == UserRole.EMPLOYEE
        assert user.is_admin is False
        assert user.entry_count == 0

    def test_role_from_string(self):
        """Test string roles are converted to the enum."""
        user = self._user(role="ADMIN")

        assert user.role == UserRole.ADMIN
        assert user.is_admin is True

    def test_invalid_email(self):
        """Test malformed email is rejected on construction."""
        with pytest.raises(ValidationError):
            self._user(email="not-an-email")

    def test_short_name(self):
        """Test name shorter than two characters is rejected."""
        user = self._user(name="J")

        with pytest.raises(ValidationError) as exc_info:
            user.validate()

        assert exc_info.value.field == "name"

    def test_invalid_phone_number(self):
        """Test letters in a phone number are rejected."""
        user = self._user(phone_number="call me")

        with pytest.raises(ValidationError) as exc_info:
            user.validate()

        assert exc_info.value.field == "phone_number"

    def test_password_hash_required(self):
        """Test a user without a password hash is invalid."""
        user = self._user(password_hash=None)

        with pytest.raises(ValidationError) as exc_info:
            user.validate()

        assert exc_info.value.field == "password"

    def test_to_dict_never_contains_password_hash(self):
        """Test the hash is not serialized."""
        data = self._user().to_dict()

        assert "password_hash" not in data
        assert data["email"] == "john@example.com"
        assert data["role"] == "EMPLOYEE"

    def test_display_name_falls_back_to_email(self):
        """Test display name without a name."""
        user = self._user(name=None)

        assert user.display_name == "john"

    def test_mark_registered_event(self):
        """Test the registration event."""
        user = self._user(id="user-1")

        user.mark_registered()

        event = user.pull_events()[0]
        assert event.event_name == "user.registered"
        assert event.role == "EMPLOYEE"


class TestPrincipal:
    """Test cases for Principal."""

    def test_admin_principal(self):
        assert Principal(user_id="u1", role=UserRole.ADMIN).is_admin is True

    def test_volunteer_principal(self):
        assert Principal(user_id="u1", role=UserRole.VOLUNTEER).is_admin is False
