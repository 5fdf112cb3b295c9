"""
User domain model.
Represents a portal user with authentication and profile information.
"""

import re
from dataclasses import dataclass, field
from typing import Optional
from enum import Enum

from app.domain.models.base import (
    BaseEntity,
    Email,
    ValidationError,
    DomainEvent
)


class UserRole(str, Enum):
    """System-wide user roles."""
    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"
    VOLUNTEER = "VOLUNTEER"


# Domain Events

class UserRegisteredEvent(DomainEvent):
    """Event raised when a new user registers."""

    def __init__(self, user_id: Optional[str], email: str, role: UserRole):
        super().__init__()
        self.user_id = user_id
        self.email = email
        self.role = role.value

    @property
    def event_name(self) -> str:
        return "user.registered"


@dataclass(eq=False)
class User(BaseEntity):
    """
    User entity.
    Owns the entries it submits; deleting a user removes its submission history.
    """

    email: Optional[Email] = None
    name: Optional[str] = None
    role: UserRole = UserRole.EMPLOYEE
    department: Optional[str] = None
    phone_number: Optional[str] = None

    # Write-only: never serialized
    password_hash: Optional[str] = field(default=None, repr=False)

    # Read-side statistic, filled in by listings
    entry_count: int = 0

    def __post_init__(self):
        """Initialize user after creation."""
        super().__post_init__()

        # Convert email string to Email value object if needed
        if isinstance(self.email, str):
            self.email = Email(self.email.strip().lower())

        if isinstance(self.role, str) and not isinstance(self.role, UserRole):
            self.role = UserRole(self.role)

    def validate(self) -> None:
        """Validate user state."""
        if self.email is None:
            raise ValidationError("Email is required", "email")

        if not self.name or len(self.name.strip()) < 2:
            raise ValidationError("Name must be at least 2 characters", "name")

        if len(self.name) > 255:
            raise ValidationError("Name too long (max 255 characters)", "name")

        if self.phone_number:
            if len(self.phone_number) > 20:
                raise ValidationError("Phone number too long (max 20 characters)", "phone_number")
            # Digits, spaces, +, -, parentheses
            if not re.match(r'^[\d\s\+\-\(\)]+$', self.phone_number):
                raise ValidationError("Invalid phone number format", "phone_number")

        if self.department and len(self.department) > 100:
            raise ValidationError("Department too long (max 100 characters)", "department")

        if not self.password_hash:
            raise ValidationError("Password is required", "password")

    @property
    def display_name(self) -> str:
        """Get display name (name or email)."""
        return self.name or self.email.local

    @property
    def is_admin(self) -> bool:
        """Check if user is an admin."""
        return self.role == UserRole.ADMIN

    def mark_registered(self) -> None:
        self.add_event(UserRegisteredEvent(self.id, str(self.email), self.role))

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        data = super().to_dict()
        data.pop("password_hash", None)
        return data


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of an operation."""

    user_id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
