"""
Domain models for the HR self-service portal.
This module exports all domain entities and value objects.
"""

# Base classes
from .base import (
    BaseEntity,
    DomainEvent,
    DomainException,
    ValidationError,
    InvalidRangeError,
    BusinessRuleViolation,
    AuthenticationError,
    AuthorizationError,
    InvalidStateError,
    EntityNotFoundError,
    NotFoundError,
    DuplicateEntityError,
    ValueObject,
    Email,
    DateWindow
)

# Domain entities
from .user import (
    User,
    UserRole,
    Principal,
    UserRegisteredEvent
)

from .entry import (
    Entry,
    EntryStatus,
    EntryType,
    WorkHoursEntry,
    ExpenseEntry,
    VacationEntry,
    TravelEntry,
    EntrySubmittedEvent,
    EntryStatusChangedEvent,
    entry_class_for
)

__all__ = [
    # Base classes
    "BaseEntity",
    "DomainEvent",
    "DomainException",
    "ValidationError",
    "InvalidRangeError",
    "BusinessRuleViolation",
    "AuthenticationError",
    "AuthorizationError",
    "InvalidStateError",
    "EntityNotFoundError",
    "NotFoundError",
    "DuplicateEntityError",
    "ValueObject",
    "Email",
    "DateWindow",

    # User
    "User",
    "UserRole",
    "Principal",
    "UserRegisteredEvent",

    # Entry
    "Entry",
    "EntryStatus",
    "EntryType",
    "WorkHoursEntry",
    "ExpenseEntry",
    "VacationEntry",
    "TravelEntry",
    "EntrySubmittedEvent",
    "EntryStatusChangedEvent",
    "entry_class_for",
]
