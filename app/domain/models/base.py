"""
Base entity, value objects and domain exceptions.
This module contains the foundational classes for all domain entities.
"""

from datetime import datetime, date
from typing import Optional, Any, Dict
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
import uuid


class DomainEvent(ABC):
    """Base class for domain events."""

    def __init__(self):
        self.occurred_at = datetime.utcnow()
        self.event_id = str(uuid.uuid4())

    @property
    @abstractmethod
    def event_name(self) -> str:
        """Return the name of the event."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary."""
        return {
            "event_id": self.event_id,
            "event_name": self.event_name,
            "occurred_at": self.occurred_at.isoformat(),
            "data": {
                key: value for key, value in self.__dict__.items()
                if key not in ("event_id", "occurred_at")
            }
        }


@dataclass
class BaseEntity(ABC):
    """
    Base class for all domain entities.
    The id is an opaque string assigned by the store when the entity is first saved.
    """

    id: Optional[str] = None
    created_at: Optional[datetime] = None

    # Domain events
    _events: list = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self):
        """Initialize entity after creation."""
        if self.created_at is None:
            self.created_at = datetime.utcnow()

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and are of the same type."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        if self.id is None:
            return hash(id(self))
        return hash((self.__class__.__name__, self.id))

    def add_event(self, event: DomainEvent) -> None:
        """Add a domain event."""
        self._events.append(event)

    def pull_events(self) -> list:
        """Get and clear all domain events."""
        events = self._events.copy()
        self._events.clear()
        return events

    @property
    def is_new(self) -> bool:
        """Check if entity is new (not persisted)."""
        return self.id is None

    def validate(self) -> None:
        """
        Validate the entity's state.
        Should be overridden by subclasses to implement specific validation rules.
        Raises ValidationError if the entity is in an invalid state.
        """
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary representation."""
        data = {}
        for key, value in self.__dict__.items():
            if key.startswith('_'):
                continue
            if isinstance(value, (datetime, date)):
                data[key] = value.isoformat()
            elif isinstance(value, Enum):
                data[key] = value.value
            elif isinstance(value, ValueObject):
                data[key] = str(value)
            else:
                data[key] = value
        return data


class DomainException(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DomainException):
    """Exception raised when entity or input validation fails."""

    def __init__(self, message: str, field: Optional[str] = None, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code)
        self.field = field


class InvalidRangeError(ValidationError):
    """Exception raised when a date range ends before it starts."""

    def __init__(self, start: date, end: date, field: str = "end_date"):
        super().__init__(
            f"End date {end.isoformat()} is before start date {start.isoformat()}",
            field,
            "INVALID_RANGE"
        )
        self.start = start
        self.end = end


class BusinessRuleViolation(DomainException):
    """Exception raised when a business rule is violated."""

    def __init__(self, message: str):
        super().__init__(message, "BUSINESS_RULE_VIOLATION")


class AuthenticationError(DomainException):
    """Exception raised when the caller has no valid credential."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, "AUTHENTICATION_REQUIRED")


class AuthorizationError(DomainException):
    """Exception raised when an authenticated caller lacks the required role."""

    def __init__(self, message: str = "You don't have permission to perform this action"):
        super().__init__(message, "FORBIDDEN")


class InvalidStateError(DomainException):
    """Exception raised when a state transition is attempted from the wrong state."""

    def __init__(self, message: str):
        super().__init__(message, "INVALID_STATE")


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, "NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


NotFoundError = EntityNotFoundError


class DuplicateEntityError(DomainException):
    """Exception raised when trying to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: Any):
        message = f"{entity_type} with {field}='{value}' already exists"
        super().__init__(message, "DUPLICATE_ENTITY")
        self.entity_type = entity_type
        self.field = field
        self.value = value


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.
    Value objects are immutable and are compared by their values.
    """

    def __post_init__(self):
        """Validate value object after creation."""
        self.validate()

    @abstractmethod
    def validate(self) -> None:
        """Validate the value object's state."""
        pass


# Common value objects

@dataclass(frozen=True)
class Email(ValueObject):
    """Email value object with validation."""

    value: str

    def validate(self) -> None:
        """Validate email format."""
        if not self.value:
            raise ValidationError("Email cannot be empty", "email")

        # Basic email validation
        if '@' not in self.value or '.' not in self.value.split('@')[1]:
            raise ValidationError(f"Invalid email format: {self.value}", "email")

        if len(self.value) > 255:
            raise ValidationError("Email too long (max 255 characters)", "email")

    def __str__(self) -> str:
        return self.value

    @property
    def domain(self) -> str:
        """Get the domain part of the email."""
        return self.value.split('@')[1]

    @property
    def local(self) -> str:
        """Get the local part of the email."""
        return self.value.split('@')[0]


@dataclass(frozen=True)
class DateWindow(ValueObject):
    """Inclusive, date-only range used for aggregation and filtering."""

    start: date
    end: date

    def validate(self) -> None:
        """Validate window bounds."""
        if self.end < self.start:
            raise InvalidRangeError(self.start, self.end, "end")

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end

    @property
    def days(self) -> int:
        """Number of calendar days in the window."""
        return (self.end - self.start).days + 1

    def overlaps(self, start: date, end: date) -> bool:
        """Check if [start, end] shares at least one day with this window."""
        return start <= self.end and end >= self.start

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat()
        }
