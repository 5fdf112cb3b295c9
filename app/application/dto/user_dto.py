"""
User DTOs for the application layer.
Data Transfer Objects for registration, login and user administration.
"""

import re
from typing import Optional, List
from datetime import datetime
from pydantic import Field, EmailStr, field_validator

from .base_dto import BaseDTO, RequestDTO, ResponseDTO
from app.domain.models.user import User, UserRole


PHONE_PATTERN = re.compile(r'^[\d\s\+\-\(\)]+$')


# Request DTOs
class RegisterRequestDTO(RequestDTO):
    """DTO for self-registration."""

    email: EmailStr = Field(description="User email address")
    password: str = Field(min_length=6, max_length=128, description="Password")
    name: str = Field(min_length=2, max_length=255, description="Display name")
    role: UserRole = Field(default=UserRole.EMPLOYEE, description="EMPLOYEE or VOLUNTEER")
    department: Optional[str] = Field(default=None, max_length=100, description="Department")
    phone_number: Optional[str] = Field(default=None, max_length=20, description="Phone number")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if len(v.strip()) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v.strip()

    @field_validator("role")
    @classmethod
    def validate_role(cls, v):
        """Administrators are provisioned by an operator, never self-registered."""
        if UserRole(v) == UserRole.ADMIN:
            raise ValueError("Cannot self-register as ADMIN")
        return v

    @field_validator("phone_number")
    @classmethod
    def validate_phone_number(cls, v):
        if v is None or not v.strip():
            return None
        if not PHONE_PATTERN.match(v):
            raise ValueError("Invalid phone number format")
        return v.strip()


class LoginRequestDTO(RequestDTO):
    """DTO for user login."""

    email: EmailStr = Field(description="User email")
    password: str = Field(min_length=1, description="User password")


class ListUsersRequestDTO(RequestDTO):
    """DTO for the admin user listing."""

    role: Optional[UserRole] = Field(default=None, description="Filter by user role")


class DeleteUserRequestDTO(RequestDTO):
    """DTO for deleting a user."""

    user_id: str = Field(min_length=1, description="User to delete")


# Response DTOs
class UserResponseDTO(ResponseDTO):
    """DTO for user data. Never carries the password hash."""

    email: str = Field(description="User email")
    name: str = Field(description="Display name")
    role: UserRole = Field(description="User role")
    department: Optional[str] = Field(default=None, description="Department")
    phone_number: Optional[str] = Field(default=None, description="Phone number")
    entry_count: Optional[int] = Field(default=None, description="Number of entries (admin listings)")

    @classmethod
    def from_domain(cls, user: User, include_entry_count: bool = False) -> "UserResponseDTO":
        return cls(
            id=user.id,
            created_at=user.created_at,
            email=str(user.email),
            name=user.name,
            role=user.role,
            department=user.department,
            phone_number=user.phone_number,
            entry_count=user.entry_count if include_entry_count else None
        )


class UserListResponseDTO(BaseDTO):
    """DTO for the admin user listing."""

    users: List[UserResponseDTO] = Field(default_factory=list)
    total: int = Field(description="Number of users returned")


class AuthResponseDTO(BaseDTO):
    """DTO returned by login and registration."""

    user: UserResponseDTO = Field(description="Authenticated user")
    access_token: str = Field(description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_at: datetime = Field(description="Token expiration time")
