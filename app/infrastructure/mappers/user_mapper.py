"""
User mapper for converting between domain entities and database models.
"""

from app.domain.models.user import User, UserRole
from app.infrastructure.db.models import UserModel


class UserMapper:
    """Maps between User domain entity and UserModel database model."""

    def domain_to_model(self, user: User) -> UserModel:
        """Convert User domain entity to UserModel."""
        return UserModel(
            id=user.id,
            email=str(user.email) if user.email else None,
            name=user.name,
            role=user.role,
            department=user.department,
            phone_number=user.phone_number,
            password_hash=user.password_hash,
            created_at=user.created_at
        )

    def model_to_domain(self, model: UserModel, entry_count: int = 0) -> User:
        """Convert UserModel to User domain entity."""
        return User(
            id=model.id,
            email=model.email,
            name=model.name,
            role=UserRole(model.role) if model.role else UserRole.EMPLOYEE,
            department=model.department,
            phone_number=model.phone_number,
            password_hash=model.password_hash,
            entry_count=entry_count,
            created_at=model.created_at
        )
