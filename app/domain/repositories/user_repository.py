"""
User repository interface.
Defines the contract for user data persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Dict

from app.domain.models.user import User, UserRole


class UserRepository(ABC):
    """
    Repository interface for User entities.
    Defines all operations needed for user data persistence.
    """

    @abstractmethod
    async def save(self, user: User) -> User:
        """
        Persist a new user.
        Raises DuplicateEntityError if the email is already registered.
        """
        pass

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        """
        Find a user by their ID.
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """
        Find a user by their email address.
        """
        pass

    @abstractmethod
    async def find_all(self, role: Optional[UserRole] = None) -> List[User]:
        """
        Find all users, newest first, with ``entry_count`` populated.
        """
        pass

    @abstractmethod
    async def count_by_role(self) -> Dict[UserRole, int]:
        """
        Count users per role. Every role is present in the result.
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """
        Delete a user together with all of their entries.
        Raises EntityNotFoundError if the user does not exist.
        """
        pass
