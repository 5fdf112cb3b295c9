"""
Authentication service interface.
Password hashing and credential issue/verification used by the use cases.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple
from datetime import datetime

from app.domain.models.user import Principal, UserRole


class AuthService(ABC):
    """
    Authentication service interface.
    Defines authentication operations for users.
    """

    @abstractmethod
    def hash_password(self, password: str) -> str:
        """
        Hash a password using secure hashing algorithm.
        """
        pass

    @abstractmethod
    def verify_password(self, password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.
        """
        pass

    @abstractmethod
    def issue_token(self, user_id: str, role: UserRole) -> Tuple[str, datetime]:
        """
        Issue a signed credential carrying the user id and role.
        Returns the token and its expiry.
        """
        pass

    @abstractmethod
    def verify_token(self, token: str) -> Optional[Principal]:
        """
        Verify a token. Returns None for a missing, malformed, forged or expired token.
        """
        pass
