"""
Authentication infrastructure module.
Handles JWT issue and validation and password hashing.
Request dependencies live in ``app.infrastructure.auth.dependencies``.
"""

from .jwt_handler import JWTHandler
from .auth_service import JWTAuthService

__all__ = [
    "JWTHandler",
    "JWTAuthService"
]
