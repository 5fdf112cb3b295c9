"""
Authentication service implementation.
Werkzeug password hashes and JWT bearer tokens.
"""

from datetime import datetime
from typing import Optional, Tuple

from werkzeug.security import check_password_hash, generate_password_hash

from app.domain.models.user import Principal, UserRole
from app.domain.services.auth_service import AuthService
from app.infrastructure.auth.jwt_handler import JWTHandler


class JWTAuthService(AuthService):
    """AuthService backed by werkzeug.security and a JWTHandler."""

    def __init__(self, jwt_handler: JWTHandler):
        self.jwt_handler = jwt_handler

    def hash_password(self, password: str) -> str:
        return generate_password_hash(password)

    def verify_password(self, password: str, hashed_password: str) -> bool:
        if not hashed_password:
            return False
        return check_password_hash(hashed_password, password)

    def issue_token(self, user_id: str, role: UserRole) -> Tuple[str, datetime]:
        return self.jwt_handler.issue(user_id, role)

    def verify_token(self, token: str) -> Optional[Principal]:
        return self.jwt_handler.verify(token)
