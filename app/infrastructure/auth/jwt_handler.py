"""
JWT token handler.
Issues and validates the bearer tokens that carry the caller's user id and role.
"""

import logging
from typing import Optional, Dict, Any, Tuple
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt as jose_jwt

from app.domain.models.user import Principal, UserRole

logger = logging.getLogger(__name__)


class JWTHandler:
    """Handles JWT token issue, validation and principal extraction."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 7 * 24 * 60):
        self.jwt_secret = secret_key
        self.jwt_algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, user_id: str, role: UserRole) -> Tuple[str, datetime]:
        """
        Issue a signed token for a user.

        Returns:
            The token string and its expiry (UTC)
        """
        now = datetime.now(timezone.utc)
        expire = now + timedelta(minutes=self.expire_minutes)

        payload = {
            "sub": user_id,  # Subject (user ID)
            "role": UserRole(role).value,
            "iat": int(now.timestamp()),  # Issued at
            "exp": int(expire.timestamp()),  # Expires at
        }

        token = jose_jwt.encode(
            payload,
            self.jwt_secret,
            algorithm=self.jwt_algorithm
        )

        return token, expire

    def decode(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Verify signature and expiry and return the payload.
        Returns None for any invalid token.
        """
        if not token:
            return None

        # Remove 'Bearer ' prefix if present
        if token.startswith('Bearer '):
            token = token[7:]

        try:
            payload = jose_jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[self.jwt_algorithm],
                options={"verify_exp": True, "verify_aud": False}
            )
        except JWTError as e:
            logger.warning(f"Rejected token: {e}")
            return None

        # Validate required claims
        if not payload.get('sub') or 'exp' not in payload:
            logger.warning("Rejected token: missing sub or exp claim")
            return None

        return payload

    def verify(self, token: str) -> Optional[Principal]:
        """
        Verify a token and return the principal it carries, or None.
        """
        payload = self.decode(token)
        if payload is None:
            return None

        try:
            role = UserRole(payload.get('role'))
        except ValueError:
            logger.warning(f"Rejected token: unknown role {payload.get('role')!r}")
            return None

        return Principal(user_id=str(payload['sub']), role=role)
