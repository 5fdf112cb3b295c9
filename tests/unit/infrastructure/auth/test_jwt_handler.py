"""
Unit tests for JWT token handling and password hashing.
"""

from datetime import datetime, timedelta, timezone

from jose import jwt as jose_jwt

from app.domain.models.user import UserRole
from app.infrastructure.auth.auth_service import JWTAuthService
from app.infrastructure.auth.jwt_handler import JWTHandler


class TestJWTHandler:
    """Test cases for JWTHandler."""

    def setup_method(self):
        """Set up test fixtures."""
        self.handler = JWTHandler("test-secret", expire_minutes=30)

    def test_issue_and_verify(self):
        """Test a fresh token verifies to the same principal."""
        token, expires_at = self.handler.issue("user-1", UserRole.VOLUNTEER)

        principal = self.handler.verify(token)

        assert principal.user_id == "user-1"
        assert principal.role == UserRole.VOLUNTEER
        assert expires_at > datetime.now(timezone.utc)

    def test_bearer_prefix_accepted(self):
        token, _ = self.handler.issue("user-1", UserRole.ADMIN)

        assert self.handler.verify(f"Bearer {token}").is_admin is True

    def test_expired_token(self):
        """Test an expired token is rejected."""
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        token = jose_jwt.encode(
            {"sub": "user-1", "role": "EMPLOYEE", "iat": int(past.timestamp()), "exp": int(past.timestamp())},
            "test-secret",
            algorithm="HS256"
        )

        assert self.handler.verify(token) is None

    def test_wrong_secret(self):
        """Test a token signed with another key is rejected."""
        token, _ = JWTHandler("another-secret").issue("user-1", UserRole.ADMIN)

        assert self.handler.verify(token) is None

    def test_malformed_token(self):
        assert self.handler.verify("not-a-token") is None
        assert self.handler.verify("") is None

    def test_unknown_role(self):
        """Test a signed token with an unknown role is rejected."""
        future = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jose_jwt.encode(
            {"sub": "user-1", "role": "SUPERUSER", "exp": int(future.timestamp())},
            "test-secret",
            algorithm="HS256"
        )

        assert self.handler.decode(token)["sub"] == "user-1"
        assert self.handler.verify(token) is None

    def test_missing_subject(self):
        future = datetime.now(timezone.utc) + timedelta(hours=1)
        token = jose_jwt.encode({"role": "ADMIN", "exp": int(future.timestamp())}, "test-secret", algorithm="HS256")

        assert self.handler.verify(token) is None


class TestJWTAuthService:
    """Test cases for JWTAuthService."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = JWTAuthService(JWTHandler("test-secret"))

    def test_password_hashing(self):
        """Test hashes verify only the original password."""
        hashed = self.service.hash_password("secret123")

        assert hashed != "secret123"
        assert self.service.verify_password("secret123", hashed) is True
        assert self.service.verify_password("wrong", hashed) is False

    def test_empty_hash_never_verifies(self):
        assert self.service.verify_password("secret123", "") is False

    def test_token_round_trip(self):
        token, _ = self.service.issue_token("user-1", UserRole.EMPLOYEE)

        assert self.service.verify_token(token).user_id == "user-1"
