"""
Authentication dependencies for FastAPI.
Resolve the calling principal from the bearer token and gate admin routes.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.domain.models.base import AuthenticationError, AuthorizationError
from app.domain.models.user import Principal, UserRole
from app.infrastructure.container import Container

logger = logging.getLogger(__name__)

# Security scheme; missing credentials are reported by get_current_principal
security = HTTPBearer(auto_error=False)


def get_container(request: Request) -> Container:
    """Dependency to get the application container built at startup."""
    return request.app.state.container


async def get_current_principal(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    container: Annotated[Container, Depends(get_container)]
) -> Principal:
    """
    FastAPI dependency to get the authenticated caller.

    The role is taken from the stored user rather than the token, so a token
    for a deleted user or a stale role is never honored.

    Raises:
        AuthenticationError: If the token is missing, invalid, expired, or
            belongs to a user that no longer exists
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    principal = container.auth_service.verify_token(credentials.credentials)
    if principal is None:
        raise AuthenticationError("Invalid or expired token")

    user = await container.user_repository.find_by_id(principal.user_id)
    if user is None:
        logger.warning(f"Token presented for unknown user {principal.user_id}")
        raise AuthenticationError("Invalid or expired token")

    return Principal(user_id=user.id, role=user.role)


async def require_admin(
    principal: Annotated[Principal, Depends(get_current_principal)]
) -> Principal:
    """FastAPI dependency that only lets administrators through."""
    if principal.role != UserRole.ADMIN:
        raise AuthorizationError("Administrator access required")
    return principal


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
AdminPrincipal = Annotated[Principal, Depends(require_admin)]
AppContainer = Annotated[Container, Depends(get_container)]
