"""
User use cases for the application layer.
Implements registration, login and user administration.
"""

import logging
from typing import Optional

from app.application.use_cases.base_use_case import (
    AuthorizedUseCase, CommandUseCase, QueryUseCase
)
from app.application.dto.user_dto import (
    RegisterRequestDTO, LoginRequestDTO, ListUsersRequestDTO, DeleteUserRequestDTO,
    UserResponseDTO, UserListResponseDTO, AuthResponseDTO
)
from app.domain.models.base import (
    AuthenticationError, BusinessRuleViolation, DuplicateEntityError, EntityNotFoundError
)
from app.domain.models.user import Principal, User, UserRole
from app.domain.repositories.user_repository import UserRepository
from app.domain.services.auth_service import AuthService

logger = logging.getLogger(__name__)


def _auth_response(user: User, auth_service: AuthService) -> AuthResponseDTO:
    token, expires_at = auth_service.issue_token(user.id, user.role)
    return AuthResponseDTO(
        user=UserResponseDTO.from_domain(user),
        access_token=token,
        expires_at=expires_at
    )


class RegisterUserUseCase(CommandUseCase[RegisterRequestDTO, AuthResponseDTO]):
    """Use case for self-registration of a new user."""

    def __init__(self, user_repository: UserRepository, auth_service: AuthService):
        super().__init__()
        self.user_repository = user_repository
        self.auth_service = auth_service

    async def _execute_command_logic(self, request: RegisterRequestDTO, principal: Optional[Principal]) -> AuthResponseDTO:
        # Check if user already exists
        existing_user = await self.user_repository.find_by_email(str(request.email))
        if existing_user:
            raise DuplicateEntityError("User", "email", str(request.email).lower())

        user = User(
            email=str(request.email),
            name=request.name,
            role=UserRole(request.role),
            department=request.department,
            phone_number=request.phone_number,
            password_hash=self.auth_service.hash_password(request.password)
        )
        user.validate()

        saved_user = await self.user_repository.save(user)
        saved_user.mark_registered()
        self._collect_events(saved_user)

        return _auth_response(saved_user, self.auth_service)


class AuthenticateUserUseCase(QueryUseCase[LoginRequestDTO, AuthResponseDTO]):
    """Use case for email/password login."""

    def __init__(self, user_repository: UserRepository, auth_service: AuthService):
        super().__init__()
        self.user_repository = user_repository
        self.auth_service = auth_service

    async def _execute_business_logic(self, request: LoginRequestDTO, principal: Optional[Principal]) -> AuthResponseDTO:
        user = await self.user_repository.find_by_email(str(request.email))

        if user is None or not self.auth_service.verify_password(request.password, user.password_hash or ""):
            logger.warning(f"Failed login attempt for {request.email}")
            raise AuthenticationError("Invalid email or password")

        return _auth_response(user, self.auth_service)


class GetCurrentUserUseCase(AuthorizedUseCase, QueryUseCase[None, UserResponseDTO]):
    """Use case for the caller's own profile."""

    def __init__(self, user_repository: UserRepository):
        super().__init__()
        self.user_repository = user_repository

    async def _execute_business_logic(self, request: None, principal: Principal) -> UserResponseDTO:
        user = await self.user_repository.find_by_id(principal.user_id)
        if user is None:
            raise AuthenticationError("User no longer exists")
        return UserResponseDTO.from_domain(user)


class ListUsersUseCase(AuthorizedUseCase, QueryUseCase[ListUsersRequestDTO, UserListResponseDTO]):
    """Use case for the admin user listing with entry counts."""

    required_role = UserRole.ADMIN

    def __init__(self, user_repository: UserRepository):
        super().__init__()
        self.user_repository = user_repository

    async def _execute_business_logic(self, request: ListUsersRequestDTO, principal: Principal) -> UserListResponseDTO:
        role = UserRole(request.role) if request.role else None
        users = await self.user_repository.find_all(role=role)
        return UserListResponseDTO(
            users=[UserResponseDTO.from_domain(user, include_entry_count=True) for user in users],
            total=len(users)
        )


class DeleteUserUseCase(AuthorizedUseCase, CommandUseCase[DeleteUserRequestDTO, None]):
    """Use case for deleting a user together with their entries."""

    required_role = UserRole.ADMIN

    def __init__(self, user_repository: UserRepository):
        super().__init__()
        self.user_repository = user_repository

    async def _execute_command_logic(self, request: DeleteUserRequestDTO, principal: Principal) -> None:
        if request.user_id == principal.user_id:
            raise BusinessRuleViolation("Administrators cannot delete their own account")

        user = await self.user_repository.find_by_id(request.user_id)
        if user is None:
            raise EntityNotFoundError("User", request.user_id)

        await self.user_repository.delete(request.user_id)
        logger.info(f"User {request.user_id} ({user.email}) deleted by {principal.user_id}")
