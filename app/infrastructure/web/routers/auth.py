"""
Authentication router for user authentication endpoints.
Handles registration, login and the caller's own profile.
"""

from fastapi import APIRouter, status

from app.application.dto.user_dto import (
    AuthResponseDTO,
    LoginRequestDTO,
    RegisterRequestDTO,
    UserResponseDTO
)
from app.application.use_cases.user_use_cases import (
    AuthenticateUserUseCase,
    GetCurrentUserUseCase,
    RegisterUserUseCase
)
from app.infrastructure.auth.dependencies import AppContainer, CurrentPrincipal


router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponseDTO)
async def register(request: RegisterRequestDTO, container: AppContainer):
    """
    Register a new user account.

    - **email**: Valid email address
    - **password**: Password with at least 6 characters
    - **name**: Display name
    - **role**: EMPLOYEE (default) or VOLUNTEER
    - **department**: Optional department
    - **phone_number**: Optional phone number
    """
    use_case = RegisterUserUseCase(container.user_repository, container.auth_service)
    return await use_case.execute(request)


@router.post("/login", response_model=AuthResponseDTO)
async def login(request: LoginRequestDTO, container: AppContainer):
    """
    Authenticate user and return an access token.

    - **email**: User email address
    - **password**: User password
    """
    use_case = AuthenticateUserUseCase(container.user_repository, container.auth_service)
    return await use_case.execute(request)


@router.get("/me", response_model=UserResponseDTO)
async def get_current_user_profile(principal: CurrentPrincipal, container: AppContainer):
    """Get the authenticated user's profile."""
    use_case = GetCurrentUserUseCase(container.user_repository)
    return await use_case.execute(None, principal)
