"""Authentication endpoints."""

from fastapi import APIRouter, status

from scheduler.dependencies import AuthServiceDep
from scheduler.schemas.auth import AuthResponse, LoginRequest, RegisterRequest

router = APIRouter()


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Authentication"],
    summary="Register a new account",
)
async def register(request: RegisterRequest, auth_service: AuthServiceDep) -> AuthResponse:
    """
    Register an account and return a token for it.

    Args:
        request: Name, email, password and optional role
        auth_service: Account service

    Returns:
        Access token and user information
    """
    return await auth_service.register(
        name=request.name,
        email=request.email,
        password=request.password,
        role=request.role,
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Authentication"],
    summary="Log in with email and password",
)
async def login(request: LoginRequest, auth_service: AuthServiceDep) -> AuthResponse:
    """
    Exchange credentials for an access token.

    Args:
        request: Email and password
        auth_service: Account service

    Returns:
        Access token and user information
    """
    return await auth_service.login(email=request.email, password=request.password)
