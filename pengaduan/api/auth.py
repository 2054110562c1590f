"""Register, login and profile endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from pengaduan.api.deps import get_auth_service, get_current_user
from pengaduan.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    PublicUser,
    RegisterRequest,
    RegisterResponse,
)
from pengaduan.schemas.common import ErrorResponse
from pengaduan.services.auth import AuthService
from pengaduan.services.policy import Operation, ensure_access

router = APIRouter()


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def register(
    body: RegisterRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> RegisterResponse:
    """Create a citizen account. NIK must be 16 characters; email and NIK must be unused."""
    user_id = auth.register(
        nik=body.nik,
        nama=body.nama,
        email=body.email,
        password=body.password,
        telepon=body.telepon,
        alamat=body.alamat,
    )
    return RegisterResponse(user_id=user_id)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
def login(
    body: LoginRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT access token and the user.
    Include the token in the Authorization header as: Bearer <token>
    """
    token, user = auth.login(body.email, body.password)
    return LoginResponse(token=token, user=PublicUser.model_validate(user))


@router.get(
    "/profile",
    response_model=ProfileResponse,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
def get_profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ProfileResponse:
    """Return the authenticated user's profile."""
    ensure_access(current_user, Operation.READ_PROFILE)
    return ProfileResponse(user=PublicUser.model_validate(current_user.model_dump()))
