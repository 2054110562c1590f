"""Pydantic request/response schemas."""

from pengaduan.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    PublicUser,
    RegisterRequest,
    RegisterResponse,
)
from pengaduan.schemas.common import ErrorResponse, MessageResponse
from pengaduan.schemas.complaint import (
    ComplaintCreateRequest,
    ComplaintCreateResponse,
    ComplaintDetailResponse,
    ComplaintEditRequest,
    ComplaintListResponse,
    ComplaintOut,
    ComplaintStatusUpdateRequest,
)
from pengaduan.schemas.health import HealthResponse

__all__ = [
    "ComplaintCreateRequest",
    "ComplaintCreateResponse",
    "ComplaintDetailResponse",
    "ComplaintEditRequest",
    "ComplaintListResponse",
    "ComplaintOut",
    "ComplaintStatusUpdateRequest",
    "CurrentUser",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "ProfileResponse",
    "PublicUser",
    "RegisterRequest",
    "RegisterResponse",
]
