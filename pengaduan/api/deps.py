"""Shared FastAPI dependencies: security components, auth service and the authorization gate."""

from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from pengaduan.core.database import get_db
from pengaduan.core.security import PasswordHasher, TokenCodec
from pengaduan.schemas.auth import CurrentUser
from pengaduan.services.auth import AuthService
from pengaduan.services.gate import authenticate_bearer


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> AuthService:
    return AuthService(db, hasher, codec)


def get_current_user(
    db: Annotated[Session, Depends(get_db)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentUser:
    """Dependency: require a valid Bearer JWT and return the current user. Raises 401/403 otherwise."""
    return authenticate_bearer(authorization, codec, db)
