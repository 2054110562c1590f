"""Authorization gate: bearer header -> verified, freshly loaded current user."""

import logging

from sqlalchemy.orm import Session

from pengaduan.core.errors import ForbiddenError, UnauthenticatedError
from pengaduan.core.security import TokenCodec, TokenExpiredError, TokenError
from pengaduan.schemas.auth import CurrentUser
from pengaduan.services.users import get_user_by_id

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"

MSG_NO_TOKEN = "Token not supplied. Please log in again."
MSG_BAD_FORMAT = "Invalid token format."
MSG_EXPIRED = "Token expired. Please log in again."
MSG_INVALID = "Invalid token."
MSG_USER_NOT_FOUND = "User not found."


def parse_bearer(authorization: str | None) -> str:
    """Extract the token from an 'Authorization: Bearer <token>' header value."""
    if authorization is None or not authorization.strip():
        raise UnauthenticatedError(MSG_NO_TOKEN)
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        raise UnauthenticatedError(MSG_BAD_FORMAT)
    return parts[1]


def authenticate_bearer(
    authorization: str | None,
    codec: TokenCodec,
    db: Session,
) -> CurrentUser:
    """
    Run the gate for one request.

    The user row is re-read by the token subject so role and profile are current;
    email/role claims in the token are not trusted beyond issuance. Reads only.
    """
    token = parse_bearer(authorization)
    try:
        claims = codec.verify(token)
    except TokenExpiredError as e:
        logger.info("Rejected bearer token", extra={"reason": "expired"})
        raise UnauthenticatedError(MSG_EXPIRED) from e
    except TokenError as e:
        logger.info("Rejected bearer token", extra={"reason": type(e).__name__})
        raise UnauthenticatedError(MSG_INVALID) from e

    user = get_user_by_id(db, claims.subject_id)
    if user is None:
        logger.info("Rejected bearer token", extra={"reason": "user_not_found"})
        raise ForbiddenError(MSG_USER_NOT_FOUND)
    return CurrentUser.model_validate(user)
