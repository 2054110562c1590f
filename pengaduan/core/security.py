"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt
from pydantic import BaseModel, ValidationError

from pengaduan.models.user import Role

# Bcrypt cost (rounds) when none is configured.
DEFAULT_BCRYPT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of the secret.
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """
    One-way bcrypt hashing with a fresh salt per digest.

    The digest embeds salt and cost, so changing ``rounds`` never invalidates
    previously stored digests.
    """

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self.rounds = rounds

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Do not store plain passwords."""
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored digest. Returns False on mismatch or a bad digest."""
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False


class TokenError(Exception):
    """Base for token verification failures."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class MalformedTokenError(TokenError):
    """Token cannot be decoded or lacks the expected claims."""


class BadSignatureError(TokenError):
    """Token signature does not match the server secret."""


class TokenExpiredError(TokenError):
    """Token is correctly signed but past its exp claim."""


class TokenClaims(BaseModel):
    """Verified claims carried by an access token."""

    subject_id: int
    email: str
    role: Role
    issued_at: datetime
    expires_at: datetime


class TokenCodec:
    """Issues and verifies signed, time-limited bearer tokens (JWT)."""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int = 10080) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(
        self,
        subject_id: int,
        email: str,
        role: Role | str,
        ttl: timedelta | None = None,
        now: datetime | None = None,
    ) -> str:
        """Create a JWT with sub (user id), email, role, iat and exp."""
        issued = now or datetime.now(UTC)
        expire = issued + (ttl if ttl is not None else timedelta(minutes=self.expire_minutes))
        payload: dict[str, Any] = {
            "sub": str(subject_id),
            "email": email,
            "role": Role(role).value,
            "iat": issued,
            "exp": expire,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a JWT.

        Raises TokenExpiredError, BadSignatureError or MalformedTokenError. The
        signature is checked first, so a forged token never reports as expired.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired.", cause=e) from e
        except jwt.InvalidSignatureError as e:
            raise BadSignatureError("Token signature is invalid.", cause=e) from e
        except jwt.PyJWTError as e:
            raise MalformedTokenError("Token could not be decoded.", cause=e) from e

        try:
            return TokenClaims(
                subject_id=int(payload["sub"]),
                email=payload.get("email") or "",
                role=payload.get("role"),
                issued_at=datetime.fromtimestamp(payload["iat"], UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            )
        except (TypeError, ValueError, ValidationError) as e:
            raise MalformedTokenError("Token payload is invalid.", cause=e) from e
