"""Authentication service: citizen registration and email/password login."""

import logging

from sqlalchemy.orm import Session

from pengaduan.core.errors import ConflictError, InvalidCredentialsError, ValidationError
from pengaduan.core.security import PasswordHasher, TokenCodec
from pengaduan.models.user import NIK_LENGTH, Role, User
from pengaduan.services import users

logger = logging.getLogger(__name__)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class AuthService:
    """Registration and login over the credential store. One instance per request session."""

    def __init__(self, db: Session, hasher: PasswordHasher, codec: TokenCodec) -> None:
        self.db = db
        self.hasher = hasher
        self.codec = codec

    def register(
        self,
        nik: str | None,
        nama: str | None,
        email: str | None,
        password: str | None,
        telepon: str | None = None,
        alamat: str | None = None,
    ) -> int:
        """
        Create a citizen account and return its id.

        Checks, in order: required fields present, NIK length, email/NIK not
        already registered. New accounts are always citizens.
        """
        if any(_is_blank(v) for v in (nik, nama, email, password)):
            raise ValidationError("All required fields must be filled: NIK, nama, email, password.")
        if len(nik) != NIK_LENGTH:
            raise ValidationError(f"NIK must be exactly {NIK_LENGTH} characters.")
        if users.email_or_nik_taken(self.db, email, nik):
            raise ConflictError()

        user = users.create_user(
            self.db,
            nik=nik,
            nama=nama,
            email=email,
            password_hash=self.hasher.hash(password),
            telepon=telepon or None,
            alamat=alamat or None,
            role=Role.CITIZEN,
        )
        logger.info("User registered", extra={"user_id": user.id})
        return user.id

    def login(self, email: str | None, password: str | None) -> tuple[str, User]:
        """
        Verify credentials and issue an access token.

        Unknown email and wrong password raise the same InvalidCredentialsError.
        """
        if _is_blank(email) or _is_blank(password):
            raise ValidationError("Email and password are required.")

        user = users.get_user_by_email(self.db, email)
        if user is None or not self.hasher.verify(password, user.password_hash):
            logger.info("Login failed", extra={"reason": "invalid_credentials"})
            raise InvalidCredentialsError()

        token = self.codec.issue(subject_id=user.id, email=user.email, role=user.role_enum)
        logger.info("Login succeeded", extra={"user_id": user.id})
        return token, user
