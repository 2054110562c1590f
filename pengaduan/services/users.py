"""Credential store: lookups and inserts over the users table."""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pengaduan.core.errors import ConflictError
from pengaduan.models.user import Role, User

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"


def get_user_by_id(db: Session, user_id: int) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def email_or_nik_taken(db: Session, email: str, nik: str) -> bool:
    """True if any user already has this email or this NIK."""
    return (
        db.query(User.id)
        .filter(or_(User.email == email, User.nik == nik))
        .first()
        is not None
    )


def create_user(
    db: Session,
    *,
    nik: str,
    nama: str,
    email: str,
    password_hash: str,
    telepon: str | None = None,
    alamat: str | None = None,
    role: Role = Role.CITIZEN,
) -> User:
    """
    Insert a user and commit.

    A unique-constraint violation from the database is the authoritative
    duplicate check (two concurrent registrations can both pass a pre-check);
    it is rolled back and raised as ConflictError.
    """
    user = User(
        nik=nik,
        nama=nama,
        email=email,
        password_hash=password_hash,
        telepon=telepon,
        alamat=alamat,
        role=role.value,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if not is_unique_violation(e):
            raise
        logger.info("User insert rejected by unique constraint")
        raise ConflictError() from e
    db.refresh(user)
    return user


def is_unique_violation(error: IntegrityError) -> bool:
    """Recognize a uniqueness violation across PostgreSQL (SQLSTATE 23505) and SQLite."""
    if getattr(error.orig, "pgcode", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    text = str(error.orig).lower()
    return "unique" in text or "duplicate" in text
