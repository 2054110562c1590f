"""ORM model for application users (citizens and administrators)."""

import enum

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from pengaduan.models.base import Base

NIK_LENGTH = 16


class Role(str, enum.Enum):
    """Closed set of roles. Stored as its value in users.role."""

    CITIZEN = "masyarakat"
    ADMIN = "admin"


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    email and nik are unique at the database level; that constraint, not the
    registration pre-check, is what guards concurrent sign-ups.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nik = Column(String(NIK_LENGTH), nullable=False, unique=True, index=True)
    nama = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    telepon = Column(String(32), nullable=True)
    alamat = Column(Text, nullable=True)
    role = Column(String(32), nullable=False, default=Role.CITIZEN.value)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    @property
    def role_enum(self) -> Role:
        return Role(self.role)

    @property
    def is_admin(self) -> bool:
        return self.role_enum is Role.ADMIN
