"""ORM model for citizen complaints."""

import enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from pengaduan.models.base import Base


class ComplaintStatus(str, enum.Enum):
    """Triage status set by administrators."""

    PENDING = "pending"
    PROCESSING = "diproses"
    RESOLVED = "selesai"
    REJECTED = "ditolak"


class ComplaintCategory(str, enum.Enum):
    INFRASTRUCTURE = "infrastruktur"
    SOCIAL = "sosial"
    ENVIRONMENT = "lingkungan"
    SECURITY = "keamanan"
    OTHER = "lainnya"


class Complaint(Base):
    """
    One complaint submitted by a citizen.

    foto is a URL string only; no attachment storage. updated_at stays null
    until an administrator first changes the status.
    """

    __tablename__ = "complaints"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    judul = Column(String(255), nullable=False)
    isi_laporan = Column(Text, nullable=False)
    lokasi = Column(String(512), nullable=True)
    kategori = Column(String(32), nullable=False)
    foto = Column(String(2048), nullable=True)
    status = Column(
        String(32),
        nullable=False,
        default=ComplaintStatus.PENDING.value,
        index=True,
    )
    tanggapan = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(DateTime(timezone=True), nullable=True)

    owner = relationship("User", lazy="joined")
