"""SQLAlchemy ORM models."""

from pengaduan.models.base import Base
from pengaduan.models.complaint import Complaint, ComplaintCategory, ComplaintStatus
from pengaduan.models.user import Role, User

__all__ = ["Base", "Complaint", "ComplaintCategory", "ComplaintStatus", "Role", "User"]
