"""Complaint record access: create, list, fetch, triage and edit complaints."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from pengaduan.core.errors import NotFoundError, ValidationError
from pengaduan.models.complaint import Complaint, ComplaintCategory, ComplaintStatus

logger = logging.getLogger(__name__)

VALID_CATEGORIES = tuple(c.value for c in ComplaintCategory)
VALID_STATUSES = tuple(s.value for s in ComplaintStatus)

# Content fields an owner may change after submission.
EDITABLE_FIELDS = ("judul", "isi_laporan", "lokasi", "kategori", "foto")


def _validate_category(kategori: str) -> None:
    if kategori not in VALID_CATEGORIES:
        raise ValidationError(
            f"Invalid category. Choose one of: {', '.join(VALID_CATEGORIES)}."
        )


def create_complaint(
    db: Session,
    owner_id: int,
    judul: str | None,
    isi_laporan: str | None,
    kategori: str | None,
    lokasi: str | None = None,
    foto: str | None = None,
) -> int:
    """Insert a pending complaint owned by owner_id; return its id."""
    if not judul or not isi_laporan or not kategori:
        raise ValidationError("Title (judul), report (isi_laporan) and category (kategori) are required.")
    _validate_category(kategori)

    complaint = Complaint(
        user_id=owner_id,
        judul=judul,
        isi_laporan=isi_laporan,
        kategori=kategori,
        lokasi=lokasi or None,
        foto=foto or None,
        status=ComplaintStatus.PENDING.value,
    )
    db.add(complaint)
    db.commit()
    db.refresh(complaint)
    logger.info("Complaint created", extra={"complaint_id": complaint.id, "user_id": owner_id})
    return complaint.id


def list_complaints_for_user(db: Session, user_id: int) -> list[Complaint]:
    """Complaints owned by user_id, newest first."""
    return (
        db.query(Complaint)
        .filter(Complaint.user_id == user_id)
        .order_by(Complaint.created_at.desc(), Complaint.id.desc())
        .all()
    )


def list_all_complaints(db: Session) -> list[Complaint]:
    """Every complaint, newest first."""
    return (
        db.query(Complaint)
        .order_by(Complaint.created_at.desc(), Complaint.id.desc())
        .all()
    )


def get_complaint(db: Session, complaint_id: int) -> Complaint:
    complaint = db.query(Complaint).filter(Complaint.id == complaint_id).first()
    if complaint is None:
        raise NotFoundError("Complaint not found.")
    return complaint


def update_complaint_status(
    db: Session,
    complaint_id: int,
    status: str | None,
    tanggapan: str | None = None,
) -> Complaint:
    """
    Set status and admin response (tanggapan) and stamp updated_at.

    An omitted tanggapan clears any previous response.
    """
    if not status or status not in VALID_STATUSES:
        raise ValidationError(
            f"Invalid status. Choose one of: {', '.join(VALID_STATUSES)}."
        )
    complaint = get_complaint(db, complaint_id)
    previous = complaint.status
    complaint.status = status
    complaint.tanggapan = tanggapan or None
    complaint.updated_at = datetime.now(UTC)
    db.commit()
    db.refresh(complaint)
    logger.info(
        "Complaint status updated",
        extra={"complaint_id": complaint.id, "from_status": previous, "to_status": status},
    )
    return complaint


def edit_complaint(db: Session, complaint: Complaint, changes: dict[str, str | None]) -> Complaint:
    """Apply content changes; keys outside EDITABLE_FIELDS are ignored. Required fields may not be blanked."""
    updates = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}
    for required in ("judul", "isi_laporan", "kategori"):
        if required in updates and not updates[required]:
            raise ValidationError(f"{required} cannot be empty.")
    if "kategori" in updates:
        _validate_category(updates["kategori"])
    for field, value in updates.items():
        setattr(complaint, field, value or None)
    db.commit()
    db.refresh(complaint)
    logger.info("Complaint edited", extra={"complaint_id": complaint.id, "fields": sorted(updates)})
    return complaint
