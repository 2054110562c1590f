"""Pydantic schemas for complaint endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from pengaduan.models.complaint import Complaint

TITLE_MAX_LENGTH = 255
BODY_MAX_LENGTH = 10_000
LOCATION_MAX_LENGTH = 512
PHOTO_URL_MAX_LENGTH = 2048


class ComplaintCreateRequest(BaseModel):
    """New complaint. judul, isi_laporan and kategori are required (checked by the service)."""

    judul: str | None = Field(default=None, max_length=TITLE_MAX_LENGTH)
    isi_laporan: str | None = Field(default=None, max_length=BODY_MAX_LENGTH)
    lokasi: str | None = Field(default=None, max_length=LOCATION_MAX_LENGTH)
    kategori: str | None = Field(default=None, max_length=32)
    foto: str | None = Field(default=None, max_length=PHOTO_URL_MAX_LENGTH, description="Photo URL")


class ComplaintEditRequest(BaseModel):
    """Partial edit of complaint content; omitted fields are left unchanged."""

    judul: str | None = Field(default=None, max_length=TITLE_MAX_LENGTH)
    isi_laporan: str | None = Field(default=None, max_length=BODY_MAX_LENGTH)
    lokasi: str | None = Field(default=None, max_length=LOCATION_MAX_LENGTH)
    kategori: str | None = Field(default=None, max_length=32)
    foto: str | None = Field(default=None, max_length=PHOTO_URL_MAX_LENGTH)


class ComplaintStatusUpdateRequest(BaseModel):
    status: str | None = None
    tanggapan: str | None = Field(default=None, max_length=BODY_MAX_LENGTH)


class ComplaintOut(BaseModel):
    """Complaint as returned to clients, with denormalized owner fields."""

    id: int
    user_id: int
    judul: str
    isi_laporan: str
    lokasi: str | None = None
    kategori: str
    foto: str | None = None
    status: str
    tanggapan: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user_nama: str | None = None
    user_nik: str | None = None
    user_telepon: str | None = None

    @classmethod
    def from_complaint(
        cls,
        complaint: Complaint,
        include_nik: bool = False,
        include_telepon: bool = False,
    ) -> "ComplaintOut":
        owner = complaint.owner
        return cls(
            id=complaint.id,
            user_id=complaint.user_id,
            judul=complaint.judul,
            isi_laporan=complaint.isi_laporan,
            lokasi=complaint.lokasi,
            kategori=complaint.kategori,
            foto=complaint.foto,
            status=complaint.status,
            tanggapan=complaint.tanggapan,
            created_at=complaint.created_at,
            updated_at=complaint.updated_at,
            user_nama=owner.nama if owner is not None else None,
            user_nik=owner.nik if owner is not None and include_nik else None,
            user_telepon=owner.telepon if owner is not None and include_telepon else None,
        )


class ComplaintCreateResponse(BaseModel):
    success: bool = True
    message: str = "Complaint submitted."
    complaint_id: int = Field(..., serialization_alias="complaintId")


class ComplaintListResponse(BaseModel):
    success: bool = True
    complaints: list[ComplaintOut]


class ComplaintDetailResponse(BaseModel):
    success: bool = True
    complaint: ComplaintOut
