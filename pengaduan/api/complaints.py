"""Complaint endpoints. Every route runs the authorization gate, then the role policy."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pengaduan.api.deps import get_current_user
from pengaduan.core.database import get_db
from pengaduan.schemas.auth import CurrentUser
from pengaduan.schemas.common import ErrorResponse, MessageResponse
from pengaduan.schemas.complaint import (
    ComplaintCreateRequest,
    ComplaintCreateResponse,
    ComplaintDetailResponse,
    ComplaintEditRequest,
    ComplaintListResponse,
    ComplaintOut,
    ComplaintStatusUpdateRequest,
)
from pengaduan.services import complaints as complaint_service
from pengaduan.services.policy import Operation, ensure_access

router = APIRouter()

GATE_ERRORS = {401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}}


@router.post(
    "/complaints",
    response_model=ComplaintCreateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, **GATE_ERRORS},
)
def create_complaint(
    body: ComplaintCreateRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ComplaintCreateResponse:
    """Submit a complaint owned by the current user. Starts in status 'pending'."""
    ensure_access(current_user, Operation.CREATE_COMPLAINT)
    complaint_id = complaint_service.create_complaint(
        db,
        owner_id=current_user.id,
        judul=body.judul,
        isi_laporan=body.isi_laporan,
        kategori=body.kategori,
        lokasi=body.lokasi,
        foto=body.foto,
    )
    return ComplaintCreateResponse(complaint_id=complaint_id)


@router.get("/my-complaints", response_model=ComplaintListResponse, responses=GATE_ERRORS)
def list_my_complaints(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ComplaintListResponse:
    """The current user's complaints, newest first."""
    ensure_access(current_user, Operation.LIST_OWN_COMPLAINTS)
    rows = complaint_service.list_complaints_for_user(db, current_user.id)
    return ComplaintListResponse(complaints=[ComplaintOut.from_complaint(c) for c in rows])


@router.get("/complaints", response_model=ComplaintListResponse, responses=GATE_ERRORS)
def list_all_complaints(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ComplaintListResponse:
    """Every complaint with the owner's name and NIK (admin only)."""
    ensure_access(current_user, Operation.LIST_ALL_COMPLAINTS)
    rows = complaint_service.list_all_complaints(db)
    return ComplaintListResponse(
        complaints=[ComplaintOut.from_complaint(c, include_nik=True) for c in rows]
    )


@router.get(
    "/complaints/{complaint_id}",
    response_model=ComplaintDetailResponse,
    responses={404: {"model": ErrorResponse}, **GATE_ERRORS},
)
def get_complaint(
    complaint_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ComplaintDetailResponse:
    """One complaint; visible to its owner and to administrators."""
    complaint = complaint_service.get_complaint(db, complaint_id)
    ensure_access(current_user, Operation.READ_COMPLAINT, complaint)
    return ComplaintDetailResponse(
        complaint=ComplaintOut.from_complaint(complaint, include_nik=True, include_telepon=True)
    )


@router.put(
    "/complaints/{complaint_id}",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, **GATE_ERRORS},
)
def update_complaint_status(
    complaint_id: int,
    body: ComplaintStatusUpdateRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MessageResponse:
    """Set status and optional response (tanggapan). Admin only."""
    ensure_access(current_user, Operation.UPDATE_COMPLAINT_STATUS)
    complaint_service.update_complaint_status(db, complaint_id, body.status, body.tanggapan)
    return MessageResponse(message="Complaint status updated.")


@router.patch(
    "/complaints/{complaint_id}",
    response_model=ComplaintDetailResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, **GATE_ERRORS},
)
def edit_complaint(
    complaint_id: int,
    body: ComplaintEditRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ComplaintDetailResponse:
    """Edit complaint content. Owner or admin; only fields present in the body change."""
    complaint = complaint_service.get_complaint(db, complaint_id)
    ensure_access(current_user, Operation.EDIT_COMPLAINT, complaint)
    complaint = complaint_service.edit_complaint(db, complaint, body.model_dump(exclude_unset=True))
    return ComplaintDetailResponse(complaint=ComplaintOut.from_complaint(complaint))
