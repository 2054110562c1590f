"""API routes (mounted under API_PREFIX)."""

from fastapi import APIRouter

from pengaduan.api import auth, complaints, health

router = APIRouter()
router.include_router(health.router, tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(complaints.router, tags=["complaints"])
