"""Python client for the Pengaduan API with a persisted local session."""

from pengaduan.client.api import ApiError, PengaduanClient
from pengaduan.client.session import SessionCache

__all__ = ["ApiError", "PengaduanClient", "SessionCache"]
