"""Async HTTP client for the Pengaduan API, backed by a SessionCache."""

import logging
from typing import Any

import httpx

from pengaduan.client.session import SessionCache

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SEC = 10.0


class ApiError(Exception):
    """Raised when the API answers with a non-2xx status or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class PengaduanClient:
    """
    Client for citizens and admins.

    Attaches the cached token as a Bearer header, stores token and user after
    login, and clears the cache on logout or whenever the server answers 401.
    """

    def __init__(
        self,
        base_url: str,
        session: SessionCache,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "PengaduanClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> dict[str, Any]:
        headers = {}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        try:
            response = await self._client.request(method, path, json=json, headers=headers)
        except httpx.TimeoutException as e:
            raise ApiError("Request timed out.") from e
        except httpx.HTTPError as e:
            raise ApiError(f"Server unreachable: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if response.status_code == 401:
            self.session.clear()
        if response.is_error:
            message = body.get("error") if isinstance(body, dict) else None
            raise ApiError(message or f"Request failed with status {response.status_code}.", response.status_code)
        return body if isinstance(body, dict) else {}

    async def register(
        self,
        nik: str,
        nama: str,
        email: str,
        password: str,
        telepon: str | None = None,
        alamat: str | None = None,
    ) -> int:
        body = await self._request(
            "POST",
            "/register",
            json={
                "nik": nik,
                "nama": nama,
                "email": email,
                "password": password,
                "telepon": telepon,
                "alamat": alamat,
            },
        )
        return body["userId"]

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """Log in and persist the session; returns the user."""
        body = await self._request("POST", "/login", json={"email": email, "password": password})
        self.session.save(body["token"], body["user"])
        return body["user"]

    def logout(self) -> None:
        """Client-side only: the server keeps no session state."""
        self.session.clear()

    async def check_session(self) -> bool:
        """Re-validate a cached session with the server; clears it if the token is no longer accepted."""
        if not self.session.load():
            return False
        try:
            body = await self._request("GET", "/profile")
        except ApiError as e:
            logger.info("Cached session rejected, logging out: %s", e.message)
            self.session.clear()
            return False
        self.session.save(self.session.token, body["user"])
        return True

    async def profile(self) -> dict[str, Any]:
        return (await self._request("GET", "/profile"))["user"]

    async def create_complaint(
        self,
        judul: str,
        isi_laporan: str,
        kategori: str,
        lokasi: str | None = None,
        foto: str | None = None,
    ) -> int:
        body = await self._request(
            "POST",
            "/complaints",
            json={
                "judul": judul,
                "isi_laporan": isi_laporan,
                "kategori": kategori,
                "lokasi": lokasi,
                "foto": foto,
            },
        )
        return body["complaintId"]

    async def my_complaints(self) -> list[dict[str, Any]]:
        return (await self._request("GET", "/my-complaints"))["complaints"]

    async def all_complaints(self) -> list[dict[str, Any]]:
        return (await self._request("GET", "/complaints"))["complaints"]

    async def get_complaint(self, complaint_id: int) -> dict[str, Any]:
        return (await self._request("GET", f"/complaints/{complaint_id}"))["complaint"]

    async def update_status(self, complaint_id: int, status: str, tanggapan: str | None = None) -> None:
        await self._request(
            "PUT",
            f"/complaints/{complaint_id}",
            json={"status": status, "tanggapan": tanggapan},
        )
