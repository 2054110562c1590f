"""Request/response schemas for register, login and profile endpoints."""

from pydantic import BaseModel, Field

from pengaduan.models.user import Role


class RegisterRequest(BaseModel):
    """
    Citizen registration form.

    Fields are optional here so that missing values reach the auth service and
    fail with its own validation message instead of a schema error.
    """

    nik: str | None = Field(default=None, max_length=64, description="16-character national ID")
    nama: str | None = Field(default=None, max_length=255, description="Display name")
    email: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=128)
    telepon: str | None = Field(default=None, max_length=32)
    alamat: str | None = Field(default=None, max_length=2000)


class RegisterResponse(BaseModel):
    success: bool = True
    message: str = "Registration successful."
    user_id: int = Field(..., serialization_alias="userId")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=128)


class PublicUser(BaseModel):
    """User record without the password hash; safe to return to clients."""

    id: int
    nik: str
    nama: str
    email: str
    telepon: str | None = None
    alamat: str | None = None
    role: Role

    class Config:
        from_attributes = True


class CurrentUser(PublicUser):
    """Authenticated user resolved by the authorization gate, injected into handlers."""

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


class LoginResponse(BaseModel):
    """JWT access token and the logged-in user."""

    success: bool = True
    message: str = "Login successful."
    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")
    user: PublicUser


class ProfileResponse(BaseModel):
    success: bool = True
    user: PublicUser
