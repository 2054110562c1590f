"""Shared fixtures for tests: in-memory SQLite app, users and tokens."""

from fastapi.testclient import TestClient

from pengaduan.core.config import Settings
from pengaduan.core.database import Database
from pengaduan.core.security import PasswordHasher, TokenCodec
from pengaduan.main import create_app
from pengaduan.models.user import Role, User
from pengaduan.services import users

TEST_JWT_SECRET = "test-secret-key-for-pengaduan-unit-tests"

BUDI = {
    "nik": "1234567890123456",
    "nama": "Budi",
    "email": "budi@x.com",
    "password": "secret1",
}


def make_settings(**overrides: object) -> Settings:
    """Settings isolated from the environment's .env file."""
    values: dict[str, object] = {
        "APP_ENV": "dev",
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": TEST_JWT_SECRET,
        "BCRYPT_ROUNDS": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_database() -> Database:
    db = Database("sqlite://")
    db.create_all()
    return db


def make_client(settings: Settings | None = None) -> tuple[TestClient, Database]:
    database = make_database()
    app = create_app(settings or make_settings(), database=database)
    return TestClient(app), database


def make_codec() -> TokenCodec:
    return TokenCodec(secret=TEST_JWT_SECRET)


def insert_user(
    database: Database,
    email: str,
    nik: str,
    role: Role = Role.CITIZEN,
    password: str = "password123",
    nama: str = "Test User",
) -> User:
    """Insert a user directly through the credential store (e.g. admins, who cannot self-register)."""
    db = database.session()
    try:
        user = users.create_user(
            db,
            nik=nik,
            nama=nama,
            email=email,
            password_hash=PasswordHasher(rounds=4).hash(password),
            telepon="08123456789",
            role=role,
        )
        db.expunge(user)
        return user
    finally:
        db.close()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def login_token(client: TestClient, email: str, password: str = "password123") -> str:
    res = client.post("/api/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return res.json()["token"]
