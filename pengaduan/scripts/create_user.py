"""
Create a user (e.g. the first admin; /register only creates citizens). Run from project root:
  python -m pengaduan.scripts.create_user NIK NAMA EMAIL PASSWORD [role]
Example:
  python -m pengaduan.scripts.create_user 3201000000000001 "Admin Desa" admin@desa.go.id your-secure-password admin
"""
import argparse
import logging
import sys

from pengaduan.core.config import get_settings
from pengaduan.core.database import Database
from pengaduan.core.errors import AppError
from pengaduan.core.security import PasswordHasher
from pengaduan.models.user import NIK_LENGTH, Role
from pengaduan.services import users

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None, database: Database | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Pengaduan user (admins cannot self-register).")
    parser.add_argument("nik", help=f"National ID ({NIK_LENGTH} characters)")
    parser.add_argument("nama", help="Display name")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help="Password")
    parser.add_argument("role", nargs="?", default=Role.CITIZEN.value, choices=[r.value for r in Role])
    args = parser.parse_args(argv)

    nik = args.nik.strip()
    email = args.email.strip()
    if len(nik) != NIK_LENGTH:
        print(f"NIK must be exactly {NIK_LENGTH} characters.", file=sys.stderr)
        return 1
    if not args.nama.strip() or not email or not args.password:
        print("nama, email and password must be non-empty.", file=sys.stderr)
        return 1

    settings = get_settings()
    db_handle = database or Database(settings.DATABASE_URL)
    db = db_handle.session()
    try:
        if users.email_or_nik_taken(db, email, nik):
            print(f"A user with email '{email}' or that NIK already exists.", file=sys.stderr)
            return 1
        user = users.create_user(
            db,
            nik=nik,
            nama=args.nama.strip(),
            email=email,
            password_hash=PasswordHasher(rounds=settings.BCRYPT_ROUNDS).hash(args.password),
            role=Role(args.role),
        )
        logger.info("Created user id=%s email=%s role=%s", user.id, user.email, user.role)
        return 0
    except AppError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
        if database is None:
            db_handle.dispose()


if __name__ == "__main__":
    sys.exit(main())
